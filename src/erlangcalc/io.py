# src/erlangcalc/io.py
from __future__ import annotations

import logging

import pandas as pd

from .errors import InvalidInput
from .validation import normalize_interval_df, validate_interval_df

logger = logging.getLogger(__name__)


def read_interval_csv(file) -> pd.DataFrame:
    """
    Read an interval staffing CSV (path or file-like) with columns
    interval_start, interval_minutes, volume, aht_seconds, is_open.

    The frame goes through validate_interval_df, so unreadable files, missing
    columns, blank numbers and bad timestamps all surface as InvalidInput.
    Returns the normalized frame sorted by interval_start.
    """
    try:
        raw = pd.read_csv(file)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise InvalidInput(f"Could not parse interval CSV: {e}") from e

    validate_interval_df(raw)
    df = normalize_interval_df(raw)

    logger.debug("read %d intervals (%d open)", len(df), int(df["is_open"].sum()))
    return df.sort_values("interval_start").reset_index(drop=True)


__all__ = ["read_interval_csv"]
