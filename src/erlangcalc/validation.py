# src/erlangcalc/validation.py
from __future__ import annotations

import logging

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from .errors import InvalidInput

logger = logging.getLogger(__name__)

REQUIRED_INTERVAL_COLUMNS = {"interval_start", "interval_minutes", "volume", "aht_seconds", "is_open"}

FLAG_COLUMNS = [
    "flag_volume_negative",
    "flag_aht_nonpositive",
    "flag_interval_nonpositive",
    "flag_open_with_zero_volume",
]

_TRUTHY = {"1", "true", "t", "yes", "y"}


def parse_is_open(values: pd.Series) -> pd.Series:
    """
    Coerce an is_open column to bool.

    Booleans pass through, numbers are open when non-zero, anything else
    (object or pandas str dtype) is open only for 1/true/t/yes/y.
    Missing values count as closed.
    """
    if is_bool_dtype(values):
        return values.fillna(False).astype(bool)
    if is_numeric_dtype(values):
        return pd.to_numeric(values, errors="coerce").fillna(0).ne(0)
    return values.astype(str).str.strip().str.lower().isin(_TRUTHY).astype(bool)


def normalize_interval_df(df: pd.DataFrame) -> pd.DataFrame:
    """
    Typed copy of an interval frame: datetime interval_start, float
    interval_minutes/volume/aht_seconds, bool is_open, fresh RangeIndex.

    Minutes stay float so that 7.5-minute intervals are not truncated.
    """
    out = df.copy()
    out["interval_start"] = pd.to_datetime(out["interval_start"], errors="coerce")
    for col in ("interval_minutes", "volume", "aht_seconds"):
        out[col] = pd.to_numeric(out[col], errors="coerce").astype(float)
    out["is_open"] = parse_is_open(out["is_open"])
    return out.reset_index(drop=True)


def validate_interval_df(df: pd.DataFrame) -> None:
    """Raise InvalidInput unless df can be staffed row by row."""
    missing = REQUIRED_INTERVAL_COLUMNS - set(df.columns)
    if missing:
        raise InvalidInput(
            f"Interval dataframe missing required columns: {sorted(missing)}. "
            f"Expected: {sorted(REQUIRED_INTERVAL_COLUMNS)}"
        )

    if df.empty:
        raise InvalidInput("Interval dataframe is empty")

    minutes = pd.to_numeric(df["interval_minutes"], errors="coerce")
    if minutes.isna().any():
        raise InvalidInput("interval_minutes must be numeric")
    if (minutes <= 0).any():
        raise InvalidInput("interval_minutes must be > 0 for all rows")

    if pd.to_numeric(df["volume"], errors="coerce").isna().any():
        raise InvalidInput("volume must be numeric")

    if pd.to_numeric(df["aht_seconds"], errors="coerce").isna().any():
        raise InvalidInput("aht_seconds must be numeric")

    # ensure interval_start is parseable
    parsed = pd.to_datetime(df["interval_start"], errors="coerce")
    if parsed.isna().any():
        bad = df.index[parsed.isna()].tolist()[:10]
        raise InvalidInput(f"interval_start has invalid timestamps. Example bad rows: {bad}")


def validate_intervals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Row-level data quality flags. Never raises on bad values; returns a copy of
    df with one boolean column per check plus `has_issue`.
    """
    missing = REQUIRED_INTERVAL_COLUMNS - set(df.columns)
    if missing:
        raise InvalidInput(f"Interval dataframe missing required columns: {sorted(missing)}")

    out = df.copy()
    volume = pd.to_numeric(out["volume"], errors="coerce")
    aht = pd.to_numeric(out["aht_seconds"], errors="coerce")
    minutes = pd.to_numeric(out["interval_minutes"], errors="coerce")
    is_open = parse_is_open(out["is_open"])

    out["flag_volume_negative"] = (volume < 0).fillna(False).astype(bool)
    out["flag_aht_nonpositive"] = (aht <= 0).fillna(False).astype(bool)
    out["flag_interval_nonpositive"] = (minutes <= 0).fillna(False).astype(bool)
    out["flag_open_with_zero_volume"] = (is_open & (volume == 0)).astype(bool)
    out["has_issue"] = out[FLAG_COLUMNS].any(axis=1)

    n_bad = int(out["has_issue"].sum())
    if n_bad:
        logger.warning("%d of %d intervals flagged by validation", n_bad, len(out))
    return out


__all__ = [
    "REQUIRED_INTERVAL_COLUMNS",
    "FLAG_COLUMNS",
    "parse_is_open",
    "normalize_interval_df",
    "validate_interval_df",
    "validate_intervals",
]
