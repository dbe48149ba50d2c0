# src/erlangcalc/intervals.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from .staffing import StaffingInputs, TargetType, compute_required_agents, result_to_dict
from .validation import normalize_interval_df, validate_interval_df

logger = logging.getLogger(__name__)


def staffing_table(
    interval_df: pd.DataFrame,
    *,
    target_type: TargetType = "service_level",
    service_level_target: float = 0.80,
    service_level_time_seconds: float = 20.0,
    asa_target_seconds: float = 30.0,
    shrinkage: float = 0.0,
    occupancy_target: Optional[float] = None,
    max_agents: Optional[int] = None,
) -> pd.DataFrame:
    """
    Staff every interval of interval_df against one target.

    Returns the input columns plus erlangs, required_on_phone,
    required_scheduled, service_level, asa_seconds and occupancy.
    """
    validate_interval_df(interval_df)
    df = normalize_interval_df(interval_df)

    rows: List[Dict[str, Any]] = []
    for r in df.itertuples(index=False):
        inputs = StaffingInputs(
            volume=float(r.volume),
            aht_seconds=float(r.aht_seconds),
            interval_minutes=float(r.interval_minutes),
            is_open=bool(r.is_open),
            target_type=target_type,
            service_level_target=float(service_level_target),
            service_level_time_seconds=float(service_level_time_seconds),
            asa_target_seconds=float(asa_target_seconds),
            occupancy_target=float(occupancy_target) if occupancy_target is not None else None,
            shrinkage=float(shrinkage),
        )
        rows.append(result_to_dict(compute_required_agents(inputs, max_agents=max_agents)))

    out = pd.concat([df, pd.DataFrame(rows)], axis=1)
    logger.info(
        "staffed %d intervals (%d open), peak on-phone %d",
        len(out),
        int(out["is_open"].sum()),
        int(out["required_on_phone"].max()),
    )
    return out


__all__ = ["staffing_table"]
