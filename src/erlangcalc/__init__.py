# src/erlangcalc/__init__.py
from __future__ import annotations

import logging

# -----------------------------
# Errors / config
# -----------------------------
from .errors import (
    ErlangError,
    InvalidInput,
    Unstable,
    SearchExhausted,
    ConfigError,
)

from .config import (
    Settings,
    load_settings,
    get_settings,
    configure_logging,
)

# -----------------------------
# Erlang B / C core
# -----------------------------
from .erlang import (
    intensity,
    erlang_b,
    erlang_c,
    service_level,
    avg_wait_time,
    occupancy,
)

# -----------------------------
# Staffing
# -----------------------------
from .staffing import (
    TargetType,
    StaffingInputs,
    StaffingResult,
    number_of_agents_for_sl,
    number_of_agents_for_asa,
    scheduled_agents,
    compute_required_agents,
    result_to_dict,
)

# -----------------------------
# Interval tables / Monte Carlo
# -----------------------------
from .io import read_interval_csv
from .validation import normalize_interval_df, parse_is_open, validate_interval_df, validate_intervals
from .intervals import staffing_table
from .monte_carlo import (
    MonteCarloConfig,
    run_interval_monte_carlo,
    VolumeDist,
    AHTDist,
    MAX_TOTAL_SIMS,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    "ErlangError",
    "InvalidInput",
    "Unstable",
    "SearchExhausted",
    "ConfigError",
    # Config
    "Settings",
    "load_settings",
    "get_settings",
    "configure_logging",
    # Erlang
    "intensity",
    "erlang_b",
    "erlang_c",
    "service_level",
    "avg_wait_time",
    "occupancy",
    # Staffing
    "TargetType",
    "StaffingInputs",
    "StaffingResult",
    "number_of_agents_for_sl",
    "number_of_agents_for_asa",
    "scheduled_agents",
    "compute_required_agents",
    "result_to_dict",
    # Intervals
    "read_interval_csv",
    "parse_is_open",
    "normalize_interval_df",
    "validate_interval_df",
    "validate_intervals",
    "staffing_table",
    # Monte Carlo
    "MonteCarloConfig",
    "run_interval_monte_carlo",
    "VolumeDist",
    "AHTDist",
    "MAX_TOTAL_SIMS",
]
