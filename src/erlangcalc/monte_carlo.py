# src/erlangcalc/monte_carlo.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, TypeAlias

import numpy as np
import pandas as pd

from .errors import InvalidInput
from .staffing import StaffingInputs, TargetType, compute_required_agents
from .validation import normalize_interval_df, validate_interval_df

logger = logging.getLogger(__name__)

VolumeDist: TypeAlias = Literal["poisson", "normal", "lognormal"]
AHTDist: TypeAlias = Literal["normal", "lognormal"]

MAX_TOTAL_SIMS: int = 150_000

_QUANTILES = {"p50": 0.50, "p90": 0.90, "p95": 0.95}


@dataclass(frozen=True)
class MonteCarloConfig:
    n_sims: int = 1000
    seed: int = 42
    volume_dist: VolumeDist = "poisson"
    volume_cv: float = 0.15
    aht_dist: AHTDist = "lognormal"
    aht_cv: float = 0.10


# -----------------------------
# Random draws
# -----------------------------
def _lognormal_params(mean: float, cv: float) -> tuple[float, float]:
    # mu/sigma of the underlying normal for a lognormal with this mean and CV
    cv2 = max(float(cv), 1e-9) ** 2
    sigma = float(np.sqrt(np.log1p(cv2)))
    mu = float(np.log(mean) - 0.5 * np.log1p(cv2))
    return mu, sigma


def _draw_volume(base_volume: float, dist: VolumeDist, n: int, rng: np.random.Generator, cv: float) -> np.ndarray:
    v = max(float(base_volume), 0.0)

    if dist == "poisson":
        draws = rng.poisson(lam=v, size=n).astype(float)
    elif dist == "normal":
        draws = rng.normal(loc=v, scale=max(float(cv), 1e-9) * max(v, 1e-9), size=n)
    elif dist == "lognormal":
        mu, sigma = _lognormal_params(max(v, 1e-9), cv)
        draws = rng.lognormal(mean=mu, sigma=sigma, size=n)
    else:
        raise InvalidInput(f"Unsupported volume distribution: {dist}")

    return np.clip(draws, 0.0, None)


def _draw_aht(base_aht_seconds: float, dist: AHTDist, n: int, rng: np.random.Generator, cv: float) -> np.ndarray:
    a = max(float(base_aht_seconds), 1.0)

    if dist == "lognormal":
        mu, sigma = _lognormal_params(a, cv)
        draws = rng.lognormal(mean=mu, sigma=sigma, size=n)
    elif dist == "normal":
        draws = rng.normal(loc=a, scale=max(float(cv), 1e-9) * a, size=n)
    else:
        raise InvalidInput(f"Unsupported AHT distribution: {dist}")

    return np.clip(draws, 1.0, None)


# -----------------------------
# One interval
# -----------------------------
def _summary(prefix: str, values: np.ndarray) -> Dict[str, float]:
    out = {f"{prefix}_mean": float(np.mean(values))}
    for name, q in _QUANTILES.items():
        out[f"{prefix}_{name}"] = float(np.quantile(values, q))
    return out


def _simulate_interval(
    *,
    row_index: int,
    base_volume: float,
    base_aht_seconds: float,
    interval_minutes: float,
    is_open: bool,
    cfg: MonteCarloConfig,
    simulate_volume: bool,
    simulate_aht: bool,
    target_type: TargetType,
    service_level_target: float,
    service_level_time_seconds: float,
    asa_target_seconds: float,
    shrinkage: float,
    occupancy_target: Optional[float],
    max_agents: Optional[int],
) -> Dict[str, Any]:
    n_sims = int(cfg.n_sims)

    if not is_open or float(base_volume) <= 0.0:
        zeros = np.zeros(1)
        return {
            **_summary("scheduled", zeros),
            **_summary("on_phone", zeros),
            "asa_mean": 0.0,
            "occ_mean": 0.0,
        }

    # Deterministic per interval but not identical everywhere
    rng = np.random.default_rng([int(cfg.seed), int(row_index)])

    vol_draws = (
        _draw_volume(base_volume, cfg.volume_dist, n_sims, rng, cfg.volume_cv)
        if simulate_volume
        else np.full(n_sims, float(base_volume))
    )
    aht_draws = (
        _draw_aht(base_aht_seconds, cfg.aht_dist, n_sims, rng, cfg.aht_cv)
        if simulate_aht
        else np.full(n_sims, float(base_aht_seconds))
    )

    scheduled = np.empty(n_sims, dtype=float)
    on_phone = np.empty(n_sims, dtype=float)
    asa_vals = np.empty(n_sims, dtype=float)
    occ_vals = np.empty(n_sims, dtype=float)

    for i in range(n_sims):
        inputs = StaffingInputs(
            volume=float(vol_draws[i]),
            aht_seconds=float(aht_draws[i]),
            interval_minutes=float(interval_minutes),
            is_open=True,
            target_type=target_type,
            service_level_target=service_level_target,
            service_level_time_seconds=service_level_time_seconds,
            asa_target_seconds=asa_target_seconds,
            occupancy_target=occupancy_target,
            shrinkage=shrinkage,
        )
        res = compute_required_agents(inputs, max_agents=max_agents)

        scheduled[i] = res.required_scheduled
        on_phone[i] = res.required_on_phone
        asa_vals[i] = res.achieved_asa_seconds
        occ_vals[i] = res.achieved_occupancy

    return {
        **_summary("scheduled", scheduled),
        **_summary("on_phone", on_phone),
        "asa_mean": float(np.mean(asa_vals)),
        "occ_mean": float(np.mean(occ_vals)),
    }


# -----------------------------
# Public API
# -----------------------------
def run_interval_monte_carlo(
    *,
    interval_df: pd.DataFrame,
    cfg: MonteCarloConfig,
    simulate_volume: bool = True,
    simulate_aht: bool = False,
    target_type: TargetType = "service_level",
    service_level_target: float = 0.80,
    service_level_time_seconds: float = 60.0,
    asa_target_seconds: float = 30.0,
    shrinkage: float = 0.30,
    occupancy_target: Optional[float] = 0.85,
    max_agents: Optional[int] = None,
) -> pd.DataFrame:
    """
    Staff each interval under random volume and/or AHT draws.

    Returns the interval columns plus mean and P50/P90/P95 of scheduled and
    on-phone agents, mean ASA and mean occupancy per interval.
    """
    validate_interval_df(interval_df)

    if int(cfg.n_sims) <= 0:
        raise InvalidInput("cfg.n_sims must be > 0")
    total = int(cfg.n_sims) * len(interval_df)
    if total > MAX_TOTAL_SIMS:
        raise InvalidInput(
            f"n_sims * intervals = {total} exceeds MAX_TOTAL_SIMS={MAX_TOTAL_SIMS}; lower n_sims or split the day"
        )

    df = normalize_interval_df(interval_df)

    rows = [
        _simulate_interval(
            row_index=i,
            base_volume=float(r.volume),
            base_aht_seconds=float(r.aht_seconds),
            interval_minutes=float(r.interval_minutes),
            is_open=bool(r.is_open),
            cfg=cfg,
            simulate_volume=bool(simulate_volume),
            simulate_aht=bool(simulate_aht),
            target_type=target_type,
            service_level_target=float(service_level_target),
            service_level_time_seconds=float(service_level_time_seconds),
            asa_target_seconds=float(asa_target_seconds),
            shrinkage=float(shrinkage),
            occupancy_target=float(occupancy_target) if occupancy_target is not None else None,
            max_agents=max_agents,
        )
        for i, r in enumerate(df.itertuples(index=False))
    ]

    logger.info("monte carlo: %d intervals x %d draws (seed=%d)", len(df), int(cfg.n_sims), int(cfg.seed))
    return pd.concat([df, pd.DataFrame(rows)], axis=1)


__all__ = [
    "VolumeDist",
    "AHTDist",
    "MAX_TOTAL_SIMS",
    "MonteCarloConfig",
    "run_interval_monte_carlo",
]
