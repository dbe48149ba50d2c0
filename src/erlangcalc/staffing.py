# src/erlangcalc/staffing.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Optional, TypeAlias

from .config import get_settings
from .checks import require_count, require_non_negative, require_real
from .erlang import avg_wait_time, intensity, occupancy, service_level
from .errors import InvalidInput, SearchExhausted

logger = logging.getLogger(__name__)

TargetType: TypeAlias = Literal["service_level", "asa"]


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class StaffingInputs:
    volume: float
    aht_seconds: float
    interval_minutes: float
    is_open: bool

    # Target definition
    target_type: TargetType
    service_level_target: float
    service_level_time_seconds: float
    asa_target_seconds: float

    # Constraints / adjustments
    occupancy_target: Optional[float] = None
    shrinkage: float = 0.0


@dataclass(frozen=True)
class StaffingResult:
    offered_load_erlangs: float
    required_on_phone: int
    required_scheduled: int
    achieved_service_level: float
    achieved_asa_seconds: float
    achieved_occupancy: float


# -----------------------------
# Search
# -----------------------------
def _search_bound(a: float, max_agents: Optional[int]) -> int:
    if max_agents is None:
        return int(math.ceil(a)) + get_settings().search_headroom
    return require_count("max_agents", max_agents, 1)


def _smallest_stable(a: float) -> int:
    # smallest integer strictly above the load
    return int(math.floor(a)) + 1


def _scan(meets: Callable[[int], bool], *, start: int, max_agents: int, goal: str) -> int:
    """
    Linear scan n = start, start+1, ... for the first n where meets(n) holds.

    Service level only rises and ASA only falls as agents are added, so the
    first hit is the minimum.
    """
    n = start
    while n <= max_agents:
        if meets(n):
            logger.debug("%s met with %d agents (scan started at %d)", goal, n, start)
            return n
        n += 1

    logger.warning("%s not met by any agent count in [%d, %d]", goal, start, max_agents)
    raise SearchExhausted(
        f"Could not meet {goal} with up to max_agents={max_agents} (search started at {start})",
        max_agents=max_agents,
    )


def number_of_agents_for_sl(
    arrival_rate: float,
    avg_handle_time: float,
    interval_length: float,
    wait_time: float,
    service_level_goal: float,
    *,
    max_agents: Optional[int] = None,
) -> int:
    """
    Minimum number of agents N > A with service_level(N, ...) >= service_level_goal.

    max_agents defaults to ceil(A) + Settings.search_headroom.
    """
    a = intensity(arrival_rate, avg_handle_time, interval_length)
    t = require_non_negative("wait_time", wait_time)
    goal = require_real("service_level_goal", service_level_goal)
    if not (0.0 <= goal <= 1.0):
        raise InvalidInput(f"service_level_goal must be in [0, 1], got {service_level_goal!r}")
    bound = _search_bound(a, max_agents)

    if goal >= 1.0:
        raise SearchExhausted(
            "A service level of 1.0 is only approached, never reached, with a finite number of agents",
            max_agents=bound,
        )

    def meets(n: int) -> bool:
        return service_level(n, arrival_rate, avg_handle_time, interval_length, t) >= goal

    return _scan(meets, start=_smallest_stable(a), max_agents=bound, goal=f"service level {goal:g} at t={t:g}")


def number_of_agents_for_asa(
    arrival_rate: float,
    avg_handle_time: float,
    interval_length: float,
    wait_time: float,
    *,
    max_agents: Optional[int] = None,
) -> int:
    """
    Minimum number of agents N > A with avg_wait_time(N, ...) <= wait_time.

    wait_time is the ceiling on the average delay, in seconds like avg_handle_time.
    """
    a = intensity(arrival_rate, avg_handle_time, interval_length)
    ceiling = require_non_negative("wait_time", wait_time)
    bound = _search_bound(a, max_agents)

    if ceiling == 0:
        raise SearchExhausted(
            "An average wait of exactly 0 is never reached with a finite number of agents",
            max_agents=bound,
        )

    def meets(n: int) -> bool:
        return avg_wait_time(n, arrival_rate, avg_handle_time, interval_length) <= ceiling

    return _scan(meets, start=_smallest_stable(a), max_agents=bound, goal=f"ASA <= {ceiling:g}")


# -----------------------------
# Interval staffing
# -----------------------------
def _validate_inputs(inputs: StaffingInputs) -> None:
    if inputs.interval_minutes <= 0:
        raise InvalidInput("interval_minutes must be > 0")

    if inputs.volume < 0:
        raise InvalidInput("volume must be >= 0")

    if inputs.volume > 0 and inputs.aht_seconds <= 0:
        raise InvalidInput("aht_seconds must be > 0 when volume > 0")

    if not (0.0 <= inputs.shrinkage < 1.0):
        raise InvalidInput("shrinkage must be in [0, 1)")

    if inputs.occupancy_target is not None:
        if not (0.0 < float(inputs.occupancy_target) <= 1.0):
            raise InvalidInput("occupancy_target must be in (0, 1] when provided")

    if inputs.target_type == "service_level":
        if not (0.0 < inputs.service_level_target < 1.0):
            raise InvalidInput("service_level_target must be between 0 and 1 (exclusive)")
        if inputs.service_level_time_seconds < 0:
            raise InvalidInput("service_level_time_seconds must be >= 0")
    elif inputs.target_type == "asa":
        if inputs.asa_target_seconds <= 0:
            raise InvalidInput("asa_target_seconds must be > 0")
    else:
        raise InvalidInput(f"Unsupported target_type: {inputs.target_type}")


def scheduled_agents(on_phone: int, shrinkage: float) -> int:
    """Agents to schedule so that on_phone remain after shrinkage (breaks, absence, ...)."""
    if not (0.0 <= shrinkage < 1.0):
        raise InvalidInput("shrinkage must be in [0, 1)")
    return int(math.ceil(on_phone / (1.0 - shrinkage)))


def compute_required_agents(inputs: StaffingInputs, max_agents: Optional[int] = None) -> StaffingResult:
    """
    Find minimum N (on-phone) such that:
      - the target (service level or ASA) is met, AND
      - optional occupancy cap is met (occupancy <= occupancy_target)

    Returns both on-phone and scheduled agents (shrinkage-adjusted).
    """
    _validate_inputs(inputs)

    # Closed or no volume => zero staffing outputs
    if (not inputs.is_open) or inputs.volume == 0:
        return StaffingResult(
            offered_load_erlangs=0.0,
            required_on_phone=0,
            required_scheduled=0,
            achieved_service_level=1.0,
            achieved_asa_seconds=0.0,
            achieved_occupancy=0.0,
        )

    volume = float(inputs.volume)
    aht = float(inputs.aht_seconds)
    minutes = float(inputs.interval_minutes)
    a = intensity(volume, aht, minutes)

    # a/n <= cap  =>  n >= a/cap
    start = _smallest_stable(a)
    if inputs.occupancy_target is not None:
        start = max(start, int(math.ceil(a / float(inputs.occupancy_target))))

    bound = _search_bound(a, max_agents)

    if inputs.target_type == "service_level":
        goal = f"service level {inputs.service_level_target:g} at {inputs.service_level_time_seconds:g}s"

        def meets(n: int) -> bool:
            sl = service_level(n, volume, aht, minutes, inputs.service_level_time_seconds)
            return sl >= inputs.service_level_target

    else:
        goal = f"ASA <= {inputs.asa_target_seconds:g}s"

        def meets(n: int) -> bool:
            return avg_wait_time(n, volume, aht, minutes) <= inputs.asa_target_seconds

    n = _scan(meets, start=start, max_agents=bound, goal=goal)

    return StaffingResult(
        offered_load_erlangs=a,
        required_on_phone=n,
        required_scheduled=scheduled_agents(n, inputs.shrinkage),
        achieved_service_level=service_level(
            n, volume, aht, minutes, max(float(inputs.service_level_time_seconds), 0.0)
        ),
        achieved_asa_seconds=avg_wait_time(n, volume, aht, minutes),
        achieved_occupancy=occupancy(n, a),
    )


def result_to_dict(result: StaffingResult) -> Dict[str, Any]:
    return {
        "erlangs": result.offered_load_erlangs,
        "required_on_phone": result.required_on_phone,
        "required_scheduled": result.required_scheduled,
        "service_level": result.achieved_service_level,
        "asa_seconds": result.achieved_asa_seconds,
        "occupancy": result.achieved_occupancy,
    }


__all__ = [
    "TargetType",
    "StaffingInputs",
    "StaffingResult",
    "number_of_agents_for_sl",
    "number_of_agents_for_asa",
    "scheduled_agents",
    "compute_required_agents",
    "result_to_dict",
]
