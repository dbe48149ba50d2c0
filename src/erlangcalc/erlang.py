# src/erlangcalc/erlang.py
"""
Erlang B / Erlang C formulas for M/M/N/N and M/M/N queues.

All functions are pure. Units follow the usual call-center convention:
interval_length in minutes, avg_handle_time and wait_time in seconds.
"""
from __future__ import annotations

import math

from .checks import require_count, require_non_negative, require_positive
from .errors import Unstable


# -----------------------------
# Offered load
# -----------------------------
def intensity(arrival_rate: float, avg_handle_time: float, interval_length: float) -> float:
    """
    Offered load A (Erlangs).

    arrival_rate is the number of calls per interval, avg_handle_time is in
    seconds and interval_length in minutes:
      A = arrival_rate * avg_handle_time / (60 * interval_length)
    """
    rate = require_positive("arrival_rate", arrival_rate)
    aht = require_positive("avg_handle_time", avg_handle_time)
    length = require_positive("interval_length", interval_length)
    return rate * aht / (60.0 * length)


# -----------------------------
# Erlang B / C
# -----------------------------
def _erlang_b(n: int, a: float) -> float:
    # B(0) = 1; B(k) = a*B(k-1) / (k + a*B(k-1)). Every step stays in [0, 1].
    b = 1.0
    for k in range(1, n + 1):
        ab = a * b
        b = ab / (k + ab)
    return b


def erlang_b(number_of_servers: int, intensity: float) -> float:
    """
    Blocking probability of an M/M/N/N loss system (no queue).

    Evaluated with the forward recurrence on B(k), so no factorial or power
    of the load is ever formed and large server counts do not overflow.
    """
    n = require_count("number_of_servers", number_of_servers, 0)
    a = require_non_negative("intensity", intensity)
    return _erlang_b(n, a)


def _erlang_c(n: int, a: float) -> float:
    if a == 0:
        return 0.0
    if n <= a:
        raise Unstable(n, a)
    b = _erlang_b(n, a)
    c = n * b / (n - a * (1.0 - b))
    return min(1.0, c)


def erlang_c(number_of_agents: int, intensity: float) -> float:
    """
    Probability that an arriving call has to wait in an M/M/N queue.

    C = N*B / (N - A*(1 - B)) with B = erlang_b(N, A).
    Raises Unstable when intensity >= number_of_agents.
    """
    n = require_count("number_of_agents", number_of_agents, 1)
    a = require_non_negative("intensity", intensity)
    return _erlang_c(n, a)


# -----------------------------
# Wait-time metrics
# -----------------------------
def service_level(
    number_of_agents: int,
    arrival_rate: float,
    avg_handle_time: float,
    interval_length: float,
    wait_time: float,
) -> float:
    """
    Probability that a call is answered within wait_time:

    SL(t) = 1 - C * exp(-(N - A) * t / AHT)
    """
    n = require_count("number_of_agents", number_of_agents, 1)
    t = require_non_negative("wait_time", wait_time)
    a = intensity(arrival_rate, avg_handle_time, interval_length)
    c = _erlang_c(n, a)
    sl = 1.0 - c * math.exp(-(n - a) * t / float(avg_handle_time))
    return max(0.0, min(1.0, sl))


def avg_wait_time(
    number_of_agents: int,
    arrival_rate: float,
    avg_handle_time: float,
    interval_length: float,
) -> float:
    """
    Average Speed of Answer, averaged over all calls (immediate answers count as 0):

    ASA = C * AHT / (N - A)
    """
    n = require_count("number_of_agents", number_of_agents, 1)
    a = intensity(arrival_rate, avg_handle_time, interval_length)
    c = _erlang_c(n, a)
    return c * float(avg_handle_time) / (n - a)


def occupancy(number_of_agents: int, intensity: float) -> float:
    """Share of agent capacity in use. Values above 1 mean the agents are overloaded."""
    n = require_count("number_of_agents", number_of_agents, 1)
    a = require_non_negative("intensity", intensity)
    return a / n


__all__ = [
    "intensity",
    "erlang_b",
    "erlang_c",
    "service_level",
    "avg_wait_time",
    "occupancy",
]
