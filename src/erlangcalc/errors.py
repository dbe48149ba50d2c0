# src/erlangcalc/errors.py
from __future__ import annotations

from typing import Optional


class ErlangError(Exception):
    """Base class for every error raised by erlangcalc."""


class InvalidInput(ErlangError, ValueError):
    """A single argument is outside its domain (negative, zero, NaN, wrong type)."""


class Unstable(ErlangError, ValueError):
    """
    The queue has no steady state: number_of_agents <= intensity.

    Both inputs may be valid on their own; it is their relationship that fails.
    """

    def __init__(self, number_of_agents: int, intensity: float) -> None:
        self.number_of_agents = number_of_agents
        self.intensity = intensity
        super().__init__(
            f"number_of_agents ({number_of_agents}) must exceed intensity ({intensity:.6g}) "
            "for the queue to be stable"
        )

    def __reduce__(self):
        return (type(self), (self.number_of_agents, self.intensity))


class SearchExhausted(ErlangError, RuntimeError):
    """No agent count up to the search bound meets the staffing goal."""

    def __init__(self, message: str, max_agents: Optional[int] = None) -> None:
        self.max_agents = max_agents
        super().__init__(message)

    def __reduce__(self):
        return (type(self), (self.args[0], self.max_agents))


class ConfigError(ErlangError, RuntimeError):
    """An environment setting could not be parsed."""


__all__ = [
    "ErlangError",
    "InvalidInput",
    "Unstable",
    "SearchExhausted",
    "ConfigError",
]
