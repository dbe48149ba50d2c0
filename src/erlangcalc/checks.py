# src/erlangcalc/checks.py
"""Scalar argument checks shared by the formula and staffing modules."""
from __future__ import annotations

import math
import numbers

from .errors import InvalidInput


def require_real(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(f"{name} must be a real number, got {value!r}")
    x = float(value)
    if not math.isfinite(x):
        raise InvalidInput(f"{name} must be finite, got {value!r}")
    return x


def require_positive(name: str, value: float) -> float:
    x = require_real(name, value)
    if x <= 0:
        raise InvalidInput(f"{name} must be > 0, got {value!r}")
    return x


def require_non_negative(name: str, value: float) -> float:
    x = require_real(name, value)
    if x < 0:
        raise InvalidInput(f"{name} must be >= 0, got {value!r}")
    return x


def require_count(name: str, value: int, minimum: int) -> int:
    """Integer >= minimum. Integral floats (e.g. 25.0) are accepted."""
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        n = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        n = int(value)
    else:
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if n < minimum:
        raise InvalidInput(f"{name} must be >= {minimum}, got {value!r}")
    return n


__all__ = [
    "require_real",
    "require_positive",
    "require_non_negative",
    "require_count",
]
