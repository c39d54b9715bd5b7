"""Lenient numeric coercion shared by models and the totals engine."""

from __future__ import annotations

import math
from typing import Any


def as_number(value: Any) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when it is not one.

    Blank strings, ``None``, unparseable text and NaN/infinity all collapse to
    zero so a half-filled form never poisons a document total.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number
