"""Rupee amounts in words using the Indian numbering system."""

from __future__ import annotations

import math
from typing import Any

from ..utils.numbers import as_number

OVERFLOW = "overflow"

_MAX_DIGITS = 9

_UNITS = [
    "", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen",
]
_TENS = [
    "", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety",
]

# Fixed-width groups of the zero-padded amount, most significant first.
_GROUPS = (
    (2, "crore"),
    (2, "lakh"),
    (2, "thousand"),
    (1, "hundred"),
    (2, ""),
)


def _below_hundred(value: int) -> str:
    if value < 20:
        return _UNITS[value]
    return f"{_TENS[value // 10]} {_UNITS[value % 10]}".strip()


def _is_non_finite(amount: Any) -> bool:
    try:
        return not math.isfinite(float(amount))
    except (TypeError, ValueError):
        return False


def round_rupees(amount: Any) -> int:
    """Round to whole rupees, halves away from zero on the positive side."""
    return int(math.floor(as_number(amount) + 0.5))


def number_to_words(amount: Any) -> str:
    """Spell out ``amount`` in lowercase, ending with ``"rupees only"``.

    Paise are not spoken: the amount is rounded to whole rupees first.
    Amounts of one hundred crore or more, negative amounts and infinity or
    NaN have no rendering and return :data:`OVERFLOW` instead.

    >>> number_to_words(123456)
    'one lakh twenty three thousand four hundred and fifty six rupees only'
    """
    if _is_non_finite(amount):
        return OVERFLOW
    rupees = round_rupees(amount)
    digits = str(rupees)
    if rupees < 0 or len(digits) > _MAX_DIGITS:
        return OVERFLOW

    digits = digits.zfill(_MAX_DIGITS)
    words: list[str] = []
    position = 0
    for width, scale in _GROUPS:
        value = int(digits[position:position + width])
        position += width
        if not value:
            continue
        if scale:
            words.append(f"{_below_hundred(value)} {scale}")
        elif words:
            words.append(f"and {_below_hundred(value)}")
        else:
            words.append(_below_hundred(value))

    return f"{' '.join(words) or 'zero'} rupees only"


def is_overflow(words: str) -> bool:
    return words == OVERFLOW
