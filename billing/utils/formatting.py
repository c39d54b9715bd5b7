"""Indian Rupee display formatting.

Digits are grouped the Indian way: the last three together, then pairs
(``12,34,567``). Amounts always carry two decimals and the rupee sign.

>>> format_currency(123456)
'₹1,23,456.00'
>>> format_currency(-1234.5)
'-₹1,234.50'
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .numbers import as_number

RUPEE = "₹"
_PAISE = Decimal("0.01")


def group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: Any, symbol: bool = True) -> str:
    value = Decimal(str(as_number(amount)))
    with localcontext() as ctx:
        # Room for every integer digit plus paise, however large the amount.
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        value = value.quantize(_PAISE, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{abs(value):f}".split(".")
    prefix = RUPEE if symbol else ""
    return f"{sign}{prefix}{group_indian(whole)}.{fraction}"
