"""GST line and document totals.

Line items are split into CGST/SGST for intrastate supply and IGST for
interstate supply. Every function here accepts either the pydantic models or
the raw camelCase mappings the UI stores, and none of them raise on bad
numbers: missing or non-numeric fields count as zero.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

from ..models.documents import DiscountType, DocumentTotals, LineItemCalc
from ..utils.numbers import as_number

_STATE_CODE = re.compile(r"\((\d{1,2})\)\s*$")


def _read(source: Any, name: str, alias: Optional[str] = None) -> Any:
    if isinstance(source, Mapping):
        if alias and alias in source:
            return source[alias]
        return source.get(name)
    return getattr(source, name, None)


def _normalise_code(code: Any) -> Optional[str]:
    text = str(code or "").strip()
    if not text.isdigit():
        return None
    return text.zfill(2)


def supply_state_code(place_of_supply: Optional[str]) -> Optional[str]:
    """Return the two-digit state code from ``"<Name> (<code>)"`` or ``None``."""
    if not isinstance(place_of_supply, str):
        return None
    match = _STATE_CODE.search(place_of_supply)
    if not match:
        return None
    return match.group(1).zfill(2)


def is_inter_state(place_of_supply: Optional[str], seller_state_code: Optional[str]) -> bool:
    """Decide the tax branch for a whole document.

    Unparseable places of supply (and an unknown seller state) fall back to
    intrastate treatment.
    """
    supply_code = supply_state_code(place_of_supply)
    seller_code = _normalise_code(seller_state_code)
    if supply_code is None or seller_code is None:
        return False
    return supply_code != seller_code


def calculate_line_item(item: Any, is_inter_state: bool) -> LineItemCalc:
    qty = as_number(_read(item, "qty"))
    rate = as_number(_read(item, "rate"))
    tax_rate = as_number(_read(item, "tax_rate", "taxRate"))

    taxable_value = qty * rate
    total_tax = taxable_value * tax_rate / 100

    if is_inter_state:
        cgst = sgst = 0.0
        igst = total_tax
    else:
        cgst = sgst = total_tax / 2
        igst = 0.0

    return LineItemCalc(
        taxable_value=taxable_value,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total=taxable_value + total_tax,
    )


def _discount_amount(document: Any, taxable: float) -> float:
    value = as_number(_read(document, "discount_value", "discountValue"))
    if not value:
        return 0.0
    discount_type = _read(document, "discount_type", "discountType")
    if discount_type in (DiscountType.PERCENTAGE, DiscountType.PERCENTAGE.value):
        return taxable * value / 100
    return value


def _charges_total(charges: Optional[Iterable[Any]]) -> float:
    return sum((as_number(_read(charge, "amount")) for charge in charges or ()), 0.0)


def calculate_document_totals(document: Any, is_inter_state: bool = False) -> DocumentTotals:
    """Full breakdown for editors and print views.

    ``final_total`` is left unclamped so a preview can show that a discount
    overshoots the document; use :func:`calculate_document_total` for the
    payable amount.
    """
    totals = DocumentTotals()
    for item in _read(document, "items") or ():
        line = calculate_line_item(item, is_inter_state)
        totals.taxable += line.taxable_value
        totals.cgst += line.cgst
        totals.sgst += line.sgst
        totals.igst += line.igst
        totals.total += line.total

    totals.discount_amount = _discount_amount(document, totals.taxable)
    totals.additional_charges_total = _charges_total(
        _read(document, "additional_charges", "additionalCharges")
    )
    round_off = as_number(_read(document, "round_off", "roundOff"))
    totals.final_total = (
        totals.total - totals.discount_amount + totals.additional_charges_total
    ) + round_off
    return totals


def calculate_document_total(document: Any) -> float:
    """Payable amount of a document, never below zero.

    The tax-inclusive line total does not depend on the CGST/SGST or IGST
    split, so the jurisdiction is irrelevant here.
    """
    if not _read(document, "items"):
        return 0.0
    return max(0.0, calculate_document_totals(document).final_total)
