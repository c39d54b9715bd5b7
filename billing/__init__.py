"""GST billing service: line item tax, document totals and amount in words."""

from .services.totals import (
    calculate_document_total,
    calculate_document_totals,
    calculate_line_item,
    is_inter_state,
    supply_state_code,
)
from .services.words import OVERFLOW, number_to_words
from .utils.formatting import format_currency

__all__ = [
    "OVERFLOW",
    "calculate_document_total",
    "calculate_document_totals",
    "calculate_line_item",
    "format_currency",
    "is_inter_state",
    "number_to_words",
    "supply_state_code",
]
