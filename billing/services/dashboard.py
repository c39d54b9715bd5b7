"""Revenue and outstanding figures for the dashboard."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable

from pydantic import BaseModel

from ..models.documents import Invoice, InvoiceStatus
from .totals import calculate_document_total

OUTSTANDING_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.OVERDUE, InvoiceStatus.DRAFT})


class DashboardSummary(BaseModel):
    total_revenue: float
    outstanding: float
    invoice_count: int
    status_counts: Dict[str, int]


def summarise_invoices(invoices: Iterable[Invoice]) -> DashboardSummary:
    revenue = 0.0
    outstanding = 0.0
    counts: Counter = Counter()

    for invoice in invoices:
        counts[invoice.status.value] += 1
        amount = calculate_document_total(invoice)
        if invoice.status is InvoiceStatus.PAID:
            revenue += amount
        elif invoice.status in OUTSTANDING_STATUSES:
            outstanding += amount

    return DashboardSummary(
        total_revenue=revenue,
        outstanding=outstanding,
        invoice_count=sum(counts.values()),
        status_counts=dict(counts),
    )
