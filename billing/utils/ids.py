"""Document id and number generators (INV-YYYY-####, QT-YYYY-####)."""

from __future__ import annotations

import re
import uuid
from datetime import date
from typing import Iterable, Optional

from ..models.documents import DocumentKind

_ID_PREFIX = {DocumentKind.INVOICE: "inv", DocumentKind.QUOTATION: "qt"}
_NUMBER_PREFIX = {DocumentKind.INVOICE: "INV", DocumentKind.QUOTATION: "QT"}


def generate_document_id(kind: DocumentKind) -> str:
    return f"{_ID_PREFIX[kind]}-{uuid.uuid4().hex[:12]}"


def generate_document_number(kind: DocumentKind, seq: int, year: Optional[int] = None) -> str:
    year = year or date.today().year
    return f"{_NUMBER_PREFIX[kind]}-{year}-{seq:04d}"


def next_document_number(kind: DocumentKind, existing: Iterable[str], year: Optional[int] = None) -> str:
    """Next number in this year's series, after the highest one already issued."""
    year = year or date.today().year
    pattern = re.compile(rf"^{_NUMBER_PREFIX[kind]}-{year}-(\d+)$")
    highest = 0
    for number in existing:
        match = pattern.match(number or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return generate_document_number(kind, highest + 1, year)
