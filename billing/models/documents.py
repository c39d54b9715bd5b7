"""Pydantic models for invoices, quotations and their computed totals.

The wire shape is the camelCase JSON the billing UI stores; Python code uses
snake_case attributes. ``Document`` is a tagged union keyed on ``kind``.
"""

from __future__ import annotations

import datetime as dt
import uuid
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from ..utils.numbers import as_number

DEFAULT_QTY = 1.0
DEFAULT_RATE = 0.0
DEFAULT_TAX_RATE = 18.0


def new_line_id() -> str:
    return uuid.uuid4().hex[:12]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentKind(str, Enum):
    INVOICE = "invoice"
    QUOTATION = "quotation"


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"


class QuotationStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class LineItem(CamelModel):
    id: str = Field(default_factory=new_line_id)
    description: str = ""
    hsn: str = ""
    qty: float = DEFAULT_QTY
    rate: float = DEFAULT_RATE
    tax_rate: float = DEFAULT_TAX_RATE

    @field_validator("qty", "rate", "tax_rate", mode="before")
    @classmethod
    def _coerce_numbers(cls, value):
        return as_number(value)


class AdditionalCharge(CamelModel):
    id: str = Field(default_factory=new_line_id)
    label: str = ""
    amount: float = 0.0

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return as_number(value)


class CustomField(CamelModel):
    label: str = ""
    value: str = ""


class DocumentBase(CamelModel):
    id: str
    number: str
    date: dt.date
    client_id: str = ""
    items: List[LineItem] = Field(default_factory=lambda: [LineItem()])
    place_of_supply: str = ""
    discount_type: DiscountType = DiscountType.FIXED
    discount_value: float = 0.0
    additional_charges: List[AdditionalCharge] = Field(default_factory=list)
    round_off: float = 0.0
    show_bank_details: bool = True
    bank_details: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    terms: Optional[str] = None
    custom_fields: List[CustomField] = Field(default_factory=list)

    @field_validator("discount_value", "round_off", mode="before")
    @classmethod
    def _coerce_numbers(cls, value):
        return as_number(value)

    @field_validator("discount_type", mode="before")
    @classmethod
    def _default_discount_type(cls, value):
        # Anything other than a percentage discount is applied as a flat amount.
        if value in (DiscountType.PERCENTAGE, DiscountType.PERCENTAGE.value):
            return DiscountType.PERCENTAGE
        return DiscountType.FIXED

    @field_validator("place_of_supply", "client_id", mode="before")
    @classmethod
    def _blank_strings(cls, value):
        return "" if value is None else value

    def find_item(self, item_id: str) -> Optional[LineItem]:
        return next((item for item in self.items if item.id == item_id), None)


class Invoice(DocumentBase):
    kind: Literal["invoice"] = "invoice"
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: Optional[dt.date] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value):
        return value or None


class Quotation(DocumentBase):
    kind: Literal["quotation"] = "quotation"
    status: QuotationStatus = QuotationStatus.DRAFT
    valid_until: Optional[dt.date] = None

    @field_validator("valid_until", mode="before")
    @classmethod
    def _blank_valid_until(cls, value):
        return value or None


Document = Annotated[Union[Invoice, Quotation], Field(discriminator="kind")]

document_adapter: TypeAdapter[Union[Invoice, Quotation]] = TypeAdapter(Document)


def parse_document(data: Dict[str, Any], kind: Optional[DocumentKind] = None) -> Union[Invoice, Quotation]:
    """Validate a stored or submitted blob into an ``Invoice`` or ``Quotation``.

    Blobs written before the ``kind`` tag existed are tagged from the
    collection they were read from.
    """
    payload = dict(data)
    if kind is not None:
        payload["kind"] = kind.value
    return document_adapter.validate_python(payload)


class LineItemCalc(CamelModel):
    taxable_value: float
    cgst: float
    sgst: float
    igst: float
    total: float


class DocumentTotals(CamelModel):
    taxable: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    igst: float = 0.0
    total: float = 0.0
    discount_amount: float = 0.0
    additional_charges_total: float = 0.0
    final_total: float = 0.0
