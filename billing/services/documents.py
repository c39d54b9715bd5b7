"""Invoice and quotation lifecycle on top of the storage service."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ..core.config import Settings
from ..core.logging import get_logger
from ..models.documents import (
    AdditionalCharge,
    DocumentKind,
    DocumentTotals,
    Invoice,
    InvoiceStatus,
    LineItem,
    Quotation,
    QuotationStatus,
    parse_document,
)
from ..utils.ids import generate_document_id, next_document_number
from .storage import STORAGE_KEYS, StorageService
from .totals import calculate_document_total, calculate_document_totals, is_inter_state

logger = get_logger(__name__)

AnyDocument = Union[Invoice, Quotation]

QUOTATION_TERMS = "Valid for 30 days"
INVOICE_TERMS = "Payment within 15 days"


class DocumentNotFoundError(LookupError):
    def __init__(self, kind: DocumentKind, document_id: str) -> None:
        self.kind = kind
        self.document_id = document_id
        super().__init__(f"{kind.value} {document_id} not found")


class LineItemNotFoundError(LookupError):
    pass


class ChargeNotFoundError(LookupError):
    pass


class LastLineItemError(ValueError):
    """A document must keep at least one line item."""


def _storage_key(kind: DocumentKind) -> str:
    return STORAGE_KEYS[f"{kind.value}s"]


def _aliased(model_cls, data: Dict[str, Any]) -> Dict[str, Any]:
    aliases = {name: field.alias or name for name, field in model_cls.model_fields.items()}
    return {aliases.get(key, key): value for key, value in data.items()}


def _require_items(document: AnyDocument) -> AnyDocument:
    if not document.items:
        raise LastLineItemError(document.id)
    return document


def _dump(document: Union[AnyDocument, LineItem, AdditionalCharge]) -> Dict[str, Any]:
    return document.model_dump(by_alias=True, mode="json")


class DocumentService:
    def __init__(self, storage: StorageService, settings: Settings) -> None:
        self.storage = storage
        self.seller_state_code = settings.seller_state_code
        self.seller_place_of_supply = settings.seller_place_of_supply
        self._lock = asyncio.Lock()

    # -- engine helpers -----------------------------------------------------

    def is_inter_state(self, document: AnyDocument) -> bool:
        return is_inter_state(document.place_of_supply, self.seller_state_code)

    def breakdown(self, document: AnyDocument) -> DocumentTotals:
        return calculate_document_totals(document, self.is_inter_state(document))

    def total(self, document: AnyDocument) -> float:
        return calculate_document_total(document)

    # -- persistence --------------------------------------------------------

    async def list(self, kind: DocumentKind) -> List[AnyDocument]:
        blobs = await self.storage.load(_storage_key(kind), [])
        documents: List[AnyDocument] = []
        for blob in blobs or []:
            if not isinstance(blob, dict):
                logger.warning("stored_document_invalid", kind=kind.value, document_id=None, errors=1)
                continue
            try:
                documents.append(parse_document(blob, kind))
            except ValidationError as exc:
                logger.warning(
                    "stored_document_invalid",
                    kind=kind.value,
                    document_id=blob.get("id"),
                    errors=exc.error_count(),
                )
        return documents

    async def _save_all(self, kind: DocumentKind, documents: List[AnyDocument]) -> None:
        await self.storage.save(_storage_key(kind), [_dump(doc) for doc in documents])

    async def get(self, kind: DocumentKind, document_id: str) -> AnyDocument:
        for document in await self.list(kind):
            if document.id == document_id:
                return document
        raise DocumentNotFoundError(kind, document_id)

    async def _update(self, kind: DocumentKind, document_id: str, mutate) -> AnyDocument:
        async with self._lock:
            documents = await self.list(kind)
            for index, document in enumerate(documents):
                if document.id == document_id:
                    updated = mutate(document)
                    documents[index] = updated
                    await self._save_all(kind, documents)
                    return updated
        raise DocumentNotFoundError(kind, document_id)

    async def _insert(self, document: AnyDocument, documents: List[AnyDocument]) -> AnyDocument:
        kind = DocumentKind(document.kind)
        documents.insert(0, document)
        await self._save_all(kind, documents)
        logger.info("document_created", kind=kind.value, document_id=document.id, number=document.number)
        return document

    # -- lifecycle ----------------------------------------------------------

    def _defaults(self, kind: DocumentKind, existing: List[AnyDocument]) -> Dict[str, Any]:
        return {
            "id": generate_document_id(kind),
            "number": next_document_number(kind, (doc.number for doc in existing)),
            "date": date.today().isoformat(),
            "placeOfSupply": self.seller_place_of_supply,
            "items": [_dump(LineItem())],
        }

    async def create(self, kind: DocumentKind, data: Optional[Dict[str, Any]] = None) -> AnyDocument:
        async with self._lock:
            documents = await self.list(kind)
            payload = self._defaults(kind, documents)
            model_cls = Invoice if kind is DocumentKind.INVOICE else Quotation
            overrides = _aliased(model_cls, data or {})
            payload.update({key: value for key, value in overrides.items() if key not in ("id", "kind")})
            document = _require_items(parse_document(payload, kind))
            return await self._insert(document, documents)

    async def replace(self, kind: DocumentKind, document_id: str, data: Dict[str, Any]) -> AnyDocument:
        payload = {**data, "id": document_id}
        replacement = _require_items(parse_document(payload, kind))
        return await self._update(kind, document_id, lambda _: replacement)

    async def delete(self, kind: DocumentKind, document_id: str) -> None:
        async with self._lock:
            documents = await self.list(kind)
            remaining = [doc for doc in documents if doc.id != document_id]
            if len(remaining) == len(documents):
                raise DocumentNotFoundError(kind, document_id)
            await self._save_all(kind, remaining)
        logger.info("document_deleted", kind=kind.value, document_id=document_id)

    async def update_status(self, kind: DocumentKind, document_id: str, status: str) -> AnyDocument:
        enum = InvoiceStatus if kind is DocumentKind.INVOICE else QuotationStatus
        new_status = enum(status)

        def apply(document: AnyDocument) -> AnyDocument:
            document.status = new_status
            return document

        return await self._update(kind, document_id, apply)

    async def duplicate(self, kind: DocumentKind, document_id: str) -> AnyDocument:
        async with self._lock:
            documents = await self.list(kind)
            source = next((doc for doc in documents if doc.id == document_id), None)
            if source is None:
                raise DocumentNotFoundError(kind, document_id)
            payload = _dump(source)
            payload.update(
                id=generate_document_id(kind),
                number=next_document_number(kind, (doc.number for doc in documents)),
                date=date.today().isoformat(),
                status="Draft",
            )
            if kind is DocumentKind.INVOICE:
                payload["dueDate"] = None
            return await self._insert(parse_document(payload, kind), documents)

    async def convert_to_invoice(self, quotation_id: str) -> Invoice:
        """Clone a quotation into a fresh draft invoice and accept the quotation."""
        async with self._lock:
            quotations = await self.list(DocumentKind.QUOTATION)
            quotation = next((doc for doc in quotations if doc.id == quotation_id), None)
            if quotation is None:
                raise DocumentNotFoundError(DocumentKind.QUOTATION, quotation_id)

            invoices = await self.list(DocumentKind.INVOICE)
            terms = quotation.terms.replace(QUOTATION_TERMS, INVOICE_TERMS) if quotation.terms else quotation.terms
            invoice = Invoice(
                id=generate_document_id(DocumentKind.INVOICE),
                number=next_document_number(DocumentKind.INVOICE, (doc.number for doc in invoices)),
                date=date.today(),
                status=InvoiceStatus.DRAFT,
                client_id=quotation.client_id,
                items=[item.model_copy() for item in quotation.items],
                place_of_supply=quotation.place_of_supply,
                discount_type=quotation.discount_type,
                discount_value=quotation.discount_value,
                additional_charges=[charge.model_copy() for charge in quotation.additional_charges],
                round_off=quotation.round_off,
                show_bank_details=quotation.show_bank_details,
                bank_details=quotation.bank_details,
                notes=quotation.notes,
                terms=terms,
                custom_fields=[field.model_copy() for field in quotation.custom_fields],
            )
            await self._insert(invoice, invoices)

            quotation.status = QuotationStatus.ACCEPTED
            await self._save_all(DocumentKind.QUOTATION, quotations)

        logger.info("quotation_converted", quotation_id=quotation_id, invoice_id=invoice.id)
        return invoice

    # -- line items and charges --------------------------------------------

    async def add_item(self, kind: DocumentKind, document_id: str, data: Optional[Dict[str, Any]] = None) -> AnyDocument:
        item = LineItem.model_validate(data or {})

        def apply(document: AnyDocument) -> AnyDocument:
            document.items.append(item)
            return document

        return await self._update(kind, document_id, apply)

    async def update_item(
        self, kind: DocumentKind, document_id: str, item_id: str, changes: Dict[str, Any]
    ) -> AnyDocument:
        def apply(document: AnyDocument) -> AnyDocument:
            for index, item in enumerate(document.items):
                if item.id == item_id:
                    merged = {**_dump(item), **_aliased(LineItem, changes), "id": item_id}
                    document.items[index] = LineItem.model_validate(merged)
                    return document
            raise LineItemNotFoundError(item_id)

        return await self._update(kind, document_id, apply)

    async def remove_item(self, kind: DocumentKind, document_id: str, item_id: str) -> AnyDocument:
        def apply(document: AnyDocument) -> AnyDocument:
            if document.find_item(item_id) is None:
                raise LineItemNotFoundError(item_id)
            if len(document.items) <= 1:
                raise LastLineItemError(item_id)
            document.items = [item for item in document.items if item.id != item_id]
            return document

        return await self._update(kind, document_id, apply)

    async def add_charge(self, kind: DocumentKind, document_id: str, data: Optional[Dict[str, Any]] = None) -> AnyDocument:
        charge = AdditionalCharge.model_validate(data or {})

        def apply(document: AnyDocument) -> AnyDocument:
            document.additional_charges.append(charge)
            return document

        return await self._update(kind, document_id, apply)

    async def remove_charge(self, kind: DocumentKind, document_id: str, charge_id: str) -> AnyDocument:
        def apply(document: AnyDocument) -> AnyDocument:
            remaining = [charge for charge in document.additional_charges if charge.id != charge_id]
            if len(remaining) == len(document.additional_charges):
                raise ChargeNotFoundError(charge_id)
            document.additional_charges = remaining
            return document

        return await self._update(kind, document_id, apply)
