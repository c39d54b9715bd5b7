"""Invoice and quotation endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Body, Depends, Response, status

from ...api.deps import get_document_service
from ...api.errors import APIError
from ...models.documents import CamelModel, Document, DocumentKind, DocumentTotals, Invoice, Quotation
from ...services.documents import DocumentService
from ...utils.formatting import format_currency
from .compute import words_or_none

router = APIRouter()


class Collection(str, Enum):
    INVOICES = "invoices"
    QUOTATIONS = "quotations"

    @property
    def kind(self) -> DocumentKind:
        return DocumentKind.INVOICE if self is Collection.INVOICES else DocumentKind.QUOTATION


class DocumentView(CamelModel):
    document: Document
    is_inter_state: bool
    totals: DocumentTotals
    total: float
    formatted_total: str
    amount_in_words: Optional[str] = None


class DocumentList(CamelModel):
    documents: List[DocumentView]


class StatusUpdate(CamelModel):
    status: str


def build_view(service: DocumentService, document: Union[Invoice, Quotation]) -> DocumentView:
    total = service.total(document)
    return DocumentView(
        document=document,
        is_inter_state=service.is_inter_state(document),
        totals=service.breakdown(document),
        total=total,
        formatted_total=format_currency(total),
        amount_in_words=words_or_none(total),
    )


@router.get("/{collection}", response_model=DocumentList)
async def list_documents(
    collection: Collection,
    service: DocumentService = Depends(get_document_service),
) -> DocumentList:
    documents = await service.list(collection.kind)
    return DocumentList(documents=[build_view(service, doc) for doc in documents])


@router.post("/{collection}", response_model=DocumentView, status_code=status.HTTP_201_CREATED)
async def create_document(
    collection: Collection,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    document = await service.create(collection.kind, payload)
    return build_view(service, document)


@router.get("/{collection}/{document_id}", response_model=DocumentView)
async def get_document(
    collection: Collection,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    return build_view(service, await service.get(collection.kind, document_id))


@router.put("/{collection}/{document_id}", response_model=DocumentView)
async def replace_document(
    collection: Collection,
    document_id: str,
    payload: Dict[str, Any] = Body(...),
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    document = await service.replace(collection.kind, document_id, payload)
    return build_view(service, document)


@router.delete("/{collection}/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    collection: Collection,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    await service.delete(collection.kind, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{collection}/{document_id}/status", response_model=DocumentView)
async def update_status(
    collection: Collection,
    document_id: str,
    payload: StatusUpdate,
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    try:
        document = await service.update_status(collection.kind, document_id, payload.status)
    except ValueError as exc:
        raise APIError(
            code="INVALID_STATUS",
            message=f"Unknown {collection.kind.value} status: {payload.status}",
            status_code=422,
        ) from exc
    return build_view(service, document)


@router.post(
    "/{collection}/{document_id}/duplicate",
    response_model=DocumentView,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_document(
    collection: Collection,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    return build_view(service, await service.duplicate(collection.kind, document_id))


@router.post(
    "/quotations/{document_id}/convert",
    response_model=DocumentView,
    status_code=status.HTTP_201_CREATED,
)
async def convert_quotation(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    return build_view(service, await service.convert_to_invoice(document_id))


@router.post("/{collection}/{document_id}/items", response_model=DocumentView)
async def add_line_item(
    collection: Collection,
    document_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    return build_view(service, await service.add_item(collection.kind, document_id, payload))


@router.patch("/{collection}/{document_id}/items/{item_id}", response_model=DocumentView)
async def update_line_item(
    collection: Collection,
    document_id: str,
    item_id: str,
    payload: Dict[str, Any] = Body(...),
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    document = await service.update_item(collection.kind, document_id, item_id, payload)
    return build_view(service, document)


@router.delete("/{collection}/{document_id}/items/{item_id}", response_model=DocumentView)
async def remove_line_item(
    collection: Collection,
    document_id: str,
    item_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    return build_view(service, await service.remove_item(collection.kind, document_id, item_id))


@router.post("/{collection}/{document_id}/charges", response_model=DocumentView)
async def add_charge(
    collection: Collection,
    document_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    return build_view(service, await service.add_charge(collection.kind, document_id, payload))


@router.delete("/{collection}/{document_id}/charges/{charge_id}", response_model=DocumentView)
async def remove_charge(
    collection: Collection,
    document_id: str,
    charge_id: str,
    service: DocumentService = Depends(get_document_service),
) -> DocumentView:
    return build_view(service, await service.remove_charge(collection.kind, document_id, charge_id))
