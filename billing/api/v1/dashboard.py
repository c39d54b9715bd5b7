"""Dashboard figures."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...api.deps import get_document_service
from ...models.documents import DocumentKind
from ...services.dashboard import DashboardSummary, summarise_invoices
from ...services.documents import DocumentService

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(service: DocumentService = Depends(get_document_service)) -> DashboardSummary:
    return summarise_invoices(await service.list(DocumentKind.INVOICE))
