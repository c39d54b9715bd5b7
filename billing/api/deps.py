"""Request-scoped dependencies"""
from fastapi import Request

from ..services.documents import DocumentService


def get_document_service(request: Request) -> DocumentService:
    """Get document service from app state"""
    return request.app.state.document_service
