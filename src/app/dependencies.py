"""
FastAPI dependencies: lifespan에서 app.state에 올린 객체 조회.
"""

from fastapi import Request

from src.app.services.documents import DocumentService
from src.templates.manager import TemplateStore


def get_template_store(request: Request) -> TemplateStore:
    """템플릿 저장소."""
    store: TemplateStore = request.app.state.template_store
    return store


def get_document_service(request: Request) -> DocumentService:
    """문서 생성 서비스."""
    service: DocumentService = request.app.state.document_service
    return service
