"""
Templates Routes: 템플릿 관리 API.

- POST /api/v1/template/upload → 업로드 (같은 이름 덮어쓰기)
- GET /api/v1/template/list → 목록
- DELETE /api/v1/template/{template_name} → 삭제
- GET /api/v1/template/download/{template_name} → 다운로드
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response

from src.app.dependencies import get_template_store
from src.app.routes.documents import content_disposition
from src.domain.errors import InvalidTemplateTypeError
from src.domain.schemas import TemplateKind
from src.templates.manager import TemplateStore

logger = logging.getLogger(__name__)

api_router = APIRouter()


@api_router.post("/upload")
async def upload_template(
    file: UploadFile = File(...),
    store: TemplateStore = Depends(get_template_store),
) -> dict[str, Any]:
    """템플릿 업로드."""
    content = await file.read()
    saved_name = store.save(file.filename, content)

    return {
        "success": True,
        "message": "Template uploaded successfully",
        "fileName": saved_name,
    }


@api_router.get("/list")
def list_templates(
    store: TemplateStore = Depends(get_template_store),
) -> dict[str, Any]:
    """템플릿 목록."""
    templates = store.list_templates()

    return {
        "success": True,
        "count": len(templates),
        "templates": templates,
    }


@api_router.delete("/{template_name}")
def delete_template(
    template_name: str,
    store: TemplateStore = Depends(get_template_store),
) -> dict[str, Any]:
    """템플릿 삭제. 없으면 success: false."""
    deleted = store.delete(template_name)

    if not deleted:
        return {
            "success": False,
            "message": "Template not found",
            "fileName": template_name,
        }

    return {
        "success": True,
        "message": "Template deleted successfully",
        "fileName": template_name,
    }


@api_router.get("/download/{template_name}")
def download_template(
    template_name: str,
    store: TemplateStore = Depends(get_template_store),
) -> Response:
    """
    템플릿 다운로드.

    Raises:
        TemplateNotFoundError: 404
    """
    content = store.read(template_name)

    kind = TemplateKind.from_filename(template_name)
    if kind is None:
        raise InvalidTemplateTypeError(template_name, "word or excel")

    return Response(
        content=content,
        media_type=kind.media_type,
        headers={"Content-Disposition": content_disposition(template_name)},
    )
