"""
Documents Routes: Word/Excel 문서 생성 API.

- POST /api/v1/doc/word → 단일 Word 문서
- POST /api/v1/doc/word/batch → 레코드별 페이지를 합친 Word 문서
- POST /api/v1/doc/excel → 헤더 + 데이터로 Excel 생성
- POST /api/v1/doc/excel/fill → Excel 템플릿 채우기

렌더는 동기 작업이므로 핸들러는 def (FastAPI threadpool에서 실행).
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from src.app.dependencies import get_document_service
from src.app.services.documents import DocumentService
from src.domain.constants import (
    DEFAULT_BATCH_FILENAME,
    DEFAULT_EXCEL_FILENAME,
    DEFAULT_FILL_FILENAME,
    DEFAULT_WORD_FILENAME,
)
from src.domain.errors import EmptyDocumentError
from src.domain.schemas import (
    BatchRenderRequest,
    FillRequest,
    RenderedDocument,
    RenderRequest,
    SheetRequest,
)
from src.templates.manager import sanitize_filename

logger = logging.getLogger(__name__)

api_router = APIRouter()


def content_disposition(filename: str) -> str:
    """
    attachment 헤더 값.

    filename은 ASCII 대체값, filename*는 UTF-8 퍼센트 인코딩 (한글 파일명).
    """
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def document_response(
    document: RenderedDocument,
    file_name: str | None,
    default_name: str,
) -> Response:
    """
    RenderedDocument → 다운로드 응답.

    Raises:
        EmptyDocumentError: 빈 결과
    """
    if document.size == 0:
        raise EmptyDocumentError("generated document is empty")

    base_name = file_name if file_name and file_name.strip() else default_name
    filename = sanitize_filename(base_name) + document.extension

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": content_disposition(filename)},
    )


# =============================================================================
# Word
# =============================================================================

@api_router.post("/word")
def generate_word(
    payload: RenderRequest,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """단일 Word 문서 생성."""
    logger.info(f"Received word generation request for template: {payload.template_name}")
    document = service.generate_word(payload.template_name, payload.data)
    return document_response(document, payload.file_name, DEFAULT_WORD_FILENAME)


@api_router.post("/word/batch")
def generate_word_batch(
    payload: BatchRenderRequest,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """배치 Word 문서 생성 (dataList 1개 = 1페이지)."""
    logger.info(
        f"Received batch word generation request for template: {payload.template_name}, "
        f"data count: {len(payload.data_list)}"
    )
    document = service.generate_word_batch(payload.template_name, payload.data_list)
    return document_response(document, payload.file_name, DEFAULT_BATCH_FILENAME)


# =============================================================================
# Excel
# =============================================================================

@api_router.post("/excel")
def generate_excel(
    payload: SheetRequest,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """헤더 + 데이터로 Excel 생성."""
    logger.info(f"Received excel generation request, sheet: {payload.sheet_name}")
    document = service.generate_excel(payload.sheet_name, payload.headers, payload.data)
    return document_response(document, payload.file_name, DEFAULT_EXCEL_FILENAME)


@api_router.post("/excel/fill")
def fill_excel(
    payload: FillRequest,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """Excel 템플릿 채우기."""
    logger.info(f"Received excel fill request for template: {payload.template_name}")
    document = service.fill_excel(payload.template_name, payload.data, payload.list_data)
    return document_response(document, payload.file_name, DEFAULT_FILL_FILENAME)
