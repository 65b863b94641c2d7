"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uvicorn src.app.main:app --reload --port 8081
- 프로덕션: python -m src.app.main
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

# Routes
from src.app.routes import documents, templates
from src.app.services.documents import DocumentService
from src.core.config import get_settings
from src.core.logging import setup_logging
from src.domain.errors import DocGenError, ErrorCodes
from src.templates.manager import TemplateStore
from src.templates.samples import seed_sample_templates

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 로깅 설정, 샘플 템플릿 생성, 서비스 초기화
    종료 시: 정리할 공유 리소스 없음
    """
    # Startup
    settings = get_settings()
    setup_logging(settings)

    if settings.seed_samples:
        created = seed_sample_templates(settings.template_root)
        logger.info(f"Sample templates initialized, created: {len(created)}")

    store = TemplateStore(settings.template_root, lock_timeout=settings.lock_timeout)

    app.state.settings = settings
    app.state.template_store = store
    app.state.document_service = DocumentService(store, autoescape=settings.autoescape)

    logger.info(f"Template root: {settings.template_root}")

    yield

    # Shutdown
    logger.info("Document service shutting down")


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Document Generation Service",
    description="템플릿 + 데이터 → Word/Excel 문서 생성",
    version="0.1.0",
    lifespan=lifespan,
)


# =============================================================================
# Error Handlers
# =============================================================================


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """{status, code, message} 에러 응답."""
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "code": code, "message": message},
    )


@app.exception_handler(DocGenError)
async def handle_docgen_error(request: Request, exc: DocGenError) -> JSONResponse:
    """DocGenError 계열 → 에러별 HTTP 상태."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return error_response(exc.status_code, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 본문 검증 실패 → 400."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"{request.method} {request.url.path} validation failed: {details}")
    return error_response(400, ErrorCodes.VALIDATION_ERROR, f"Invalid request: {details}")


@app.exception_handler(OSError)
async def handle_io_error(request: Request, exc: OSError) -> JSONResponse:
    """파일 I/O 실패 → 500."""
    logger.error(f"{request.method} {request.url.path} I/O error: {exc}", exc_info=exc)
    return error_response(500, ErrorCodes.IO_ERROR, f"File operation failed: {exc}")


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """그 외 모든 예외 → 500."""
    logger.error(f"{request.method} {request.url.path} unexpected error: {exc}", exc_info=exc)
    return error_response(500, ErrorCodes.INTERNAL_ERROR, f"Internal server error: {exc}")


# =============================================================================
# Routes
# =============================================================================

app.include_router(documents.api_router, prefix="/api/v1/doc", tags=["Documents API"])
app.include_router(templates.api_router, prefix="/api/v1/template", tags=["Templates API"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.app.main:app",
        host=settings.host,
        port=settings.port,
    )
