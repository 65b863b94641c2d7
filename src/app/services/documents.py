"""
Document Service: 템플릿 이름 → 렌더 결과.

역할:
- 템플릿 저장소에서 종류(확장자) + 존재 검증 (렌더 라이브러리 호출 전)
- render 레이어 호출 → RenderedDocument로 포장
- 요청 간 공유 상태 없음 (렌더러는 호출마다 새로 생성)
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from src.domain.schemas import RenderedDocument, TemplateKind
from src.render import fill_xlsx, generate_xlsx, render_docx, render_docx_batch
from src.templates.manager import TemplateStore

logger = logging.getLogger(__name__)


class DocumentService:
    """
    문서 생성 서비스.

    Usage:
        service = DocumentService(TemplateStore(root))
        document = service.generate_word("report.docx", {"title": "Q3"})
    """

    def __init__(self, store: TemplateStore, autoescape: bool = True):
        self.store = store
        self.autoescape = autoescape

    def generate_word(
        self,
        template_name: str,
        data: Mapping[str, Any] | None,
    ) -> RenderedDocument:
        """
        단일 Word 문서 생성.

        Raises:
            InvalidTemplateNameError, InvalidTemplateTypeError,
            TemplateNotFoundError, InvalidRenderDataError, RenderFailedError
        """
        path = self.store.resolve(template_name, TemplateKind.WORD)
        content = render_docx(path, data, autoescape=self.autoescape)
        return RenderedDocument(content, TemplateKind.WORD)

    def generate_word_batch(
        self,
        template_name: str,
        records: Sequence[Mapping[str, Any]],
    ) -> RenderedDocument:
        """
        배치 Word 문서 생성 (레코드 1개 = 1페이지).

        records가 비어 있으면 빈 content.
        """
        path = self.store.resolve(template_name, TemplateKind.WORD)
        content = render_docx_batch(path, records, autoescape=self.autoescape)
        return RenderedDocument(content, TemplateKind.WORD)

    def fill_excel(
        self,
        template_name: str,
        scalars: Mapping[str, Any] | None = None,
        row_lists: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
    ) -> RenderedDocument:
        """Excel 템플릿 채우기 (목록 먼저, 단일값 나중)."""
        path = self.store.resolve(template_name, TemplateKind.EXCEL)
        content = fill_xlsx(path, scalars, row_lists)
        return RenderedDocument(content, TemplateKind.EXCEL)

    def generate_excel(
        self,
        sheet_name: str | None,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
    ) -> RenderedDocument:
        """템플릿 없이 헤더 + 데이터로 Excel 생성."""
        content = generate_xlsx(sheet_name, headers, rows)
        return RenderedDocument(content, TemplateKind.EXCEL)
