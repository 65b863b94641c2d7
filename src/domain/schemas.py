"""
Data schemas for the document generation service.

규칙:
- 모든 객체는 요청 1회 범위에서 생성/사용/폐기 (영속 식별자 없음)
- API 필드명은 camelCase (기존 클라이언트 호환), 내부 속성은 snake_case
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import DOCX_EXTENSION, DOCX_MEDIA_TYPE, XLSX_EXTENSION, XLSX_MEDIA_TYPE

# =============================================================================
# Template Kind
# =============================================================================

class TemplateKind(str, Enum):
    """템플릿/출력 문서 종류 (닫힌 집합)."""
    WORD = "word"
    EXCEL = "excel"

    @property
    def extension(self) -> str:
        return DOCX_EXTENSION if self is TemplateKind.WORD else XLSX_EXTENSION

    @property
    def media_type(self) -> str:
        return DOCX_MEDIA_TYPE if self is TemplateKind.WORD else XLSX_MEDIA_TYPE

    @classmethod
    def from_filename(cls, filename: str) -> "TemplateKind | None":
        """확장자로 종류 판별. 지원하지 않는 확장자면 None."""
        lower = filename.lower()
        for kind in cls:
            if lower.endswith(kind.extension):
                return kind
        return None


# =============================================================================
# Rendered Output
# =============================================================================

@dataclass
class RenderedDocument:
    """
    렌더 결과 바이트 + 종류.

    호출자가 단독 소유. 요청마다 새로 생성됨.
    """
    content: bytes
    kind: TemplateKind

    @property
    def media_type(self) -> str:
        return self.kind.media_type

    @property
    def extension(self) -> str:
        return self.kind.extension

    @property
    def size(self) -> int:
        return len(self.content)


# =============================================================================
# API Request Schemas
# =============================================================================

class _RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RenderRequest(_RequestModel):
    """단일 Word 문서 생성 요청."""
    template_name: str = Field(alias="templateName", min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)
    file_name: str | None = Field(default=None, alias="fileName")


class BatchRenderRequest(_RequestModel):
    """배치 Word 문서 생성 요청: 레코드 1개 = 1페이지."""
    template_name: str = Field(alias="templateName", min_length=1)
    data_list: list[dict[str, Any]] = Field(alias="dataList", min_length=1)
    file_name: str | None = Field(default=None, alias="fileName")


class FillRequest(_RequestModel):
    """
    Excel 템플릿 채우기 요청.

    - data: {name} 단일값 placeholder
    - list_data: {list.field} / {.field} 행 반복 placeholder
    """
    template_name: str = Field(alias="templateName", min_length=1)
    data: dict[str, Any] | None = None
    list_data: dict[str, list[dict[str, Any]]] | None = Field(
        default=None, alias="listData"
    )
    file_name: str | None = Field(default=None, alias="fileName")


class SheetRequest(_RequestModel):
    """템플릿 없이 헤더 + 2차원 데이터로 Excel 생성 요청."""
    sheet_name: str | None = Field(default=None, alias="sheetName")
    headers: list[str] = Field(min_length=1)
    data: list[list[Any]] = Field(min_length=1)
    file_name: str | None = Field(default=None, alias="fileName")
