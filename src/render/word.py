"""
Word (DOCX) 렌더러: docxtpl 기반.

- placeholder: {{title}}, {{date}} 등 (Jinja2 문법)
- 행 반복: 데이터의 컬렉션 필드마다 LoopRowBinding 자동 설정
  태그 행 {{goods}} 바로 아래 행이 반복 행, 반복 행 안의 [field]는 요소의 필드
- docxtpl 고유 문법 {%tr for ... %}도 그대로 사용 가능
"""

import io
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

from docx.document import Document as DocumentObject
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls, qn
from docx.text.paragraph import Paragraph
from docxtpl import DocxTemplate

from src.core.fields import detect_sequence_fields
from src.domain.constants import LOOP_ROW_VARIABLE
from src.domain.errors import (
    DocGenError,
    InvalidRenderDataError,
    RenderFailedError,
    TemplateNotFoundError,
)

logger = logging.getLogger(__name__)

# 반복 행 안의 [field] 마커
FIELD_MARKER_PATTERN = re.compile(r"\[([^\[\]{}%]+)\]")


# =============================================================================
# Loop Row Binding (행 반복 정책)
# =============================================================================

@dataclass
class LoopRowBinding:
    """
    키 하나에 대한 행 반복 정책.

    apply() 전/후:
        | Name     | Price   |        | Name                 | Price                 |
        | {{goods}}|         |   →    | (빈 태그 행)          |                       |
        | [name]   | [price] |        | {%tr for _loop_row in goods %}               |
                                      | {{ _loop_row['name'] }} | {{ _loop_row['price'] }} |
                                      | {%tr endfor %}                               |
    """
    key: str

    @property
    def tag_pattern(self) -> re.Pattern[str]:
        return re.compile(r"\{\{\s*" + re.escape(self.key) + r"\s*\}\}")

    def apply(self, document: DocumentObject) -> int:
        """
        문서의 모든 테이블(중첩 포함)에서 태그 행을 찾아 반복 행으로 변환.

        Args:
            document: docxtpl이 렌더 전에 들고 있는 python-docx 문서

        Returns:
            변환한 태그 행 수

        Raises:
            RenderFailedError: 태그가 테이블 마지막 행에 있음 (반복 행 없음)
        """
        pattern = self.tag_pattern
        tag_rows = [
            (tr, paragraph)
            for tr in _iter_rows(document)
            for paragraph in _row_paragraphs(tr)
            if pattern.search(paragraph.text)
        ]

        for tr, paragraph in tag_rows:
            template_row = _next_row(tr)
            if template_row is None:
                raise RenderFailedError(
                    f"Loop tag '{{{{{self.key}}}}}' has no template row below it",
                    key=self.key,
                )

            _replace_in_paragraph(paragraph, pattern, "")

            for row_paragraph in _row_paragraphs(template_row):
                _replace_in_paragraph(
                    row_paragraph,
                    FIELD_MARKER_PATTERN,
                    lambda m: "{{ %s[%r] }}" % (LOOP_ROW_VARIABLE, m.group(1).strip()),
                )

            template_row.addprevious(
                _control_row(f"{{%tr for {LOOP_ROW_VARIABLE} in {self.key} %}}")
            )
            template_row.addnext(_control_row("{%tr endfor %}"))

        return len(tag_rows)


def build_loop_bindings(data: Mapping[str, Any] | None) -> list[LoopRowBinding]:
    """
    렌더 데이터 → 행 반복 바인딩 목록.

    Jinja 식별자가 아닌 키는 for 문에 쓸 수 없으므로 제외.
    """
    bindings = []
    for key in detect_sequence_fields(data):
        if not key.isidentifier():
            logger.debug(f"Skipping loop binding for non-identifier field: {key!r}")
            continue
        logger.debug(f"Auto-binding loop row policy for field: {key}")
        bindings.append(LoopRowBinding(key))
    return bindings


def _iter_rows(document: DocumentObject) -> Iterator[Any]:
    """본문의 모든 w:tr (중첩 테이블 포함, 문서 순서)."""
    for tbl in document.element.body.iter(qn("w:tbl")):
        yield from tbl.findall(qn("w:tr"))


def _row_paragraphs(tr: Any) -> list[Paragraph]:
    """행의 셀 직속 문단 (중첩 테이블 문단 제외)."""
    return [
        Paragraph(p, None)
        for tc in tr.findall(qn("w:tc"))
        for p in tc.findall(qn("w:p"))
    ]


def _next_row(tr: Any) -> Any | None:
    sibling = tr.getnext()
    while sibling is not None and sibling.tag != qn("w:tr"):
        sibling = sibling.getnext()
    return sibling


def _control_row(text: str) -> Any:
    """docxtpl이 행 전체를 {% ... %}로 치환하는 제어 행."""
    return parse_xml(
        f"<w:tr {nsdecls('w')}><w:tc><w:p><w:r>"
        f'<w:t xml:space="preserve">{escape(text)}</w:t>'
        f"</w:r></w:p></w:tc></w:tr>"
    )


def _replace_in_paragraph(paragraph: Paragraph, pattern: re.Pattern[str], repl: Any) -> None:
    """
    문단 텍스트 치환 (run 서식 최대한 유지).

    마커가 모두 run 하나 안에 있으면 run 단위로 치환하고,
    여러 run에 걸쳐 쪼개진 마커가 있으면 문단 텍스트를 통째로 다시 씀.
    치환은 원문에 한 번만 적용 (치환 결과를 다시 검사하지 않음).
    """
    text = paragraph.text
    expected = len(pattern.findall(text))
    if not expected:
        return

    runs = paragraph.runs
    if sum(len(pattern.findall(run.text)) for run in runs) == expected:
        for run in runs:
            if pattern.search(run.text):
                run.text = pattern.sub(repl, run.text)
    else:
        paragraph.text = pattern.sub(repl, text)


# =============================================================================
# Renderer
# =============================================================================

class DocxRenderer:
    """
    Word 문서 렌더러.

    render()마다 템플릿을 새로 컴파일함 (렌더가 컴파일 상태를 변경하므로
    DocxTemplate 인스턴스는 재사용하지 않음).

    Usage:
        renderer = DocxRenderer(template_path)
        content = renderer.render(data)
    """

    def __init__(self, template_path: Path, autoescape: bool = True):
        """
        Args:
            template_path: DOCX 템플릿 파일 경로
            autoescape: 값의 XML 특수문자 이스케이프 여부

        Raises:
            TemplateNotFoundError
        """
        if not template_path.is_file():
            raise TemplateNotFoundError(template_path.name, path=str(template_path))

        self.template_path = template_path
        self.autoescape = autoescape

    def compile(self, data: Mapping[str, Any] | None) -> DocxTemplate:
        """
        템플릿 새로 로드 + 행 반복 바인딩 적용.

        Returns:
            렌더 전 DocxTemplate (호출자 단독 소유)
        """
        doc = DocxTemplate(str(self.template_path))
        doc.init_docx()

        for binding in build_loop_bindings(data):
            binding.apply(doc.docx)

        return doc

    def render(self, data: Mapping[str, Any] | None) -> bytes:
        """
        템플릿에 데이터를 채워 DOCX 바이트 생성.

        Args:
            data: 렌더 컨텍스트 (빈 dict 허용, None 불가)

        Returns:
            완성된 DOCX 바이트 (메모리 버퍼에서 직렬화)

        Raises:
            InvalidRenderDataError: data가 None
            RenderFailedError: 컴파일/렌더/저장 실패
        """
        if data is None:
            raise InvalidRenderDataError(
                "render data must not be null",
                template=self.template_path.name,
            )

        logger.info(f"Generating word document using template: {self.template_path}")

        try:
            doc = self.compile(data)
            doc.render(dict(data), autoescape=self.autoescape)

            with io.BytesIO() as buffer:
                doc.save(buffer)
                content = buffer.getvalue()

        except DocGenError:
            raise
        except Exception as e:
            logger.error(f"Failed to render word template {self.template_path.name}: {e}")
            raise RenderFailedError(
                f"Failed to render word template: {e}",
                template=self.template_path.name,
            ) from e

        logger.info(f"Word document generated successfully, size: {len(content)} bytes")
        return content


def render_docx(
    template_path: Path,
    data: Mapping[str, Any] | None,
    autoescape: bool = True,
) -> bytes:
    """
    Word 문서 생성 (간편 함수).

    Args:
        template_path: DOCX 템플릿 파일 경로
        data: 템플릿에 채울 데이터
        autoescape: XML 이스케이프 여부

    Returns:
        DOCX 바이트
    """
    renderer = DocxRenderer(template_path, autoescape=autoescape)
    return renderer.render(data)
