"""
배치 Word 렌더러: 레코드 1개 = 1페이지, 페이지 나누기로 합친 단일 문서.

병합 방식:
- 첫 페이지의 렌더 결과(바이트)를 다시 열어 메인 문서로 사용
- 이후 페이지: 메인 문서에 페이지 나누기 추가 → 페이지 본문의 최상위
  문단/테이블을 문서 순서 그대로 복사 (문단/테이블 교차 순서 유지)
- 페이지 문서는 복사 직후 닫힘 (성공/실패 무관)
"""

import copy
import io
import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from docx import Document
from docx.document import Document as DocumentObject
from docx.oxml.ns import qn

from src.domain.errors import DocGenError, RenderFailedError

from .word import DocxRenderer

logger = logging.getLogger(__name__)

# 페이지 간 복사 대상 본문 요소
COPIED_BODY_TAGS = (qn("w:p"), qn("w:tbl"))


@contextmanager
def open_document(content: bytes) -> Iterator[DocumentObject]:
    """
    DOCX 바이트를 문서로 열고, 블록 종료 시 버퍼를 닫음.

    Usage:
        with open_document(page_bytes) as page:
            append_document(main, page)
    """
    buffer = io.BytesIO(content)
    try:
        yield Document(buffer)
    finally:
        buffer.close()


def append_document(target: DocumentObject, source: DocumentObject) -> int:
    """
    source 본문의 최상위 문단/테이블을 target 본문 끝(sectPr 앞)에 복사.

    Args:
        target: 메인 문서
        source: 페이지 문서

    Returns:
        복사한 요소 수
    """
    body = target.element.body
    sect_pr = body.find(qn("w:sectPr"))

    copied = 0
    for child in source.element.body.iterchildren():
        if child.tag not in COPIED_BODY_TAGS:
            continue

        clone = copy.deepcopy(child)
        if sect_pr is not None:
            sect_pr.addprevious(clone)
        else:
            body.append(clone)
        copied += 1

    return copied


class BatchDocxRenderer:
    """
    배치 Word 렌더러.

    Usage:
        renderer = BatchDocxRenderer(template_path)
        content = renderer.render([{"name": "A"}, {"name": "B"}])
    """

    def __init__(self, template_path: Path, autoescape: bool = True):
        """
        Args:
            template_path: DOCX 템플릿 파일 경로

        Raises:
            TemplateNotFoundError: 어떤 페이지도 렌더하기 전에 확인
        """
        self.page_renderer = DocxRenderer(template_path, autoescape=autoescape)
        self.template_path = template_path

    def render(self, records: Sequence[Mapping[str, Any]]) -> bytes:
        """
        레코드별로 렌더 후 하나의 문서로 병합.

        페이지는 순서대로 하나씩 렌더 (렌더마다 새 템플릿 인스턴스).

        Args:
            records: 페이지별 렌더 데이터

        Returns:
            병합된 DOCX 바이트 (records가 비어 있으면 b"")

        Raises:
            InvalidRenderDataError: 레코드가 None
            RenderFailedError: 렌더/병합/저장 실패
        """
        total = len(records)
        logger.info(
            f"Generating batch word document using template: {self.template_path}, "
            f"data count: {total}"
        )

        if total == 0:
            return b""

        try:
            main_doc: DocumentObject | None = None

            for page_no, data in enumerate(records, start=1):
                page_bytes = self.page_renderer.render(data)

                if main_doc is None:
                    with open_document(page_bytes) as first_page:
                        main_doc = first_page
                else:
                    main_doc.add_page_break()
                    with open_document(page_bytes) as page:
                        append_document(main_doc, page)

                logger.debug(f"Rendered page {page_no} of {total}")

            with io.BytesIO() as out:
                main_doc.save(out)
                content = out.getvalue()

        except DocGenError:
            raise
        except Exception as e:
            logger.error(f"Failed to merge batch pages for {self.template_path.name}: {e}")
            raise RenderFailedError(
                f"Failed to merge batch word document: {e}",
                template=self.template_path.name,
            ) from e

        logger.info(
            f"Batch word document generated successfully, pages: {total}, "
            f"size: {len(content)} bytes"
        )
        return content


def render_docx_batch(
    template_path: Path,
    records: Sequence[Mapping[str, Any]],
    autoescape: bool = True,
) -> bytes:
    """배치 Word 문서 생성 (간편 함수)."""
    return BatchDocxRenderer(template_path, autoescape=autoescape).render(records)
