"""
샘플 템플릿 생성기.

서비스 시작 시 템플릿 루트에 데모용 Word 템플릿을 만든다 (이미 있으면 건너뜀).

행 반복 테이블 규칙:
- 1행: 헤더
- 2행: 태그 행 - {{key}} (반드시 반복 행 바로 위)
- 3행: 반복 행 - [field] 문법
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from docx import Document
from docx.document import Document as DocumentObject
from docx.shared import Pt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoopTableLayout:
    """행 반복 테이블 정의."""
    key: str
    headers: tuple[str, ...]
    fields: tuple[str, ...]


GOODS_TABLE = LoopTableLayout(
    key="goods",
    headers=("Product Name", "Category", "Price"),
    fields=("name", "category", "price"),
)
PRODUCTS_TABLE = LoopTableLayout(
    key="products",
    headers=("Product Name", "Category", "Price"),
    fields=("name", "category", "price"),
)
EMPLOYEES_TABLE = LoopTableLayout(
    key="employees",
    headers=("Name", "Department", "Score"),
    fields=("name", "dept", "score"),
)
ORDERS_TABLE = LoopTableLayout(
    key="orders",
    headers=("Order ID", "Customer", "Amount"),
    fields=("orderId", "customer", "amount"),
)


# =============================================================================
# Builders
# =============================================================================

def add_loop_table(document: DocumentObject, layout: LoopTableLayout) -> None:
    """헤더 / 태그 / 반복 행 3줄짜리 테이블 추가."""
    table = document.add_table(rows=3, cols=len(layout.headers))
    table.style = "Table Grid"

    header_row, tag_row, loop_row = table.rows

    for cell, header in zip(header_row.cells, layout.headers):
        cell.text = header

    tag_row.cells[0].text = "{{" + layout.key + "}}"

    for cell, field in zip(loop_row.cells, layout.fields):
        cell.text = f"[{field}]"


def _add_heading_run(document: DocumentObject, text: str, size: int) -> None:
    run = document.add_paragraph().add_run(text)
    run.bold = True
    run.font.size = Pt(size)


def build_simple_template(path: Path) -> None:
    """{{title}}, {{date}}, {{content}} 단순 치환 템플릿."""
    document = Document()
    _add_heading_run(document, "Document Title: {{title}}", 20)
    document.add_paragraph().add_run("Date: {{date}}").italic = True
    document.add_paragraph("Content: {{content}}")
    document.save(path)


def build_loop_table_template(path: Path) -> None:
    """{{month}} + goods 행 반복 테이블."""
    document = Document()
    _add_heading_run(document, "Monthly Report for {{month}}", 16)
    add_loop_table(document, GOODS_TABLE)
    document.save(path)


def build_multi_table_template(path: Path) -> None:
    """products / employees / orders 행 반복 테이블 3개."""
    document = Document()
    _add_heading_run(document, "Monthly Report - {{month}}", 18)

    for label, layout in (
        ("Product List:", PRODUCTS_TABLE),
        ("Employee List:", EMPLOYEES_TABLE),
        ("Order List:", ORDERS_TABLE),
    ):
        document.add_paragraph().add_run(label).bold = True
        add_loop_table(document, layout)
        document.add_paragraph()

    document.save(path)


SAMPLE_TEMPLATES: dict[str, Callable[[Path], None]] = {
    "test-template.docx": build_simple_template,
    "loop-table-template.docx": build_loop_table_template,
    "multi-table-template.docx": build_multi_table_template,
}


def seed_sample_templates(template_root: Path) -> list[Path]:
    """
    샘플 템플릿을 템플릿 루트에 생성 (없는 것만).

    Args:
        template_root: 템플릿 루트 디렉터리

    Returns:
        새로 생성된 파일 경로 목록
    """
    template_root.mkdir(parents=True, exist_ok=True)
    created = []

    for filename, build in SAMPLE_TEMPLATES.items():
        path = template_root / filename
        if path.exists():
            logger.info(f"Sample template already exists at: {path}")
            continue

        logger.info(f"Creating sample template at: {path}")
        build(path)
        created.append(path)

    return created
