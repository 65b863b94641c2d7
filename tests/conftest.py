"""
Pytest fixtures for the document generation tests.

템플릿은 모두 tmp_path에 python-docx / openpyxl로 즉석 생성.
- Word: 단순 치환, 행 반복 테이블, 문단/테이블 교차 (인증서)
- Excel: 단일값 + 목록 행 + 병합 셀 + 행 높이
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from docx import Document
from fastapi.testclient import TestClient
from openpyxl import Workbook
from openpyxl.styles import Font

from src.templates.manager import TemplateStore
from src.templates.samples import GOODS_TABLE, add_loop_table

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """테스트용 템플릿 루트."""
    root = tmp_path / "templates"
    root.mkdir()
    return root


@pytest.fixture
def store(template_root: Path) -> TemplateStore:
    """TemplateStore 인스턴스."""
    return TemplateStore(template_root, lock_timeout=1.0)


# =============================================================================
# Word Template Fixtures
# =============================================================================

@pytest.fixture
def simple_docx_template(template_root: Path) -> Path:
    """
    단순 치환 템플릿.

    placeholder: {{title}}, {{date}}
    """
    path = template_root / "simple.docx"

    doc = Document()
    doc.add_paragraph("Title: {{title}}")
    doc.add_paragraph("Date: {{date}}")
    doc.save(path)

    return path


@pytest.fixture
def loop_docx_template(template_root: Path) -> Path:
    """
    행 반복 테이블 템플릿.

    {{month}} 문단 + goods 테이블 (헤더 / {{goods}} / [name] [category] [price])
    """
    path = template_root / "goods.docx"

    doc = Document()
    doc.add_paragraph("Monthly Report for {{month}}")
    add_loop_table(doc, GOODS_TABLE)
    doc.add_paragraph("End of report")
    doc.save(path)

    return path


@pytest.fixture
def certificate_docx_template(template_root: Path) -> Path:
    """
    인증서 템플릿: 문단 → 테이블 → 문단 (교차 순서).

    placeholder: {{name}}, {{score}}
    """
    path = template_root / "certificate.docx"

    doc = Document()
    doc.add_paragraph("Certificate for {{name}}")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Score"
    table.rows[0].cells[1].text = "{{score}}"
    doc.add_paragraph("Signed")
    doc.save(path)

    return path


# =============================================================================
# Excel Template Fixtures
# =============================================================================

@pytest.fixture
def fill_xlsx_template(template_root: Path) -> Path:
    """
    Excel 채우기 템플릿.

    A1: {title} (병합 A1:C1)
    A2..C2: 헤더 (굵게)
    A3..C3: {goods.name} / {goods.price} / {.note}  (행 높이 20)
    A5: Total: {total}
    A6: {total}  (병합 A6:B6, 행 높이 30)
    """
    path = template_root / "goods.xlsx"

    wb = Workbook()
    ws = wb.active
    ws.title = "Report"

    ws["A1"] = "{title}"
    ws.merge_cells("A1:C1")

    for column, header in zip("ABC", ("Name", "Price", "Note")):
        ws[f"{column}2"] = header
        ws[f"{column}2"].font = Font(bold=True)

    ws["A3"] = "{goods.name}"
    ws["B3"] = "{goods.price}"
    ws["C3"] = "{.note}"
    ws["A3"].font = Font(italic=True)
    ws.row_dimensions[3].height = 20

    ws["A5"] = "Total: {total}"
    ws["A6"] = "{total}"
    ws.merge_cells("A6:B6")
    ws.row_dimensions[6].height = 30

    wb.save(path)
    return path


@pytest.fixture
def two_list_xlsx_template(template_root: Path) -> Path:
    """
    목록 2개 + 단일값 템플릿 (목록 순서 독립성 검증용).

    A1: {title}
    A3: {first.value}
    A5: {second.value}
    A7: {footer}
    """
    path = template_root / "two-lists.xlsx"

    wb = Workbook()
    ws = wb.active
    ws["A1"] = "{title}"
    ws["A3"] = "{first.value}"
    ws["A5"] = "{second.value}"
    ws["A7"] = "{footer}"
    wb.save(path)

    return path


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def client(
    template_root: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient (템플릿 루트 = tmp_path, 샘플 생성 끔).

    lifespan이 환경변수로 설정을 읽으므로 TestClient 진입 전에 설정.
    """
    monkeypatch.setenv("DOCGEN_TEMPLATE_PATH", str(template_root))
    monkeypatch.setenv("DOCGEN_SEED_SAMPLES", "false")

    from src.app.main import app

    with TestClient(app) as test_client:
        yield test_client
