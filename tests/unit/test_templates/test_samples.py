"""
test_samples.py - 샘플 템플릿 생성 테스트

검증:
- 없는 것만 생성 (기존 파일 보존)
- 행 반복 테이블 구조: 헤더 / {{key}} / [field]
- 생성된 샘플이 실제로 렌더됨
"""

import io
from pathlib import Path

from docx import Document

from src.render.word import render_docx
from src.templates.samples import (
    EMPLOYEES_TABLE,
    GOODS_TABLE,
    SAMPLE_TEMPLATES,
    seed_sample_templates,
)


class TestSeedSampleTemplates:
    """seed_sample_templates 함수 테스트."""

    def test_creates_all_samples(self, tmp_path: Path):
        """빈 루트 → 샘플 3개 생성."""
        root = tmp_path / "templates"

        created = seed_sample_templates(root)

        assert sorted(p.name for p in created) == sorted(SAMPLE_TEMPLATES)
        assert all(p.is_file() for p in created)

    def test_existing_files_kept(self, tmp_path: Path):
        """이미 있는 파일은 덮어쓰지 않음."""
        existing = tmp_path / "test-template.docx"
        existing.write_bytes(b"custom")

        created = seed_sample_templates(tmp_path)

        assert existing.read_bytes() == b"custom"
        assert existing not in created
        assert len(created) == len(SAMPLE_TEMPLATES) - 1

    def test_second_run_creates_nothing(self, tmp_path: Path):
        """두 번째 실행 → 생성 없음."""
        seed_sample_templates(tmp_path)

        assert seed_sample_templates(tmp_path) == []


class TestSampleStructure:
    """샘플 템플릿 구조 테스트."""

    def test_loop_table_rows(self, tmp_path: Path):
        """loop-table-template: 헤더 / 태그 / 반복 행."""
        seed_sample_templates(tmp_path)

        table = Document(tmp_path / "loop-table-template.docx").tables[0]
        rows = [[cell.text for cell in row.cells] for row in table.rows]

        assert rows[0] == list(GOODS_TABLE.headers)
        assert rows[1][0] == "{{goods}}"
        assert rows[2] == [f"[{field}]" for field in GOODS_TABLE.fields]

    def test_multi_table_has_three_tables(self, tmp_path: Path):
        """multi-table-template: 테이블 3개."""
        seed_sample_templates(tmp_path)

        document = Document(tmp_path / "multi-table-template.docx")

        assert len(document.tables) == 3

    def test_multi_table_renders(self, tmp_path: Path):
        """multi-table-template에 세 목록을 채워 렌더."""
        seed_sample_templates(tmp_path)
        data = {
            "month": "March",
            "products": [{"name": "P1", "category": "C1", "price": 10}],
            "employees": [
                {"name": "Kim", "dept": "Sales", "score": 90},
                {"name": "Lee", "dept": "Dev", "score": 85},
            ],
            "orders": [],
        }

        content = render_docx(tmp_path / "multi-table-template.docx", data)

        tables = Document(io.BytesIO(content)).tables
        assert [len(t.rows) for t in tables] == [3, 4, 2]
        employee_rows = [[c.text for c in row.cells] for row in tables[1].rows[2:]]
        assert employee_rows == [["Kim", "Sales", "90"], ["Lee", "Dev", "85"]]
        assert tables[1].rows[0].cells[0].text == EMPLOYEES_TABLE.headers[0]
