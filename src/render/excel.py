"""
Excel (XLSX) 렌더러: openpyxl 기반.

템플릿 채우기 (ExcelFiller):
- {name}: 단일값 placeholder
- {list.field}: 이름 있는 목록의 행 반복 placeholder
- {.field}: 이름 없는 행 반복 placeholder (처음 채워지는 목록에 바인딩)
- 순서: 목록 채우기 전부 → 단일값 채우기
  (목록이 행을 삽입하면 아래 단일값 셀 좌표가 밀리므로)

템플릿 없는 생성 (generate_xlsx):
- 헤더 + 2차원 데이터, 열 너비는 가장 긴 내용 기준
"""

import io
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from copy import copy
from decimal import Decimal
from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import MergedCell
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from src.domain.constants import DEFAULT_SHEET_NAME, MAX_COLUMN_WIDTH
from src.domain.errors import DocGenError, RenderFailedError, TemplateNotFoundError

logger = logging.getLogger(__name__)

SCALAR_PLACEHOLDER = re.compile(r"\{([^{}.]+)\}")
LIST_PLACEHOLDER = re.compile(r"\{([^{}.]*)\.([^{}]+)\}")

# lookup 결과: placeholder를 건드리지 않음
_UNCHANGED = object()

Lookup = Callable[[re.Match[str]], Any]


def _convert_value(value: Any) -> Any:
    """값 변환 (Decimal → float, 컨테이너 → 문자열)."""
    if isinstance(value, Decimal):
        # Excel은 Decimal을 직접 지원하지 않음
        return float(value)
    if isinstance(value, (dict, list, tuple, set)):
        return str(value)
    return value


def _substitute(text: str, pattern: re.Pattern[str], lookup: Lookup) -> Any:
    """
    셀 텍스트의 placeholder 치환.

    셀 전체가 placeholder 하나면 원래 타입(숫자 등) 유지,
    문장 속 placeholder는 문자열로 치환.
    """
    full = pattern.fullmatch(text)
    if full is not None:
        value = lookup(full)
        return text if value is _UNCHANGED else _convert_value(value)

    def replace(match: re.Match[str]) -> str:
        value = lookup(match)
        if value is _UNCHANGED:
            return match.group(0)
        return "" if value is None else str(_convert_value(value))

    return pattern.sub(replace, text)


# =============================================================================
# Template Fill
# =============================================================================

class ExcelFiller:
    """
    Excel 템플릿 채우기.

    Usage:
        filler = ExcelFiller(template_path)
        content = filler.fill({"title": "Report"}, {"goods": [{"name": "A"}]})
    """

    def __init__(self, template_path: Path):
        """
        Args:
            template_path: XLSX 템플릿 파일 경로

        Raises:
            TemplateNotFoundError
        """
        if not template_path.is_file():
            raise TemplateNotFoundError(template_path.name, path=str(template_path))

        self.template_path = template_path

    def fill(
        self,
        scalars: Mapping[str, Any] | None = None,
        row_lists: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
    ) -> bytes:
        """
        템플릿에 데이터를 채워 XLSX 바이트 생성.

        목록은 요청 순서대로 먼저 채우고, 단일값은 마지막에 채움.
        목록이 채운 셀은 이후 목록/단일값 단계에서 다시 검사하지 않음
        (데이터 속 "{...}" 텍스트는 값 그대로 유지).
        둘 다 비어 있으면 템플릿을 그대로 다시 저장.

        Args:
            scalars: {name} placeholder 값
            row_lists: 목록 이름 → 행 데이터 목록

        Returns:
            XLSX 바이트

        Raises:
            RenderFailedError
        """
        logger.info(
            f"Filling Excel template: {self.template_path}, "
            f"data keys: {list(scalars) if scalars else []}, "
            f"list keys: {list(row_lists) if row_lists else []}"
        )

        try:
            wb = load_workbook(self.template_path)
            # 시트별로 목록 단계가 값을 쓴 셀 (row, column)
            written: dict[str, set[tuple[int, int]]] = {
                ws.title: set() for ws in wb.worksheets
            }

            for list_name, rows in (row_lists or {}).items():
                logger.debug(f"Filling list data for key: {list_name}, rows: {len(rows)}")
                for ws in wb.worksheets:
                    self._fill_list(ws, list_name, rows, written[ws.title])

            if scalars:
                for ws in wb.worksheets:
                    self._fill_scalars(ws, scalars, written[ws.title])

            with io.BytesIO() as out:
                wb.save(out)
                content = out.getvalue()

        except DocGenError:
            raise
        except Exception as e:
            logger.error(f"Failed to fill Excel template {self.template_path.name}: {e}")
            raise RenderFailedError(
                f"Failed to fill Excel template: {e}",
                template=self.template_path.name,
            ) from e

        logger.info(f"Excel template filled successfully, size: {len(content)} bytes")
        return content

    # =========================================================================
    # List Fill
    # =========================================================================

    def _list_lookup(self, list_name: str, item: Any) -> Lookup:
        def lookup(match: re.Match[str]) -> Any:
            owner = match.group(1).strip()
            if owner and owner != list_name:
                return _UNCHANGED
            if not isinstance(item, Mapping):
                return None
            return item.get(match.group(2).strip())

        return lookup

    def _is_list_cell(self, value: Any, list_name: str) -> bool:
        if not isinstance(value, str):
            return False
        return any(
            match.group(1).strip() in ("", list_name)
            for match in LIST_PLACEHOLDER.finditer(value)
        )

    def _fill_list(
        self,
        ws: Worksheet,
        list_name: str,
        rows: Sequence[Mapping[str, Any]],
        written: set[tuple[int, int]],
    ) -> None:
        """시트의 목록 템플릿 행을 아래에서 위로 확장."""
        template_rows = sorted(
            {
                cell.row
                for row in ws.iter_rows()
                for cell in row
                if (cell.row, cell.column) not in written
                and self._is_list_cell(cell.value, list_name)
            },
            reverse=True,
        )

        for row_idx in template_rows:
            self._expand_row(ws, row_idx, list_name, rows, written)

    def _expand_row(
        self,
        ws: Worksheet,
        row_idx: int,
        list_name: str,
        rows: Sequence[Mapping[str, Any]],
        written: set[tuple[int, int]],
    ) -> None:
        """
        템플릿 행 하나를 요소 수만큼의 행으로 확장 (새 행 강제 삽입).

        빈 목록이면 placeholder만 지움.
        """
        template_cells = [
            (cell.column, cell.value)
            for cell in ws[row_idx]
            if (cell.row, cell.column) not in written
            and self._is_list_cell(cell.value, list_name)
        ]

        extra = len(rows) - 1
        if extra > 0:
            self._insert_rows_below(ws, row_idx, extra)
            first_new = row_idx + 1
            shifted = {
                (r + extra if r >= first_new else r, c) for r, c in written
            }
            written.clear()
            written.update(shifted)

        items: Sequence[Any] = rows if rows else [{}]
        for offset, item in enumerate(items):
            lookup = self._list_lookup(list_name, item)
            for column, text in template_cells:
                cell = ws.cell(row=row_idx + offset, column=column)
                if isinstance(cell, MergedCell):
                    continue
                cell.value = _substitute(text, LIST_PLACEHOLDER, lookup)
                written.add((cell.row, column))

    def _insert_rows_below(self, ws: Worksheet, row_idx: int, amount: int) -> None:
        """
        row_idx 아래에 amount개 행 삽입 + 템플릿 행 서식 복사.

        openpyxl insert_rows는 셀만 이동하므로 병합 범위와 행 높이는 직접 이동.
        템플릿 행 아래 병합은 통째로 이동, 템플릿 행에 걸친 세로 병합은 삽입 행만큼 늘어남.
        """
        first_new = row_idx + 1

        moved_merges = []
        grown_merges = []
        for cr in list(ws.merged_cells.ranges):
            bounds = (cr.min_row, cr.min_col, cr.max_row, cr.max_col)
            if cr.min_row >= first_new:
                moved_merges.append(bounds)
            elif cr.max_row >= first_new:
                grown_merges.append(bounds)
            else:
                continue
            ws.unmerge_cells(
                start_row=cr.min_row, start_column=cr.min_col,
                end_row=cr.max_row, end_column=cr.max_col,
            )

        heights = {
            r: dim.height
            for r, dim in list(ws.row_dimensions.items())
            if r >= first_new and dim.height is not None
        }

        ws.insert_rows(first_new, amount)

        for r in heights:
            ws.row_dimensions[r].height = None
        for r, height in heights.items():
            ws.row_dimensions[r + amount].height = height

        for min_row, min_col, max_row, max_col in moved_merges:
            ws.merge_cells(
                start_row=min_row + amount,
                start_column=min_col,
                end_row=max_row + amount,
                end_column=max_col,
            )
        for min_row, min_col, max_row, max_col in grown_merges:
            ws.merge_cells(
                start_row=min_row,
                start_column=min_col,
                end_row=max_row + amount,
                end_column=max_col,
            )

        # 템플릿 행 서식/높이/가로 병합 복사
        template_height = ws.row_dimensions[row_idx].height
        row_merges = [
            (cr.min_col, cr.max_col)
            for cr in list(ws.merged_cells.ranges)
            if cr.min_row == cr.max_row == row_idx
        ]

        for new_row in range(first_new, first_new + amount):
            for cell in ws[row_idx]:
                if cell.has_style:
                    ws.cell(row=new_row, column=cell.column)._style = copy(cell._style)
            if template_height is not None:
                ws.row_dimensions[new_row].height = template_height
            for min_col, max_col in row_merges:
                ws.merge_cells(
                    start_row=new_row, start_column=min_col, end_row=new_row, end_column=max_col
                )

    # =========================================================================
    # Scalar Fill
    # =========================================================================

    def _fill_scalars(
        self,
        ws: Worksheet,
        scalars: Mapping[str, Any],
        written: set[tuple[int, int]],
    ) -> None:
        """{name} placeholder 치환. 모르는 이름과 목록이 채운 셀은 그대로 둠."""

        def lookup(match: re.Match[str]) -> Any:
            name = match.group(1).strip()
            return scalars[name] if name in scalars else _UNCHANGED

        for row in ws.iter_rows():
            for cell in row:
                if (cell.row, cell.column) in written:
                    continue
                if isinstance(cell.value, str) and SCALAR_PLACEHOLDER.search(cell.value):
                    cell.value = _substitute(cell.value, SCALAR_PLACEHOLDER, lookup)


def fill_xlsx(
    template_path: Path,
    scalars: Mapping[str, Any] | None = None,
    row_lists: Mapping[str, Sequence[Mapping[str, Any]]] | None = None,
) -> bytes:
    """Excel 템플릿 채우기 (간편 함수)."""
    return ExcelFiller(template_path).fill(scalars, row_lists)


# =============================================================================
# Sheet Generation (템플릿 없음)
# =============================================================================

def generate_xlsx(
    sheet_name: str | None,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
) -> bytes:
    """
    헤더 + 2차원 데이터로 새 Excel 문서 생성.

    Args:
        sheet_name: 시트 이름 (비어 있으면 "Sheet1")
        headers: 헤더 열 이름
        rows: 데이터 행 (열 순서는 headers와 동일)

    Returns:
        XLSX 바이트

    Raises:
        RenderFailedError: 잘못된 시트 이름 등
    """
    if not sheet_name or not sheet_name.strip():
        sheet_name = DEFAULT_SHEET_NAME

    logger.info(
        f"Generating Excel document, sheet: {sheet_name}, "
        f"columns: {len(headers)}, rows: {len(rows)}"
    )

    try:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        ws.append(list(headers))
        for cell in ws[1]:
            cell.font = Font(bold=True)

        for row in rows:
            ws.append([_convert_value(value) for value in row])

        _fit_column_widths(ws)

        with io.BytesIO() as out:
            wb.save(out)
            content = out.getvalue()

    except Exception as e:
        logger.error(f"Failed to generate Excel document: {e}")
        raise RenderFailedError(
            f"Failed to generate Excel document: {e}",
            sheet=sheet_name,
        ) from e

    logger.info(f"Excel document generated successfully, size: {len(content)} bytes")
    return content


def _fit_column_widths(ws: Worksheet) -> None:
    """열 너비 = 가장 긴 셀 내용의 UTF-8 바이트 길이 (최대 255)."""
    for column_cells in ws.iter_cols():
        lengths = [
            len(str(cell.value).encode("utf-8"))
            for cell in column_cells
            if cell.value is not None
        ]
        if not lengths:
            continue
        letter = get_column_letter(column_cells[0].column)
        ws.column_dimensions[letter].width = min(max(lengths), MAX_COLUMN_WIDTH)
