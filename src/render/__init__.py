"""
Render layer: DOCX/XLSX 출력 생성.

역할:
- 템플릿 + 데이터 → 최종 파일 바이트
- docxtpl / python-docx (Word), openpyxl (Excel)
"""

from .excel import ExcelFiller, fill_xlsx, generate_xlsx
from .merge import BatchDocxRenderer, append_document, render_docx_batch
from .word import DocxRenderer, LoopRowBinding, build_loop_bindings, render_docx

__all__ = [
    "render_docx",
    "render_docx_batch",
    "fill_xlsx",
    "generate_xlsx",
    "DocxRenderer",
    "BatchDocxRenderer",
    "ExcelFiller",
    "LoopRowBinding",
    "append_document",
    "build_loop_bindings",
]
