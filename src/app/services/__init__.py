"""
Application Services.

역할:
- documents: 템플릿 이름 검증 → Word/Excel 렌더 → RenderedDocument
"""

from .documents import DocumentService

__all__ = [
    "DocumentService",
]
