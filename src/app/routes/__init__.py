"""
FastAPI Routes.

API 라우트 (REST, /api/v1 하위)
"""

from . import documents, templates

__all__ = ["documents", "templates"]
