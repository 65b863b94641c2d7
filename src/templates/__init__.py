"""
Templates layer: 템플릿 저장소 + 샘플 템플릿.

역할:
- 템플릿 이름 검증 (경로 탐색 방지), 종류(확장자) 검증
- 업로드/목록/다운로드/삭제
"""

from .manager import (
    TemplateStore,
    sanitize_filename,
    validate_template_kind,
    validate_template_name,
)
from .samples import seed_sample_templates

__all__ = [
    "TemplateStore",
    "sanitize_filename",
    "validate_template_kind",
    "validate_template_name",
    "seed_sample_templates",
]
