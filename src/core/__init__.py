"""
Core layer: 설정, 로깅, 필드 분류.

역할:
- default.yaml / 환경변수 설정 로드
- 렌더 데이터의 컬렉션 필드 감지
"""

from .config import Settings, get_settings, load_config
from .fields import FieldKind, classify_value, detect_sequence_fields
from .logging import setup_logging

__all__ = [
    # config
    "Settings",
    "get_settings",
    "load_config",
    # fields
    "FieldKind",
    "classify_value",
    "detect_sequence_fields",
    # logging
    "setup_logging",
]
