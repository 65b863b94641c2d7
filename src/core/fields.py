"""
Field classifier: 렌더 데이터에서 컬렉션 값 키 감지.

감지된 키마다 Word 렌더러가 "행 반복" 바인딩을 설정함.
주의: 문자열은 문자 단위로 iterable이지만 항상 SCALAR로 취급.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

# 문자 시퀀스지만 값 하나로 취급하는 타입
TEXT_TYPES = (str, bytes, bytearray)


class FieldKind(str, Enum):
    """렌더 데이터 값의 종류 (닫힌 집합)."""
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


def classify_value(value: Any) -> FieldKind:
    """
    값 하나를 SCALAR / MAPPING / SEQUENCE 중 하나로 분류.

    순서가 중요: 텍스트 → 매핑 → 기타 iterable.

    Args:
        value: 렌더 데이터 값

    Returns:
        FieldKind
    """
    if isinstance(value, TEXT_TYPES):
        return FieldKind.SCALAR
    if isinstance(value, Mapping):
        return FieldKind.MAPPING
    if isinstance(value, Iterable):
        return FieldKind.SEQUENCE
    return FieldKind.SCALAR


def detect_sequence_fields(data: Mapping[str, Any] | None) -> list[str]:
    """
    최상위 키 중 SEQUENCE 값을 가진 키 목록 (입력 순서 유지).

    Args:
        data: 렌더 데이터 (None 허용 → 빈 목록)

    Returns:
        행 반복 바인딩 대상 키 목록
    """
    if not data:
        return []

    return [
        key for key, value in data.items()
        if classify_value(value) is FieldKind.SEQUENCE
    ]
