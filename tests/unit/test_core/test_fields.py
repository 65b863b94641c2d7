"""
test_fields.py - 렌더 데이터 필드 분류 테스트

규칙:
- 문자열/바이트는 iterable이어도 SCALAR
- Mapping → MAPPING, 그 외 iterable → SEQUENCE
- None / 빈 dict → 빈 목록, 입력 순서 유지
"""

from collections import OrderedDict
from decimal import Decimal

import pytest

from src.core.fields import FieldKind, classify_value, detect_sequence_fields

# =============================================================================
# classify_value 테스트
# =============================================================================

class TestClassifyValue:
    """classify_value 함수 테스트."""

    @pytest.mark.parametrize("value", ["", "abc", "한글", b"bytes", bytearray(b"x")])
    def test_text_is_scalar(self, value):
        """문자열/바이트는 항상 SCALAR."""
        assert classify_value(value) is FieldKind.SCALAR

    @pytest.mark.parametrize("value", [0, 3.14, Decimal("1.5"), True, None, object()])
    def test_non_iterable_is_scalar(self, value):
        """숫자/bool/None/일반 객체는 SCALAR."""
        assert classify_value(value) is FieldKind.SCALAR

    @pytest.mark.parametrize("value", [{}, {"a": 1}, OrderedDict(a=1)])
    def test_mapping(self, value):
        """dict 계열은 MAPPING."""
        assert classify_value(value) is FieldKind.MAPPING

    @pytest.mark.parametrize("value", [[], [1, 2], (1,), {1, 2}, frozenset()])
    def test_collections_are_sequence(self, value):
        """list/tuple/set은 SEQUENCE (빈 컬렉션 포함)."""
        assert classify_value(value) is FieldKind.SEQUENCE

    def test_generator_is_sequence(self):
        """generator도 SEQUENCE."""
        assert classify_value(x for x in range(3)) is FieldKind.SEQUENCE


# =============================================================================
# detect_sequence_fields 테스트
# =============================================================================

class TestDetectSequenceFields:
    """detect_sequence_fields 함수 테스트."""

    def test_none_returns_empty(self):
        """None → 빈 목록 (에러 없음)."""
        assert detect_sequence_fields(None) == []

    def test_empty_returns_empty(self):
        """빈 dict → 빈 목록."""
        assert detect_sequence_fields({}) == []

    def test_items_detected_title_not(self):
        """{"items": [...], "title": "X"} → ["items"]."""
        data = {"items": [{"a": 1}], "title": "X"}

        assert detect_sequence_fields(data) == ["items"]

    def test_string_never_detected(self):
        """문자열 값은 행 반복 대상 아님."""
        data = {"name": "홍길동", "code": b"\x00\x01"}

        assert detect_sequence_fields(data) == []

    def test_mapping_not_detected(self):
        """중첩 dict는 행 반복 대상 아님."""
        data = {"customer": {"name": "A"}, "orders": []}

        assert detect_sequence_fields(data) == ["orders"]

    def test_preserves_input_order(self):
        """입력 순서 유지."""
        data = {"z": [1], "title": "T", "a": (2,), "m": {3}}

        assert detect_sequence_fields(data) == ["z", "a", "m"]

    def test_does_not_modify_input(self):
        """입력 데이터 변경 없음."""
        data = {"items": [1, 2], "title": "X"}
        snapshot = {"items": [1, 2], "title": "X"}

        detect_sequence_fields(data)

        assert data == snapshot
