"""
test_logging.py - 로깅 설정 테스트
"""

import logging
from pathlib import Path

import pytest

from src.core.config import Settings
from src.core.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture
def restore_root_level():
    """root logger 레벨 복원."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


class TestSetupLogging:
    """setup_logging 함수 테스트."""

    def test_sets_root_level(self, tmp_path: Path, restore_root_level):
        """설정 레벨이 root logger에 적용."""
        setup_logging(Settings(template_root=tmp_path, log_level="DEBUG"))

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, tmp_path: Path, restore_root_level):
        """알 수 없는 레벨 → INFO."""
        setup_logging(Settings(template_root=tmp_path, log_level="VERBOSE"))

        assert logging.getLogger().level == logging.INFO

    def test_noisy_loggers_quieted(self, tmp_path: Path, restore_root_level):
        """멀티파트 파서 logger는 WARNING 이상."""
        setup_logging(Settings(template_root=tmp_path, log_level="DEBUG"))

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level >= logging.WARNING
