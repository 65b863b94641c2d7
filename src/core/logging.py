"""
Logging setup.

모듈별 logger는 logging.getLogger(__name__) 사용.
이 모듈은 프로세스 시작 시 1회 root 설정만 담당.
"""

import logging

from src.core.config import Settings

# uvicorn/멀티파트 등 외부 라이브러리 중 과도하게 시끄러운 logger
NOISY_LOGGERS = ("multipart", "python_multipart")


def setup_logging(settings: Settings) -> None:
    """
    root logger 설정.

    Args:
        settings: log_level, log_format, log_datefmt 사용
    """
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=settings.log_format,
        datefmt=settings.log_datefmt,
    )
    logging.getLogger().setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
