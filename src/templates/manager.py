"""
템플릿 저장소: 단일 루트 디렉터리의 평면 파일 CRUD.

규칙:
- 템플릿 이름 = 파일명 (확장자 포함, 경로 구성요소 금지)
- 지원 형식: .docx (Word), .xlsx (Excel)
- 업로드는 덮어쓰기 허용 (파일별 락으로 동시 쓰기 보호)
- 렌더 코어는 resolve()로 읽기만 함
"""

import logging
import re
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path, PurePath

from filelock import FileLock, Timeout

from src.domain.constants import ILLEGAL_FILENAME_CHARS
from src.domain.errors import (
    InvalidTemplateNameError,
    InvalidTemplateTypeError,
    InvalidUploadError,
    TemplateLockTimeoutError,
    TemplateNotFoundError,
)
from src.domain.schemas import TemplateKind

logger = logging.getLogger(__name__)

_ILLEGAL_CHARS_PATTERN = re.compile(ILLEGAL_FILENAME_CHARS)


# =============================================================================
# Validation
# =============================================================================

def validate_template_name(template_name: str | None) -> None:
    """
    템플릿 이름 유효성 검증 (경로 탐색 방지).

    규칙:
    - 비어 있거나 공백만 있으면 안 됨
    - "..", "/", "\\" 금지
    - 단일 경로 구성요소여야 함

    Args:
        template_name: 검증할 이름

    Raises:
        InvalidTemplateNameError
    """
    if template_name is None or not template_name.strip():
        raise InvalidTemplateNameError("template name cannot be empty")

    if ".." in template_name or "/" in template_name or "\\" in template_name:
        raise InvalidTemplateNameError(
            "template name contains illegal characters",
            template=template_name,
        )

    parts = PurePath(template_name).parts
    if len(parts) != 1 or parts[0] != template_name:
        raise InvalidTemplateNameError(
            "template name contains path components",
            template=template_name,
        )


def validate_template_kind(template_name: str, kind: TemplateKind) -> None:
    """
    템플릿 확장자가 요청 종류와 맞는지 검증.

    Raises:
        InvalidTemplateNameError: 이름 자체가 유효하지 않음
        InvalidTemplateTypeError: 확장자 불일치
    """
    validate_template_name(template_name)
    if TemplateKind.from_filename(template_name) is not kind:
        raise InvalidTemplateTypeError(template_name, kind.value)


def sanitize_filename(filename: str) -> str:
    """파일명 금지 문자(\\ / : * ? " < > |)를 "_"로 치환."""
    return _ILLEGAL_CHARS_PATTERN.sub("_", filename)


# =============================================================================
# Template Store
# =============================================================================

class TemplateStore:
    """
    템플릿 파일 저장소.

    구조:
    <template_root>/
    ├── report.docx
    ├── goods.xlsx
    └── .locks/        # 업로드/삭제 락 파일
    """

    # 락 timeout (초)
    LOCK_TIMEOUT = 10.0

    def __init__(self, template_root: Path, lock_timeout: float | None = None):
        """
        Args:
            template_root: 템플릿 루트 디렉터리
            lock_timeout: 락 timeout (None이면 LOCK_TIMEOUT)
        """
        self.template_root = template_root
        self.lock_timeout = self.LOCK_TIMEOUT if lock_timeout is None else lock_timeout
        self._locks_dir = template_root / ".locks"

    def _lock_path(self, template_name: str) -> Path:
        return self._locks_dir / f"{template_name}.lock"

    @contextmanager
    def _template_lock(self, template_name: str) -> Generator[None, None, None]:
        """
        템플릿별 락 획득.

        같은 템플릿에 대한 동시 업로드/삭제 방지.

        Raises:
            TemplateLockTimeoutError
        """
        self._locks_dir.mkdir(parents=True, exist_ok=True)
        lock = FileLock(self._lock_path(template_name), timeout=self.lock_timeout)

        try:
            lock.acquire()
        except Timeout as e:
            raise TemplateLockTimeoutError(
                f"Failed to acquire lock for template '{template_name}'",
                template=template_name,
                timeout=self.lock_timeout,
            ) from e

        try:
            yield
        finally:
            lock.release()

    # =========================================================================
    # Read
    # =========================================================================

    def path_for(self, template_name: str) -> Path:
        """검증된 이름 → 루트 기준 경로 (존재 확인 없음)."""
        validate_template_name(template_name)
        return self.template_root / template_name

    def exists(self, template_name: str) -> bool:
        """템플릿 파일 존재 여부. 유효하지 않은 이름이면 False."""
        try:
            path = self.path_for(template_name)
        except InvalidTemplateNameError:
            return False
        return path.is_file()

    def resolve(self, template_name: str, kind: TemplateKind | None = None) -> Path:
        """
        템플릿 이름 → 존재하는 파일 경로.

        렌더 전 선행 조건 검사: 라이브러리 컴파일 이전에 실패해야 함.

        Args:
            template_name: 템플릿 파일명
            kind: 요청 종류 (지정 시 확장자 검증)

        Returns:
            템플릿 파일 경로

        Raises:
            InvalidTemplateNameError, InvalidTemplateTypeError, TemplateNotFoundError
        """
        if kind is not None:
            validate_template_kind(template_name, kind)

        path = self.path_for(template_name)
        if not path.is_file():
            logger.error(f"Template file not found at: {path}")
            raise TemplateNotFoundError(template_name, path=str(path))

        return path

    def read(self, template_name: str) -> bytes:
        """
        템플릿 파일 내용 (다운로드용).

        Raises:
            InvalidTemplateNameError, TemplateNotFoundError
        """
        path = self.resolve(template_name)
        logger.info(f"Template downloaded: {template_name}")
        return path.read_bytes()

    def list_templates(self) -> list[str]:
        """
        루트의 .docx / .xlsx 파일명 목록 (정렬).

        루트가 없으면 빈 목록.
        """
        if not self.template_root.exists():
            logger.warning(f"Template directory does not exist: {self.template_root}")
            return []

        templates = sorted(
            path.name
            for path in self.template_root.iterdir()
            if path.is_file() and TemplateKind.from_filename(path.name) is not None
        )
        logger.info(f"Found {len(templates)} templates in directory: {self.template_root}")
        return templates

    # =========================================================================
    # Write
    # =========================================================================

    def save(self, filename: str | None, content: bytes) -> str:
        """
        템플릿 업로드 (같은 이름이면 덮어쓰기).

        Args:
            filename: 원본 파일명
            content: 파일 내용

        Returns:
            저장된 파일명 (금지 문자 치환 후)

        Raises:
            InvalidUploadError: 빈 파일, 빈 파일명, 지원하지 않는 형식
            InvalidTemplateNameError: 치환 후에도 유효하지 않은 이름
        """
        if not content:
            raise InvalidUploadError("uploaded file is empty")

        if filename is None or not filename.strip():
            raise InvalidUploadError("file name cannot be empty")

        if TemplateKind.from_filename(filename) is None:
            raise InvalidUploadError(
                "only .docx and .xlsx templates are supported",
                filename=filename,
            )

        safe_name = sanitize_filename(filename)
        validate_template_name(safe_name)

        self.template_root.mkdir(parents=True, exist_ok=True)

        with self._template_lock(safe_name):
            (self.template_root / safe_name).write_bytes(content)

        logger.info(f"Template uploaded successfully: {safe_name}")
        return safe_name

    def delete(self, template_name: str) -> bool:
        """
        템플릿 삭제.

        없는 템플릿에는 락 파일을 만들지 않고, 삭제 후에는 락 파일도 정리.

        Returns:
            삭제했으면 True, 원래 없었으면 False

        Raises:
            InvalidTemplateNameError: 이름이 유효하지 않거나 디렉터리를 가리킴
        """
        path = self.path_for(template_name)

        if not path.exists():
            logger.warning(f"Template not found for deletion: {template_name}")
            return False

        if not path.is_file():
            raise InvalidTemplateNameError(
                "only files can be deleted, not directories",
                template=template_name,
            )

        with self._template_lock(template_name):
            if not path.is_file():
                logger.warning(f"Template already deleted: {template_name}")
                return False
            path.unlink()

        self._lock_path(template_name).unlink(missing_ok=True)

        logger.info(f"Template deleted successfully: {template_name}")
        return True
