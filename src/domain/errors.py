"""
Error definitions for the document generation service.

규칙:
- 조용한 실패 금지 → DocGenError 계열로 명시적 실패
- 라이브러리 예외는 RenderFailedError로 감싸서 원인 메시지 보존
- 재시도 없음: 모든 에러는 요청 경계까지 그대로 전파
"""

from typing import Any


class DocGenError(Exception):
    """
    문서 생성 서비스의 기본 에러.

    code는 HTTP 응답의 "code" 필드로, context는 로그/디버깅용으로 사용.

    Usage:
        raise TemplateNotFoundError("cert.docx", path="/app/templates/cert.docx")
    """

    code = "DOCGEN_ERROR"
    status_code = 500

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        if ctx_str:
            return f"[{self.code}] {self.message} ({ctx_str})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class TemplateNotFoundError(DocGenError):
    """템플릿 루트에 요청한 템플릿 파일이 없음 (404)."""

    code = "TEMPLATE_NOT_FOUND"
    status_code = 404

    def __init__(self, template_name: str, **context: Any) -> None:
        self.template_name = template_name
        super().__init__(
            f"Template not found: {template_name}",
            template=template_name,
            **context,
        )


class InvalidTemplateTypeError(DocGenError):
    """템플릿은 있지만 요청한 작업과 종류(확장자)가 맞지 않음 (400)."""

    code = "INVALID_TEMPLATE_TYPE"
    status_code = 400

    def __init__(self, template_name: str, expected_kind: str, **context: Any) -> None:
        self.template_name = template_name
        self.expected_kind = expected_kind
        super().__init__(
            f"Template '{template_name}' is not a {expected_kind} template",
            template=template_name,
            expected_kind=expected_kind,
            **context,
        )


class InvalidTemplateNameError(DocGenError):
    """템플릿 이름이 비어 있거나 경로 구성요소를 포함 (400)."""

    code = "INVALID_TEMPLATE_NAME"
    status_code = 400


class InvalidUploadError(DocGenError):
    """업로드 파일이 비어 있거나 지원하지 않는 형식 (400)."""

    code = "INVALID_UPLOAD"
    status_code = 400


class InvalidRenderDataError(DocGenError):
    """렌더 데이터가 None (400). 빈 dict는 유효."""

    code = "INVALID_RENDER_DATA"
    status_code = 400


class TemplateLockTimeoutError(DocGenError):
    """템플릿 파일 락 획득 실패 (409)."""

    code = "TEMPLATE_LOCK_TIMEOUT"
    status_code = 409


class EmptyDocumentError(DocGenError):
    """렌더 결과가 빈 바이트 (500)."""

    code = "INTERNAL_ERROR"
    status_code = 500


class RenderFailedError(DocGenError):
    """
    템플릿 컴파일/렌더/채우기 중 라이브러리 레벨 에러 (500).

    잘못된 마크업, 데이터-템플릿 불일치, 손상된 템플릿 바이트 등.
    부분 출력은 반환하지 않음.
    """

    code = "RENDER_FAILED"
    status_code = 500


# =============================================================================
# Error Codes (HTTP 응답 전용)
# =============================================================================

class ErrorCodes:
    """DocGenError 계열이 아닌 에러의 응답 코드."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    IO_ERROR = "IO_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
