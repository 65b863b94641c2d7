"""
Domain Constants: 서비스 전역 상수.

MIME 타입, 확장자, 기본 출력 파일명 등.
"""

# =============================================================================
# Content Types
# =============================================================================

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DOCX_EXTENSION = ".docx"
XLSX_EXTENSION = ".xlsx"

# =============================================================================
# Output Filenames (출력 파일명 정책)
# =============================================================================
# 요청에 file_name이 없을 때 사용하는 기본값 (확장자 제외)

DEFAULT_WORD_FILENAME = "generated"
DEFAULT_BATCH_FILENAME = "batch_generated"
DEFAULT_EXCEL_FILENAME = "generated"
DEFAULT_FILL_FILENAME = "filled"

# 파일명에서 "_"로 치환되는 문자: \ / : * ? " < > |
ILLEGAL_FILENAME_CHARS = r'[\\/:*?"<>|]'

# =============================================================================
# Sheet Generation
# =============================================================================

DEFAULT_SHEET_NAME = "Sheet1"
MAX_COLUMN_WIDTH = 255

# =============================================================================
# Word Loop Rows
# =============================================================================
# {%tr for ... %} 루프 변수 이름. 템플릿 루트 키와 충돌하지 않도록 "_" 접두사.

LOOP_ROW_VARIABLE = "_loop_row"
