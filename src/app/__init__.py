"""
App layer: HTTP 서버 (FastAPI).

역할:
- 요청 검증 (pydantic), 에러 → {status, code, message} 응답
- 템플릿 관리 + 문서 생성 API
- ⚠️ 렌더 로직 없음 (src/render에 위임)

주의: 폴더 구분
- src/templates/ → 코드 (manager.py, samples.py)
- templates/ (루트) → 템플릿 파일 저장소
"""
