"""
헬스 체크 엔드포인트

GET /api/health - 서버 상태 확인
"""

from fastapi import APIRouter

from web.dependencies import peek_runtime
from web.models.responses import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """서버 상태 확인

    저장소 적재를 유발하지 않음.

    Returns:
        HealthResponse: status, version, 레코드 수
    """
    runtime = peek_runtime()
    if runtime is None:
        return HealthResponse(status="starting", version=API_VERSION)

    return HealthResponse(
        status="ok",
        version=API_VERSION,
        records=len(runtime.book),
        dirty_records=len(runtime.editor.dirty_records()),
    )
