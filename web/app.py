"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config.loader import get_settings
from core.logging import setup_logging
from journal.runtime import build_runtime
from web.dependencies import peek_runtime, set_runtime

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import entries, health, stats

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    런타임이 이미 설정된 경우(테스트 등) 그대로 사용하고 종료 처리도 하지 않음.
    """
    owned = None
    if peek_runtime() is None:
        owned = build_runtime(get_settings())
        set_runtime(owned)
        logger.info("Web: journal runtime initialized")

    yield

    # 종료 시 - 진행 중 저장 대기 후 연결 종료
    if owned is not None:
        await owned.close()
        set_runtime(None)
        logger.info("Web: journal runtime closed")


app = FastAPI(
    title="Trading Journal API",
    description="거래 일지 통계 / 인라인 수정 API",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(stats.router)
app.include_router(entries.router)
