"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from fastapi import HTTPException, Query

from core.ledger.filters import FilterCriteria
from journal.runtime import JournalRuntime


# =========================================================================
# JournalRuntime (앱 수명 동안 공유)
# =========================================================================

# lifespan 또는 테스트에서 설정되는 전역 런타임 인스턴스
_runtime: JournalRuntime | None = None


def set_runtime(runtime: JournalRuntime | None) -> None:
    """JournalRuntime 설정

    Args:
        runtime: JournalRuntime 인스턴스 (None이면 해제)
    """
    global _runtime
    _runtime = runtime


def peek_runtime() -> JournalRuntime | None:
    """설정된 런타임 반환 (없으면 None)"""
    return _runtime


async def get_runtime() -> JournalRuntime:
    """적재된 JournalRuntime 반환

    Raises:
        HTTPException: 런타임 미설정 (503)
    """
    if _runtime is None:
        raise HTTPException(status_code=503, detail="Journal runtime not initialized")
    await _runtime.ensure_loaded()
    return _runtime


def get_filter_criteria(
    date_from: str = Query(default="", alias="from", description="시작일 (YYYY-MM-DD)"),
    date_to: str = Query(default="", alias="to", description="종료일 (YYYY-MM-DD)"),
    q: str = Query(default="", description="검색어"),
    account_id: str = Query(default="", alias="accountId"),
    market_id: str = Query(default="", alias="marketId"),
    strategy_id: str = Query(default="", alias="strategyId"),
    order: str = Query(default=""),
    result: str = Query(default=""),
    respect: str = Query(default=""),
    session: str = Query(default=""),
) -> FilterCriteria:
    """쿼리 파라미터 → 필터 조건"""
    return FilterCriteria(
        date_from=date_from,
        date_to=date_to,
        text=q,
        account_id=account_id,
        market_id=market_id,
        strategy_id=strategy_id,
        order=order,
        result=result,
        respect=respect,
        session=session,
    )
