"""
통계 API 라우트

KPI, 차원별 그룹 통계, 계좌 잔고
"""

from fastapi import APIRouter, Depends

from core.ledger import FilterCriteria
from core.types import EntityKind
from journal.runtime import JournalRuntime
from web.dependencies import get_filter_criteria, get_runtime
from web.models.responses import (
    AccountBalanceResponse,
    GroupStatListResponse,
    StatsSummaryResponse,
)
from web.services.stats_service import StatsService

router = APIRouter(prefix="/api", tags=["Stats"])


@router.get("/stats/summary", response_model=StatsSummaryResponse)
async def get_stats_summary(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    runtime: JournalRuntime = Depends(get_runtime),
):
    """분석 요약

    KPI, 날짜별 누적 손익, 이익 / 손실, 매수 / 매도, 요일별 손익, 규칙 준수
    """
    return StatsService(runtime).get_summary(criteria)


@router.get("/stats/{dimension}", response_model=GroupStatListResponse)
async def get_group_stats(
    dimension: EntityKind,
    criteria: FilterCriteria = Depends(get_filter_criteria),
    runtime: JournalRuntime = Depends(get_runtime),
):
    """차원별 그룹 통계 (account / market / strategy)"""
    return StatsService(runtime).get_group_stats(dimension, criteria)


@router.get("/accounts/balances", response_model=list[AccountBalanceResponse])
async def get_account_balances(runtime: JournalRuntime = Depends(get_runtime)):
    """계좌별 현재 잔고"""
    return StatsService(runtime).get_account_balances()
