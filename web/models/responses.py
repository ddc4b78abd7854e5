"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액은 모두 문자열 (Decimal 정밀도 유지).
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")
    records: int = Field(default=0, description="메모리 내 레코드 수")
    dirty_records: int = Field(default=0, description="서버 미반영 레코드 수")


class SeriesPointResponse(BaseModel):
    """누적 손익 포인트"""

    timestamp: str = Field(..., description="date 또는 created_at")
    cum: str = Field(..., description="누적 순손익")


class KpiResponse(BaseModel):
    """전체 KPI"""

    pnl: str = Field(..., description="순손익")
    pnl_formatted: str = Field(..., description="표시용 순손익")
    invested: str = Field(..., description="투자 금액 합")
    wins: int
    losses: int
    ties: int
    total: int = Field(..., description="결과가 분류된 거래 수")
    win_rate: str = Field(..., description="승률 (%)")


class GainLossResponse(BaseModel):
    """이익 / 손실 합계 행"""

    name: str
    gains: str
    losses: str


class StatsSummaryResponse(BaseModel):
    """분석 화면 요약 (KPI + 차트 데이터)"""

    currency: str = Field(..., description="표시 통화 (계좌 최다 통화)")
    currency_sign: str = Field(..., description="표시 통화 기호")
    kpi: KpiResponse
    equity: list[SeriesPointResponse] = Field(default_factory=list, description="날짜별 누적 손익")
    gains_losses: GainLossResponse
    buy_sell: dict[str, int]
    pnl_by_weekday: dict[str, str]
    discipline: dict[str, int]
    by_market: list[GainLossResponse] = Field(default_factory=list)
    by_strategy: list[GainLossResponse] = Field(default_factory=list)


class GroupStatResponse(BaseModel):
    """그룹별 통계"""

    key: str = Field(..., description="그룹 키 값")
    key_kind: str = Field(..., description="by_id / by_name / unknown")
    label: str = Field(..., description="표시 이름")
    trades: int
    wins: int
    breakeven: int
    win_rate: str
    gain: str
    loss: str
    net: str
    net_formatted: str
    invested: str
    dd: str = Field(..., description="최대 낙폭 (통화 단위)")
    dd_formatted: str
    series: list[SeriesPointResponse] = Field(default_factory=list)


class GroupStatListResponse(BaseModel):
    """차원별 통계 목록"""

    dimension: str
    currency: str
    groups: list[GroupStatResponse] = Field(default_factory=list)


class AccountBalanceResponse(BaseModel):
    """계좌 잔고"""

    id: str
    name: str
    currency: str
    initial: str
    net: str
    balance: str
    balance_formatted: str


class EntryEditResponse(BaseModel):
    """인라인 수정 결과"""

    record: dict[str, Any] = Field(..., description="로컬 적용된 레코드 (camelCase)")
    sync_state: str = Field(..., description="SYNCED / PENDING / DIRTY")
    outcome: str = Field(..., description="success / failure")
    notice: str | None = Field(default=None, description="저장 실패 시 안내")
