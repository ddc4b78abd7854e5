"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import QuickEditRequest
from web.models.responses import (
    AccountBalanceResponse,
    EntryEditResponse,
    GainLossResponse,
    GroupStatListResponse,
    GroupStatResponse,
    HealthResponse,
    KpiResponse,
    SeriesPointResponse,
    StatsSummaryResponse,
)

__all__ = [
    # Requests
    "QuickEditRequest",
    # Responses
    "HealthResponse",
    "SeriesPointResponse",
    "KpiResponse",
    "GainLossResponse",
    "StatsSummaryResponse",
    "GroupStatResponse",
    "GroupStatListResponse",
    "AccountBalanceResponse",
    "EntryEditResponse",
]
