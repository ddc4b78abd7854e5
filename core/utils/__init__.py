"""
유틸리티 패키지

타임존 처리, 최신 요청만 반영하는 비동기 조회 등 공통 유틸리티
"""

from core.utils.latest import LatestOnlyLookup
from core.utils.timezone import now_utc, today_utc, utc_iso

__all__ = [
    "LatestOnlyLookup",
    "now_utc",
    "today_utc",
    "utc_iso",
]
