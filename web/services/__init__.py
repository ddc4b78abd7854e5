"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.entry_service import EntryService
from web.services.stats_service import StatsService

__all__ = [
    "EntryService",
    "StatsService",
]
