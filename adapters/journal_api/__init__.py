"""
저널 저장소 어댑터

외부 저널 저장소 REST API 연동.
"""

from adapters.journal_api.client import JournalApiClient
from adapters.journal_api.errors import JournalApiError

__all__ = [
    "JournalApiClient",
    "JournalApiError",
]
