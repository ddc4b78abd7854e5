"""
저널 런타임

레코드 북(단일 소유자), 낙관적 수정 코디네이터, 엔티티 캐시,
이름 자동 완성, 신규 엔트리 입력 상태.
"""

from journal.book import LedgerBook
from journal.cache import EntityCache
from journal.editor import LOCAL_ONLY_NOTICE, EditCoordinator, PendingCommit
from journal.entry_draft import EntryDraft
from journal.runtime import JournalRuntime, build_runtime, create_runtime
from journal.suggestions import SuggestionLookup

__all__ = [
    "LedgerBook",
    "EditCoordinator",
    "PendingCommit",
    "LOCAL_ONLY_NOTICE",
    "EntityCache",
    "SuggestionLookup",
    "EntryDraft",
    "JournalRuntime",
    "create_runtime",
    "build_runtime",
]
