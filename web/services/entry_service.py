"""
엔트리 수정 서비스

인라인 단일 필드 수정을 EditCoordinator에 위임
"""

import logging
from typing import Any

from core.types import RemoteOutcome
from journal.editor import LOCAL_ONLY_NOTICE
from journal.runtime import JournalRuntime

logger = logging.getLogger(__name__)


class EntryService:
    """엔트리 수정 서비스"""

    def __init__(self, runtime: JournalRuntime):
        self.runtime = runtime

    async def quick_edit(self, record_id: str, field: str, value: Any) -> dict[str, Any]:
        """단일 필드 수정 후 원격 저장 결과까지 대기

        원격 저장이 실패해도 로컬 변경은 유지되고 outcome만 failure.

        Args:
            record_id: 레코드 ID
            field: 필드명
            value: 입력 값

        Returns:
            수정된 레코드, 동기화 상태, 원격 결과

        Raises:
            KeyError: 없는 레코드
            ValueError: 알 수 없는 필드
        """
        editor = self.runtime.editor
        pending = editor.quick_edit(record_id, field, value)
        outcome = await pending.wait()

        record = self.runtime.book.get(record_id) or pending.record
        return {
            "record": record.to_wire(),
            "sync_state": editor.sync_state(record_id).value,
            "outcome": outcome.value,
            "notice": LOCAL_ONLY_NOTICE if outcome == RemoteOutcome.FAILURE else None,
        }
