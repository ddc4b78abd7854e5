"""
레코드 북

메모리 내 레코드 컬렉션의 단일 소유자.
변경은 EditCoordinator만 수행하며, 나머지 컴포넌트는 읽기만 함.
"""

import logging
from typing import Iterable, Iterator

from core.ledger.records import LedgerRecord

logger = logging.getLogger(__name__)


class LedgerBook:
    """레코드 컬렉션 (id → LedgerRecord, 적재 순서 유지)

    Args:
        records: 초기 레코드
    """

    def __init__(self, records: Iterable[LedgerRecord] = ()):
        self._records: dict[str, LedgerRecord] = {}
        self.replace_all(records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[LedgerRecord]:
        return iter(list(self._records.values()))

    def get(self, record_id: str) -> LedgerRecord | None:
        return self._records.get(record_id)

    def records(self) -> list[LedgerRecord]:
        """현재 레코드 스냅샷"""
        return list(self._records.values())

    # -------------------------------------------------------------------------
    # 변경 (EditCoordinator 전용)
    # -------------------------------------------------------------------------

    def replace_all(self, records: Iterable[LedgerRecord]) -> None:
        """전체 교체 (id 없는 레코드는 제외)"""
        self._records = {}
        skipped = 0
        for record in records:
            if not record.id:
                skipped += 1
                continue
            self._records[record.id] = record
        if skipped:
            logger.warning("Skipped records without id", extra={"count": skipped})

    def put(self, record: LedgerRecord) -> None:
        """추가 또는 교체 (기존 위치 유지)"""
        if not record.id:
            raise ValueError("Record id is required")
        self._records[record.id] = record

    def remove(self, record_id: str) -> LedgerRecord | None:
        return self._records.pop(record_id, None)
