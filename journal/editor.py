"""
낙관적 수정 코디네이터

2단계 수정 로그:
1단계 - 로컬 적용 (동기, 항상 성공, 즉시 호출자에게 반환)
2단계 - 원격 저장 (asyncio Task, 실패 가능)

2단계 실패 시 롤백하지 않고 필드를 dirty로 기록하고
"applied locally only, server unreachable" 경고를 보냄. 호출자에게 예외 전파 없음.
레코드 생성 / 삭제는 실패 시 컬렉션을 변경하지 않음.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Any, Mapping

import httpx

from adapters.interfaces import ILedgerStore, INotifier
from adapters.journal_api.errors import JournalApiError
from adapters.log_notifier import LogNotifier
from core.domain.state_machines import RecordSyncStateMachine
from core.ledger.consistency import build_quick_edit_patch
from core.ledger.filters import FilterCriteria
from core.ledger.records import FIELD_NAMES, RECORD_FIELDS, LedgerRecord, apply_patch
from core.types import RemoteOutcome, SyncState
from core.utils.timezone import utc_iso
from journal.book import LedgerBook

logger = logging.getLogger(__name__)


LOCAL_ONLY_NOTICE = "applied locally only, server unreachable"

# 저장소 실패로 취급하는 예외
STORE_ERRORS = (JournalApiError, httpx.HTTPError)


@dataclass(frozen=True)
class PendingCommit:
    """진행 중인 수정

    Attributes:
        record: 로컬에 적용된 레코드 (즉시 사용 가능)
        task: 원격 저장 Task
    """

    record: LedgerRecord
    task: "asyncio.Task[RemoteOutcome]"

    async def wait(self) -> RemoteOutcome:
        """원격 저장 결과 대기"""
        return await self.task


def _field_names(patch: Mapping[str, Any]) -> set[str]:
    names = set()
    for key in patch:
        name = key if key in RECORD_FIELDS else FIELD_NAMES.get(key)
        if name is not None and name != "id":
            names.add(name)
    return names


class EditCoordinator:
    """낙관적 수정 코디네이터

    LedgerBook의 유일한 변경 주체.
    같은 필드에 대한 동시 수정은 호출 순서 기준 마지막 값이 로컬에 남음.

    Args:
        store: 외부 저널 저장소
        book: 레코드 북
        notifier: 사용자 안내 채널 (기본: LogNotifier)

    사용 예시:
    ```python
    editor = EditCoordinator(store, book)

    pending = editor.quick_edit("r1", "result_money", "12.5")
    show(pending.record)           # 즉시 반영된 값
    outcome = await pending.wait()  # success / failure
    ```
    """

    def __init__(
        self,
        store: ILedgerStore,
        book: LedgerBook,
        notifier: INotifier | None = None,
    ):
        self.store = store
        self.book = book
        self.notifier = notifier or LogNotifier()

        self._sync: dict[str, RecordSyncStateMachine] = {}
        self._dirty: dict[str, set[str]] = {}
        self._in_flight: dict[str, int] = {}
        self._pending_fields: dict[str, Counter[str]] = {}
        self._tasks: set[asyncio.Task[RemoteOutcome]] = set()

    # -------------------------------------------------------------------------
    # 동기화 상태 조회
    # -------------------------------------------------------------------------

    def sync_state(self, record_id: str) -> SyncState:
        machine = self._sync.get(record_id)
        return SyncState(machine.state) if machine else SyncState.SYNCED

    def dirty_fields(self, record_id: str) -> frozenset[str]:
        """서버 미반영 필드"""
        return frozenset(self._dirty.get(record_id, ()))

    def dirty_records(self) -> list[str]:
        return [rid for rid, fields in self._dirty.items() if fields]

    def _machine(self, record_id: str) -> RecordSyncStateMachine:
        machine = self._sync.get(record_id)
        if machine is None:
            machine = self._sync[record_id] = RecordSyncStateMachine()
        return machine

    def _begin(self, record_id: str) -> None:
        self._in_flight[record_id] = self._in_flight.get(record_id, 0) + 1
        self._machine(record_id).transition(SyncState.PENDING)

    def _finish(self, record_id: str) -> None:
        machine = self._sync.get(record_id)
        if machine is None:
            # 저장 도중 삭제된 레코드
            return

        remaining = self._in_flight.get(record_id, 1) - 1
        if remaining > 0:
            self._in_flight[record_id] = remaining
        else:
            self._in_flight.pop(record_id, None)

        if remaining > 0:
            machine.transition(SyncState.PENDING)
        elif self._dirty.get(record_id):
            machine.transition(SyncState.DIRTY)
        else:
            machine.transition(SyncState.SYNCED)

    def _forget(self, record_id: str) -> None:
        self._sync.pop(record_id, None)
        self._dirty.pop(record_id, None)
        self._in_flight.pop(record_id, None)
        self._pending_fields.pop(record_id, None)

    def _release_fields(self, record_id: str, fields: set[str]) -> None:
        pending = self._pending_fields.get(record_id)
        if pending is None:
            return
        pending.subtract(fields)
        for name in [n for n, count in pending.items() if count <= 0]:
            del pending[name]
        if not pending:
            del self._pending_fields[record_id]

    # -------------------------------------------------------------------------
    # 수정
    # -------------------------------------------------------------------------

    def commit(self, record_id: str, patch: Mapping[str, Any]) -> PendingCommit:
        """필드 수정 (1단계 동기 적용 + 2단계 원격 저장 Task 시작)

        실행 중인 이벤트 루프 안에서 호출해야 함.

        Args:
            record_id: 레코드 ID
            patch: 필드 → 값 (파생 필드 포함)

        Returns:
            PendingCommit (record는 이미 로컬에 반영됨)

        Raises:
            KeyError: 북에 없는 레코드
        """
        current = self.book.get(record_id)
        if current is None:
            raise KeyError(record_id)

        fields = _field_names(patch)
        updated = apply_patch(current, patch)
        self.book.put(updated)
        self._begin(record_id)
        self._pending_fields.setdefault(record_id, Counter()).update(fields)

        task = asyncio.create_task(self._push(record_id, dict(patch), fields))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.debug(
            "Commit applied locally",
            extra={"record_id": record_id, "fields": sorted(fields)},
        )
        return PendingCommit(record=updated, task=task)

    async def commit_and_wait(
        self,
        record_id: str,
        patch: Mapping[str, Any],
    ) -> tuple[LedgerRecord, RemoteOutcome]:
        """commit 후 원격 결과까지 대기

        Returns:
            (로컬 적용 레코드, 원격 결과)
        """
        pending = self.commit(record_id, patch)
        outcome = await pending.wait()
        return pending.record, outcome

    def quick_edit(self, record_id: str, field: str, value: Any) -> PendingCommit:
        """인라인 단일 필드 수정

        파생 필드(결과 금액 부호, 결과 비율)를 포함한 patch를 만든 뒤 commit.

        Raises:
            KeyError: 북에 없는 레코드
            ValueError: 알 수 없는 필드
        """
        current = self.book.get(record_id)
        if current is None:
            raise KeyError(record_id)
        return self.commit(record_id, build_quick_edit_patch(current, field, value))

    async def _push(
        self,
        record_id: str,
        patch: dict[str, Any],
        fields: set[str],
    ) -> RemoteOutcome:
        try:
            updated_at = await self.store.update_record(record_id, patch)
        except STORE_ERRORS as e:
            if record_id in self._sync:
                self._dirty.setdefault(record_id, set()).update(fields)
            self._release_fields(record_id, fields)
            self._finish(record_id)
            logger.warning(
                "Remote update failed, keeping local change",
                extra={"record_id": record_id, "fields": sorted(fields), "error": str(e)},
            )
            await self._notify(
                LOCAL_ONLY_NOTICE,
                "WARNING",
                {"record_id": record_id, "fields": sorted(fields)},
            )
            return RemoteOutcome.FAILURE

        dirty = self._dirty.get(record_id)
        if dirty:
            dirty.difference_update(fields)
        self._release_fields(record_id, fields)

        current = self.book.get(record_id)
        if current is not None and updated_at:
            self.book.put(replace(current, updated_at=updated_at))

        self._finish(record_id)
        return RemoteOutcome.SUCCESS

    def resync(self, record_id: str) -> PendingCommit | None:
        """dirty 필드를 현재 로컬 값으로 재전송

        Returns:
            PendingCommit, 재전송할 필드가 없으면 None
        """
        current = self.book.get(record_id)
        fields = self._dirty.get(record_id)
        if current is None or not fields:
            return None
        patch = {name: getattr(current, name) for name in sorted(fields)}
        logger.info("Resyncing dirty fields", extra={"record_id": record_id, "fields": sorted(fields)})
        return self.commit(record_id, patch)

    async def drain(self) -> None:
        """진행 중인 모든 원격 저장 대기"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # -------------------------------------------------------------------------
    # 생성 / 삭제 / 적재
    # -------------------------------------------------------------------------

    async def create(self, partial: Mapping[str, Any]) -> LedgerRecord | None:
        """레코드 생성 (원격 성공 후에만 컬렉션에 추가)

        Returns:
            생성된 레코드, 실패 시 None
        """
        try:
            created = await self.store.create_record(partial)
        except STORE_ERRORS as e:
            logger.warning("Remote create failed", extra={"error": str(e)})
            await self._notify("record not created, server unreachable", "WARNING", None)
            return None

        record = apply_patch(LedgerRecord(), partial)
        record = replace(
            record,
            id=created.id,
            created_at=record.created_at or utc_iso(),
            updated_at=created.updated_at,
        )
        self.book.put(record)
        logger.info("Record created", extra={"record_id": record.id})
        return record

    async def delete(self, record_id: str) -> bool:
        """레코드 삭제 (원격 성공 후에만 컬렉션에서 제거)

        Returns:
            삭제 여부
        """
        try:
            deleted = await self.store.delete_record(record_id)
        except STORE_ERRORS as e:
            logger.warning("Remote delete failed", extra={"record_id": record_id, "error": str(e)})
            await self._notify(
                "record not deleted, server unreachable",
                "WARNING",
                {"record_id": record_id},
            )
            return False

        if not deleted:
            logger.warning("Store reported nothing deleted", extra={"record_id": record_id})
            return False

        self.book.remove(record_id)
        self._forget(record_id)
        return True

    async def reload(self, criteria: FilterCriteria | None = None) -> bool:
        """저장소에서 레코드 재적재

        dirty 필드와 저장 중인 필드는 로컬 값을 유지 (서버 값으로 덮어쓰지 않음).

        Returns:
            성공 여부 (실패 시 기존 컬렉션 유지)
        """
        try:
            records = await self.store.list_records(criteria)
        except STORE_ERRORS as e:
            logger.warning("Reload failed, keeping stale records", extra={"error": str(e)})
            await self._notify("journal not refreshed, server unreachable", "WARNING", None)
            return False

        merged = []
        for record in records:
            local = self.book.get(record.id)
            fields = self._local_fields(record.id)
            if local is not None and fields:
                record = replace(record, **{name: getattr(local, name) for name in fields})
            merged.append(record)

        self.book.replace_all(merged)
        for record_id in list(self._sync):
            if record_id not in self.book and not self._in_flight.get(record_id):
                self._forget(record_id)

        logger.info("Journal reloaded", extra={"count": len(self.book)})
        return True

    def _local_fields(self, record_id: str) -> set[str]:
        """서버 값보다 로컬 값이 우선인 필드 (dirty + 저장 중)"""
        return self._dirty.get(record_id, set()) | set(self._pending_fields.get(record_id, ()))

    async def _notify(self, message: str, level: str, extra: dict[str, Any] | None) -> None:
        sent = await self.notifier.send(message, level=level, extra=extra)
        if not sent:
            logger.debug("Notice not delivered", extra={"notice": message})
