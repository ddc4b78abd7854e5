"""
journal/editor.py 테스트

낙관적 수정: 로컬 즉시 반영, 원격 실패 시 롤백 없음, dirty 추적
"""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock

import httpx
import pytest

from adapters.mock.ledger_store import MockLedgerStore
from adapters.mock.notifier import MockNotifier
from core.types import RemoteOutcome, SyncState
from journal.book import LedgerBook
from journal.editor import LOCAL_ONLY_NOTICE, EditCoordinator


@pytest.fixture
def book(sample_records) -> LedgerBook:
    return LedgerBook(sample_records)


@pytest.fixture
def editor(mock_store: MockLedgerStore, book: LedgerBook, notifier: MockNotifier) -> EditCoordinator:
    return EditCoordinator(mock_store, book, notifier)


class TestCommit:
    """수정 커밋"""

    @pytest.mark.asyncio
    async def test_local_change_visible_before_remote(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        mock_store.gate = asyncio.Event()

        pending = editor.quick_edit("r1", "result_money", "55")

        assert pending.record.result_money == "55"
        assert book.get("r1").result_money == "55"
        assert book.get("r1").result_pct == "5.50"
        assert editor.sync_state("r1") == SyncState.PENDING

        mock_store.gate.set()
        assert await pending.wait() == RemoteOutcome.SUCCESS
        assert editor.sync_state("r1") == SyncState.SYNCED
        assert book.get("r1").updated_at == mock_store.state.records["r1"].updated_at
        assert mock_store.state.records["r1"].result_money == "55"

    @pytest.mark.asyncio
    async def test_remote_failure_keeps_local_change(
        self,
        editor: EditCoordinator,
        mock_store: MockLedgerStore,
        book: LedgerBook,
        notifier: MockNotifier,
    ) -> None:
        """원격 실패 시 롤백 없이 dirty + 경고"""
        mock_store.should_fail = True

        pending = editor.quick_edit("r1", "result_money", "55")
        outcome = await pending.wait()

        assert outcome == RemoteOutcome.FAILURE
        assert book.get("r1").result_money == "55"
        assert editor.sync_state("r1") == SyncState.DIRTY
        assert editor.dirty_fields("r1") == {"result_money", "result_pct"}
        assert editor.dirty_records() == ["r1"]
        assert notifier.get_warnings()[0].message == LOCAL_ONLY_NOTICE

    @pytest.mark.asyncio
    async def test_transport_error_is_failure(
        self, editor: EditCoordinator, mock_store: MockLedgerStore
    ) -> None:
        mock_store.update_record = AsyncMock(side_effect=httpx.ConnectError("down"))

        record, outcome = await editor.commit_and_wait("r2", {"comment": "offline"})

        assert outcome == RemoteOutcome.FAILURE
        assert record.comment == "offline"

    def test_unknown_record(self, editor: EditCoordinator) -> None:
        with pytest.raises(KeyError):
            editor.commit("missing", {"comment": "x"})

    def test_unknown_field(self, editor: EditCoordinator) -> None:
        with pytest.raises(ValueError):
            editor.quick_edit("r1", "profit", "1")

    @pytest.mark.asyncio
    async def test_concurrent_edits_last_value_wins(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        mock_store.gate = asyncio.Event()

        first = editor.commit("r1", {"comment": "first"})
        second = editor.commit("r1", {"comment": "second"})

        assert book.get("r1").comment == "second"
        assert editor.sync_state("r1") == SyncState.PENDING

        mock_store.gate.set()
        await first.wait()
        await second.wait()

        assert editor.sync_state("r1") == SyncState.SYNCED
        assert book.get("r1").comment == "second"

    @pytest.mark.asyncio
    async def test_resync_after_failure(
        self, editor: EditCoordinator, mock_store: MockLedgerStore
    ) -> None:
        mock_store.should_fail = True
        await editor.quick_edit("r1", "comment", "retry me").wait()
        mock_store.should_fail = False

        pending = editor.resync("r1")

        assert pending is not None
        assert await pending.wait() == RemoteOutcome.SUCCESS
        assert editor.sync_state("r1") == SyncState.SYNCED
        assert editor.dirty_records() == []
        assert mock_store.state.records["r1"].comment == "retry me"

    def test_resync_nothing_dirty(self, editor: EditCoordinator) -> None:
        assert editor.resync("r1") is None

    @pytest.mark.asyncio
    async def test_drain(self, editor: EditCoordinator, mock_store: MockLedgerStore) -> None:
        editor.commit("r1", {"comment": "a"})
        editor.commit("r2", {"comment": "b"})

        await editor.drain()

        assert mock_store.state.records["r2"].comment == "b"
        assert len(mock_store.calls_to("update_record")) == 2


class TestCreateDelete:
    """생성 / 삭제는 원격 성공 후에만 컬렉션 변경"""

    @pytest.mark.asyncio
    async def test_create(self, editor: EditCoordinator, book: LedgerBook) -> None:
        record = await editor.create({"date": "2025-04-01", "result": "Gain", "result_money": "5"})

        assert record is not None
        assert record.id in book
        assert record.updated_at
        assert len(book) == 5

    @pytest.mark.asyncio
    async def test_create_failure(
        self,
        editor: EditCoordinator,
        mock_store: MockLedgerStore,
        book: LedgerBook,
        notifier: MockNotifier,
    ) -> None:
        mock_store.should_fail = True

        assert await editor.create({"date": "2025-04-01"}) is None
        assert len(book) == 4
        assert len(notifier.get_warnings()) == 1

    @pytest.mark.asyncio
    async def test_delete(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        assert await editor.delete("r2") is True
        assert "r2" not in book
        assert "r2" not in mock_store.state.records

    @pytest.mark.asyncio
    async def test_delete_failure(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        mock_store.should_fail = True

        assert await editor.delete("r2") is False
        assert "r2" in book

    @pytest.mark.asyncio
    async def test_delete_not_found(self, editor: EditCoordinator) -> None:
        assert await editor.delete("missing") is False


class TestReload:
    @pytest.mark.asyncio
    async def test_reload_keeps_dirty_fields(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        mock_store.should_fail = True
        await editor.quick_edit("r1", "comment", "local only").wait()
        mock_store.should_fail = False
        mock_store.state.records["r1"] = replace(mock_store.state.records["r1"], detail="server side")

        assert await editor.reload() is True

        assert book.get("r1").comment == "local only"
        assert book.get("r1").detail == "server side"

    @pytest.mark.asyncio
    async def test_reload_keeps_in_flight_fields(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        """저장 중인 필드는 재적재 시 서버의 이전 값으로 덮어쓰지 않음"""
        mock_store.gate = asyncio.Event()
        pending = editor.commit("r1", {"result_money": "99"})

        assert await editor.reload() is True
        assert book.get("r1").result_money == "99"

        mock_store.gate.set()
        assert await pending.wait() == RemoteOutcome.SUCCESS
        assert book.get("r1").result_money == "99"
        assert mock_store.state.records["r1"].result_money == "99"
        assert editor.sync_state("r1") == SyncState.SYNCED

    @pytest.mark.asyncio
    async def test_reload_then_failed_save_keeps_edit_for_resync(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        mock_store.gate = asyncio.Event()
        pending = editor.commit("r1", {"result_money": "99"})

        assert await editor.reload() is True
        mock_store.should_fail = True
        mock_store.gate.set()

        assert await pending.wait() == RemoteOutcome.FAILURE
        assert book.get("r1").result_money == "99"
        assert editor.sync_state("r1") == SyncState.DIRTY
        assert editor.dirty_fields("r1") == {"result_money"}

        mock_store.should_fail = False
        retry = editor.resync("r1")
        assert await retry.wait() == RemoteOutcome.SUCCESS
        assert mock_store.state.records["r1"].result_money == "99"

    @pytest.mark.asyncio
    async def test_reload_failure_keeps_records(
        self, editor: EditCoordinator, mock_store: MockLedgerStore, book: LedgerBook
    ) -> None:
        mock_store.should_fail = True

        assert await editor.reload() is False
        assert len(book) == 4

    @pytest.mark.asyncio
    async def test_reload_into_empty_book(self, mock_store: MockLedgerStore) -> None:
        book = LedgerBook()
        editor = EditCoordinator(mock_store, book)

        assert await editor.reload() is True
        assert [r.id for r in book] == ["r1", "r2", "r3", "r4"]
