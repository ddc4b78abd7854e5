"""
adapters/journal_api/parsers.py 테스트

응답 형태 변형(봉투, items 위치, 단건 키) 처리
"""

import pytest

from adapters.journal_api.errors import JournalApiError
from adapters.journal_api.parsers import (
    parse_account,
    parse_account_list,
    parse_created,
    parse_deleted,
    parse_entity_list,
    parse_record,
    parse_record_list,
    parse_updated,
    parse_updated_count,
    pick_items,
    unwrap,
)


class TestUnwrap:
    def test_ok_envelope(self) -> None:
        assert unwrap({"ok": True, "data": {"items": []}}) == {"items": []}

    def test_ok_without_data(self) -> None:
        assert unwrap({"ok": True}) == {}

    def test_error_envelope(self) -> None:
        with pytest.raises(JournalApiError) as exc_info:
            unwrap({"ok": False, "error": "quota exceeded"}, status=200)

        assert exc_info.value.status == 400
        assert exc_info.value.message == "quota exceeded"

    def test_no_envelope(self) -> None:
        assert unwrap([1, 2]) == [1, 2]


class TestPickItems:
    @pytest.mark.parametrize(
        "data",
        [
            {"items": [{"id": "x"}]},
            {"data": {"items": [{"id": "x"}]}},
            [{"id": "x"}],
        ],
    )
    def test_shapes(self, data) -> None:
        assert pick_items(data) == [{"id": "x"}]

    @pytest.mark.parametrize("data", [{}, None, {"items": "nope"}, "text"])
    def test_empty(self, data) -> None:
        assert pick_items(data) == []


class TestRecordParsers:
    def test_record_list(self) -> None:
        records = parse_record_list({"items": [{"id": "r1", "result": "Perte"}, None]})

        assert [r.id for r in records] == ["r1", ""]
        assert records[0].result == "Loss"

    @pytest.mark.parametrize(
        "data",
        [
            {"entry": {"id": "r1"}},
            {"data": {"entry": {"id": "r1"}}},
            {"id": "r1", "date": "2025-01-01"},
        ],
    )
    def test_single_record(self, data) -> None:
        assert parse_record(data).id == "r1"

    def test_single_record_missing(self) -> None:
        assert parse_record({}) is None


class TestEntityParsers:
    def test_accounts(self) -> None:
        accounts = parse_account_list([{"id": "a1", "name": "Main", "currency": "XAF"}])

        assert accounts[0].currency == "FCFA_BEAC"

    def test_single_account(self) -> None:
        assert parse_account({"item": {"id": "a1"}}).id == "a1"
        assert parse_account({}) is None

    def test_entities(self) -> None:
        entities = parse_entity_list({"data": {"items": [{"_id": "m1", "name": "Gold"}]}})

        assert entities[0].id == "m1"
        assert entities[0].name == "Gold"


class TestWriteParsers:
    @pytest.mark.parametrize(
        "data",
        [
            {"id": "n1", "updatedAt": "t"},
            {"data": {"id": "n1", "updatedAt": "t"}},
            {"entry": {"id": "n1", "updatedAt": "t"}},
        ],
    )
    def test_created(self, data) -> None:
        created = parse_created(data)

        assert created.id == "n1"
        assert created.updated_at == "t"

    def test_created_without_id_fails(self) -> None:
        with pytest.raises(JournalApiError):
            parse_created({"updatedAt": "t"})

    def test_updated(self) -> None:
        assert parse_updated({"entry": {"updatedAt": "t2"}}) == "t2"
        assert parse_updated({}) == ""

    def test_deleted(self) -> None:
        assert parse_deleted({"deleted": True}) is True
        assert parse_deleted({}) is False

    def test_updated_count(self) -> None:
        assert parse_updated_count({"updated": "3"}) == 3
        assert parse_updated_count({"updated": None}) == 0
        assert parse_updated_count([]) == 0
