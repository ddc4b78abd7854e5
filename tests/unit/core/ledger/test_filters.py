"""
core/ledger/filters.py 테스트
"""

from core.ledger.filters import FilterCriteria, filter_records
from core.ledger.records import LedgerRecord


def _ids(records: list[LedgerRecord]) -> list[str]:
    return [r.id for r in records]


class TestFilterRecords:
    def test_empty_criteria_returns_all(self, sample_records) -> None:
        assert _ids(filter_records(sample_records)) == ["r1", "r2", "r3", "r4"]
        assert FilterCriteria().is_empty is True

    def test_date_range_inclusive(self, sample_records) -> None:
        criteria = FilterCriteria(date_from="2025-03-04", date_to="2025-03-05")

        assert _ids(filter_records(sample_records, criteria)) == ["r2", "r3", "r4"]

    def test_date_falls_back_to_created_at(self) -> None:
        record = LedgerRecord(id="x", created_at="2025-02-01T23:00:00.000Z")

        assert filter_records([record], FilterCriteria(date_from="2025-02-01", date_to="2025-02-01"))

    def test_text_search(self, sample_records) -> None:
        """이름 / 코멘트 / 상세, 대소문자 무시"""
        assert _ids(filter_records(sample_records, FilterCriteria(text="NEWS"))) == ["r3"]
        assert _ids(filter_records(sample_records, FilterCriteria(text="gold"))) == ["r4"]

    def test_exact_fields(self, sample_records) -> None:
        criteria = FilterCriteria(account_id="a1", result="Gain", order="Buy")

        assert _ids(filter_records(sample_records, criteria)) == ["r1", "r3"]

    def test_session_and_respect(self, sample_records) -> None:
        assert _ids(filter_records(sample_records, FilterCriteria(respect="No"))) == ["r2"]
        assert _ids(filter_records(sample_records, FilterCriteria(session="asian"))) == ["r3"]
