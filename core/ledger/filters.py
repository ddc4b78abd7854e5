"""
레코드 필터

모든 조건은 선택 사항이며 AND로 결합.
"""

from dataclasses import dataclass
from typing import Iterable

from core.ledger.records import LedgerRecord


@dataclass(frozen=True)
class FilterCriteria:
    """필터 조건 (빈 문자열 = 조건 없음)

    Attributes:
        date_from / date_to: 날짜 범위 (YYYY-MM-DD, 양 끝 포함)
        text: 이름 / 코멘트 / 상세 부분 일치 (대소문자 무시)
        account_id / market_id / strategy_id: 외래 키 정확 일치
        order / result / respect / session: 범주형 정확 일치
    """

    date_from: str = ""
    date_to: str = ""
    text: str = ""
    account_id: str = ""
    market_id: str = ""
    strategy_id: str = ""
    order: str = ""
    result: str = ""
    respect: str = ""
    session: str = ""

    @property
    def is_empty(self) -> bool:
        return not any(vars(self).values())


_EXACT_FIELDS = (
    "account_id",
    "market_id",
    "strategy_id",
    "order",
    "result",
    "respect",
    "session",
)


def search_text(record: LedgerRecord) -> str:
    """자유 검색 대상 문자열 (소문자)"""
    return " ".join(
        (
            record.account_name,
            record.market_name,
            record.strategy_name,
            record.comment,
            record.detail,
        )
    ).casefold()


def matches(record: LedgerRecord, criteria: FilterCriteria) -> bool:
    """단일 레코드 조건 일치 여부"""
    day = record.day
    if criteria.date_from and day < criteria.date_from:
        return False
    if criteria.date_to and day > criteria.date_to:
        return False

    for name in _EXACT_FIELDS:
        expected = getattr(criteria, name)
        if expected and getattr(record, name) != expected:
            return False

    needle = criteria.text.strip().casefold()
    if needle and needle not in search_text(record):
        return False

    return True


def filter_records(
    records: Iterable[LedgerRecord],
    criteria: FilterCriteria | None = None,
) -> list[LedgerRecord]:
    """조건에 맞는 레코드 목록 (입력 순서 유지)"""
    if criteria is None or criteria.is_empty:
        return list(records)
    return [r for r in records if matches(r, criteria)]
