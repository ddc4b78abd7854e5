"""
그룹 키 해석

레코드 → GroupKey (BY_ID / BY_NAME / UNKNOWN).
외래 키가 비어 있거나 알려진 엔티티와 맞지 않으면 비정규화 이름으로,
이름도 없으면 "—" 키로 떨어짐.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from core.constants import Defaults
from core.ledger.records import LedgerRecord
from core.types import EntityKind


class GroupKeyKind(str, Enum):
    """그룹 키 종류"""

    BY_ID = "by_id"
    BY_NAME = "by_name"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GroupKey:
    """그룹 키 (태그 + 값)

    같은 문자열이라도 종류가 다르면 다른 그룹.
    """

    kind: GroupKeyKind
    value: str

    @classmethod
    def by_id(cls, entity_id: str) -> "GroupKey":
        return cls(GroupKeyKind.BY_ID, entity_id)

    @classmethod
    def by_name(cls, name: str) -> "GroupKey":
        return cls(GroupKeyKind.BY_NAME, name)

    @classmethod
    def unknown(cls) -> "GroupKey":
        return cls(GroupKeyKind.UNKNOWN, Defaults.UNKNOWN_KEY)

    def __str__(self) -> str:
        return self.value


KeyOf = Callable[[LedgerRecord], GroupKey]


def name_key(name: str) -> str:
    """이름 기반 키 (trim + casefold)"""
    return name.strip().casefold()


class KeyResolver:
    """차원별 그룹 키 해석기

    Args:
        kind: 그룹핑 차원 (account / market / strategy)
        known_ids: 알려진 엔티티 id 집합 (None이면 비어 있지 않은 id는 모두 인정)
    """

    def __init__(self, kind: EntityKind, known_ids: Iterable[str] | None = None):
        self.kind = kind
        self._known_ids = frozenset(known_ids) if known_ids is not None else None

    def __call__(self, record: LedgerRecord) -> GroupKey:
        entity_id = record.foreign_id(self.kind).strip()
        if entity_id and (self._known_ids is None or entity_id in self._known_ids):
            return GroupKey.by_id(entity_id)

        name = name_key(record.denormalized_name(self.kind))
        if name:
            return GroupKey.by_name(name)

        return GroupKey.unknown()


def group_by_key(
    records: Iterable[LedgerRecord],
    key_of: KeyOf,
) -> dict[GroupKey, list[LedgerRecord]]:
    """키별 레코드 분할 (첫 등장 순서, 그룹 내 입력 순서 유지)"""
    groups: dict[GroupKey, list[LedgerRecord]] = {}
    for record in records:
        groups.setdefault(key_of(record), []).append(record)
    return groups
