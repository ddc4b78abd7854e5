"""
엔티티 캐시

계좌 / 마켓 / 전략 목록의 명시적 read-through 캐시.
필터, 그룹 키 해석, 집계 서비스에 주입해서 사용.
"""

import logging
from typing import Union

from adapters.interfaces import ILedgerStore
from core.ledger.grouping import KeyResolver
from core.ledger.records import Account, NamedEntity
from core.types import EntityKind
from core.utils.timezone import utc_iso
from journal.editor import STORE_ERRORS

logger = logging.getLogger(__name__)

Entity = Union[Account, NamedEntity]


class EntityCache:
    """엔티티 종류별 목록 캐시

    get()은 비어 있으면 저장소에서 적재, refresh()는 항상 재적재.
    재적재 실패 시 기존 목록 유지.

    Args:
        store: 외부 저널 저장소
    """

    def __init__(self, store: ILedgerStore):
        self.store = store
        self._entries: dict[EntityKind, list[Entity]] = {}
        self._loaded_at: dict[EntityKind, str] = {}

    async def _fetch(self, kind: EntityKind) -> list[Entity]:
        if kind == EntityKind.ACCOUNT:
            return list(await self.store.list_accounts())
        if kind == EntityKind.MARKET:
            return list(await self.store.list_markets())
        return list(await self.store.list_strategies())

    async def refresh(self, kind: EntityKind | None = None) -> bool:
        """재적재

        Args:
            kind: 대상 종류 (None이면 전체)

        Returns:
            모두 성공했는지 여부
        """
        kinds = [kind] if kind is not None else list(EntityKind)
        ok = True
        for k in kinds:
            try:
                self._entries[k] = await self._fetch(k)
                self._loaded_at[k] = utc_iso()
            except STORE_ERRORS as e:
                ok = False
                logger.warning(
                    "Entity refresh failed, keeping cached list",
                    extra={"kind": k.value, "error": str(e)},
                )
        return ok

    async def get(self, kind: EntityKind) -> list[Entity]:
        """목록 조회 (미적재 시 적재)"""
        if kind not in self._entries:
            await self.refresh(kind)
        return list(self._entries.get(kind, []))

    def invalidate(self, kind: EntityKind | None = None) -> None:
        if kind is None:
            self._entries.clear()
            self._loaded_at.clear()
        else:
            self._entries.pop(kind, None)
            self._loaded_at.pop(kind, None)

    # -------------------------------------------------------------------------
    # 동기 스냅샷
    # -------------------------------------------------------------------------

    def is_loaded(self, kind: EntityKind) -> bool:
        return kind in self._entries

    def loaded_at(self, kind: EntityKind) -> str:
        return self._loaded_at.get(kind, "")

    def snapshot(self, kind: EntityKind) -> list[Entity]:
        return list(self._entries.get(kind, []))

    def accounts(self) -> list[Account]:
        return [e for e in self.snapshot(EntityKind.ACCOUNT) if isinstance(e, Account)]

    def known_ids(self, kind: EntityKind) -> frozenset[str]:
        return frozenset(e.id for e in self._entries.get(kind, []) if e.id)

    def names(self, kind: EntityKind) -> dict[str, str]:
        """id → 이름"""
        return {e.id: e.name for e in self._entries.get(kind, []) if e.id}

    def resolver(self, kind: EntityKind) -> KeyResolver:
        """그룹 키 해석기

        적재된 목록이 있으면 알려진 id만 id 키로 인정, 없으면 모든 id 인정.
        """
        if kind in self._entries:
            return KeyResolver(kind, self.known_ids(kind))
        return KeyResolver(kind)
