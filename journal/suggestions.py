"""
이름 자동 완성

마켓 / 전략 이름 실시간 추천. 입력이 바뀌면 이전 조회는 취소되고 결과는 버려짐.
"""

import logging

from core.ledger.grouping import name_key
from core.types import EntityKind
from core.utils.latest import LatestOnlyLookup
from journal.cache import EntityCache

logger = logging.getLogger(__name__)


class SuggestionLookup:
    """엔티티 이름 추천

    Args:
        cache: 엔티티 캐시
        kind: 대상 종류 (보통 MARKET / STRATEGY)
        limit: 최대 추천 수
        refresh: True면 조회마다 저장소에서 재적재
    """

    def __init__(
        self,
        cache: EntityCache,
        kind: EntityKind,
        limit: int = 8,
        refresh: bool = True,
    ):
        self.cache = cache
        self.kind = kind
        self.limit = limit
        self.refresh = refresh
        self._lookup: LatestOnlyLookup[list[str]] = LatestOnlyLookup(
            self._search, name=f"suggest:{kind.value}"
        )

    async def _search(self, text: str) -> list[str]:
        if self.refresh:
            await self.cache.refresh(self.kind)
        entities = await self.cache.get(self.kind)

        needle = name_key(text)
        starts: list[str] = []
        contains: list[str] = []
        seen: set[str] = set()
        for entity in entities:
            key = name_key(entity.name)
            if not key or key in seen:
                continue
            if key.startswith(needle):
                starts.append(entity.name)
                seen.add(key)
            elif needle in key:
                contains.append(entity.name)
                seen.add(key)

        return (starts + contains)[: self.limit]

    async def suggest(self, text: str) -> list[str] | None:
        """추천 목록

        Returns:
            이름 목록 (앞부분 일치 우선). 이후 입력으로 대체되면 None.
        """
        return await self._lookup.query(text)

    def cancel(self) -> None:
        self._lookup.cancel()
