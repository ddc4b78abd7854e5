"""
저널 런타임 구성

저장소, 레코드 북, 수정 코디네이터, 엔티티 캐시를 하나로 묶어 생성 / 종료.
"""

import logging
from dataclasses import dataclass, field

from adapters.interfaces import ILedgerStore, INotifier
from adapters.journal_api.client import JournalApiClient
from core.config.loader import AppConfig, DisplayConfig, Settings
from journal.book import LedgerBook
from journal.cache import EntityCache
from journal.editor import EditCoordinator

logger = logging.getLogger(__name__)


@dataclass
class JournalRuntime:
    """저널 런타임 컨테이너

    Attributes:
        store: 외부 저널 저장소
        book: 레코드 북
        editor: 수정 코디네이터 (북의 유일한 변경 주체)
        cache: 엔티티 캐시
        display: 표시 설정
    """

    store: ILedgerStore
    book: LedgerBook
    editor: EditCoordinator
    cache: EntityCache
    display: DisplayConfig = field(default_factory=DisplayConfig)
    loaded: bool = False

    async def ensure_loaded(self) -> None:
        """최초 1회 레코드 / 엔티티 적재 (실패 시 다음 호출에서 재시도)"""
        if self.loaded:
            return
        records_ok = await self.editor.reload()
        entities_ok = await self.cache.refresh()
        self.loaded = records_ok and entities_ok

    async def close(self) -> None:
        """진행 중 저장 대기 후 저장소 연결 종료"""
        await self.editor.drain()
        close = getattr(self.store, "close", None)
        if close is not None:
            await close()


def create_runtime(
    store: ILedgerStore,
    display: DisplayConfig | None = None,
    notifier: INotifier | None = None,
) -> JournalRuntime:
    """저장소로부터 런타임 구성"""
    book = LedgerBook()
    return JournalRuntime(
        store=store,
        book=book,
        editor=EditCoordinator(store, book, notifier),
        cache=EntityCache(store),
        display=display or DisplayConfig(),
    )


def build_runtime(config: AppConfig | Settings, notifier: INotifier | None = None) -> JournalRuntime:
    """설정 기반 런타임 구성 (REST 저장소)"""
    store = JournalApiClient(
        base_url=config.store.base_url,
        api_token=config.store.api_token,
        timeout=config.store.timeout,
        max_retries=config.store.max_retries,
    )
    logger.info("Journal runtime created", extra={"base_url": config.store.base_url})
    return create_runtime(store, config.display, notifier)
