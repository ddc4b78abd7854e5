"""
최신 요청만 반영하는 비동기 조회

새 조회가 시작되면 진행 중인 이전 조회 Task를 취소하고,
이미 대체된 조회의 결과는 버림(None 반환).
"""

import asyncio
import logging
from typing import Any, Callable, Coroutine, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatestOnlyLookup(Generic[T]):
    """최신 조회만 결과를 반환하는 래퍼

    Args:
        fetch: 조회 코루틴 함수 (query → 결과)
        name: 로깅용 이름

    사용 예시:
    ```python
    lookup = LatestOnlyLookup(store_search)

    first = asyncio.create_task(lookup.query("EU"))
    second = await lookup.query("EURUSD")

    assert await first is None  # 대체됨
    ```
    """

    def __init__(
        self,
        fetch: Callable[[str], Coroutine[Any, Any, T]],
        name: str = "lookup",
    ):
        self._fetch = fetch
        self._name = name
        self._task: asyncio.Task[T] | None = None
        self._generation = 0

    @property
    def in_flight(self) -> bool:
        """진행 중인 조회 존재 여부"""
        return self._task is not None and not self._task.done()

    def _cancel_current(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug(f"{self._name}: superseded query cancelled")

    async def query(self, text: str) -> T | None:
        """조회 실행

        Args:
            text: 조회어

        Returns:
            결과. 이 조회가 이후 조회나 cancel()로 대체되면 None.

        Raises:
            fetch가 던진 예외 (대체되지 않은 경우에만)
        """
        self._generation += 1
        generation = self._generation
        self._cancel_current()

        task = asyncio.create_task(self._fetch(text))
        self._task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return None
            raise
        except Exception:
            if generation != self._generation:
                return None
            raise

        if generation != self._generation:
            return None
        return result

    def cancel(self) -> None:
        """진행 중 조회 취소 (대기 중인 호출은 None 반환)"""
        self._generation += 1
        self._cancel_current()
