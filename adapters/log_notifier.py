"""
로그 알림 서비스

사용자 안내 메시지를 logging 모듈로 전달하는 기본 Notifier.
INotifier Protocol 준수.
"""

import logging
from typing import Any

logger = logging.getLogger("journal.notice")


# 알림 레벨 → logging 레벨
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class LogNotifier:
    """logging 기반 알림 서비스

    INotifier Protocol 구현. 외부 알림 채널이 없을 때 기본값.

    Args:
        target: 출력할 로거 (기본: "journal.notice")
    """

    def __init__(self, target: logging.Logger | None = None):
        self._logger = target or logger

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송 (로그 기록)"""
        self._logger.log(
            LEVEL_MAP.get(level.upper(), logging.INFO),
            message,
            extra={"notice": extra or {}},
        )
        return True
