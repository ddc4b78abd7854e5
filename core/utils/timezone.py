"""
타임존 유틸리티

내부 저장 / 비교는 모두 UTC 기준.
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def utc_iso(dt: datetime | None = None) -> str:
    """ISO 8601 문자열 (밀리초, Z 접미사)

    Args:
        dt: datetime 객체 (None이면 현재 시각, naive면 UTC로 간주)

    Returns:
        예: '2025-03-01T09:30:00.123Z'

    Example:
        >>> utc_iso(datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc))
        '2025-03-01T09:30:00.000Z'
    """
    if dt is None:
        dt = now_utc()
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def today_utc() -> str:
    """오늘 날짜 (UTC, YYYY-MM-DD)"""
    return now_utc().strftime("%Y-%m-%d")
