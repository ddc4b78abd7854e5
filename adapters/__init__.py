"""
어댑터 레이어

외부 저널 저장소, 알림 등과의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import ILedgerStore, INotifier
from adapters.log_notifier import LogNotifier
from adapters.models import CreatedRef

__all__ = [
    # Interfaces
    "ILedgerStore",
    "INotifier",
    # Implementations
    "LogNotifier",
    # Models
    "CreatedRef",
]
