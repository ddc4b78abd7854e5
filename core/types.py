"""
타입 정의 모듈

저널 도메인의 Enum 정의.
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TradeResult(str, Enum):
    """거래 결과 (범주형)

    UNSET은 결과가 아직 선택되지 않은 상태 (빈 문자열로 직렬화)
    """

    GAIN = "Gain"
    LOSS = "Loss"
    BREAKEVEN = "Breakeven"
    UNSET = ""


class OrderSide(str, Enum):
    """주문 방향"""

    BUY = "Buy"
    SELL = "Sell"
    UNSET = ""


class RespectFlag(str, Enum):
    """전략 규칙 준수 여부"""

    YES = "Yes"
    NO = "No"
    UNSET = ""


class TradingSession(str, Enum):
    """거래 세션"""

    LONDON = "london"
    NEW_YORK = "newyork"
    ASIAN = "asian"
    UNSET = ""


class EntityKind(str, Enum):
    """레코드가 참조하는 엔티티 종류 (그룹핑 차원)"""

    ACCOUNT = "account"
    MARKET = "market"
    STRATEGY = "strategy"


class SyncState(str, Enum):
    """레코드의 서버 동기화 상태"""

    SYNCED = "SYNCED"
    PENDING = "PENDING"
    DIRTY = "DIRTY"  # 로컬에만 반영됨 (서버 미반영)


class RemoteOutcome(str, Enum):
    """원격 저장 결과"""

    SUCCESS = "success"
    FAILURE = "failure"
