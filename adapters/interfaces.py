"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from decimal import Decimal
from typing import Any, Mapping, Protocol, runtime_checkable

from adapters.models import CreatedRef
from core.ledger.filters import FilterCriteria
from core.ledger.records import Account, LedgerRecord, NamedEntity


@runtime_checkable
class ILedgerStore(Protocol):
    """외부 저널 저장소 인터페이스

    읽기 메서드는 이미 도메인 모델로 변환된 값을 반환 (누락 필드는 기본값).
    쓰기 실패는 예외로 전달 (JournalApiError 또는 httpx.HTTPError).
    통화 코드는 사용자용 코드로 주고받고, 서버 ISO 코드 변환은 구현체 책임.
    """

    # -------------------------------------------------------------------------
    # 저널 레코드
    # -------------------------------------------------------------------------

    async def list_records(
        self,
        criteria: FilterCriteria | None = None,
        limit: int = ...,
    ) -> list[LedgerRecord]:
        """레코드 목록 조회

        Args:
            criteria: 서버 측 사전 필터 (지원 범위는 구현체마다 다름)
            limit: 최대 건수

        Returns:
            레코드 목록
        """
        ...

    async def get_record(self, record_id: str) -> LedgerRecord | None:
        """단건 조회 (없으면 None)"""
        ...

    async def create_record(self, partial: Mapping[str, Any]) -> CreatedRef:
        """레코드 생성

        Args:
            partial: 필드명 → 값 (snake_case 또는 camelCase)

        Returns:
            서버 부여 ID와 수정 시각
        """
        ...

    async def update_record(self, record_id: str, patch: Mapping[str, Any]) -> str:
        """레코드 부분 수정

        Returns:
            서버 updatedAt (없으면 빈 문자열)
        """
        ...

    async def delete_record(self, record_id: str) -> bool:
        """레코드 삭제

        Returns:
            삭제 여부
        """
        ...

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    async def list_accounts(self, limit: int = ...) -> list[Account]:
        ...

    async def create_account(
        self,
        name: str,
        currency: str,
        initial: Decimal = ...,
        description: str = "",
    ) -> CreatedRef:
        ...

    async def update_account(
        self,
        account_id: str,
        name: str | None = None,
        currency: str | None = None,
        initial: Decimal | None = None,
        description: str | None = None,
    ) -> str:
        ...

    async def delete_account(self, account_id: str) -> bool:
        ...

    async def set_all_accounts_currency(self, currency: str) -> int:
        """모든 계좌 통화 일괄 변경 (변경 건수 반환)"""
        ...

    # -------------------------------------------------------------------------
    # 마켓 / 전략
    # -------------------------------------------------------------------------

    async def list_markets(self, limit: int = ...) -> list[NamedEntity]:
        ...

    async def create_market(self, name: str) -> CreatedRef:
        ...

    async def update_market(self, market_id: str, name: str) -> str:
        ...

    async def delete_market(self, market_id: str) -> bool:
        ...

    async def list_strategies(self, limit: int = ...) -> list[NamedEntity]:
        ...

    async def create_strategy(self, name: str) -> CreatedRef:
        ...

    async def update_strategy(self, strategy_id: str, name: str) -> str:
        ...

    async def delete_strategy(self, strategy_id: str) -> bool:
        ...


@runtime_checkable
class INotifier(Protocol):
    """알림 서비스 인터페이스

    저장 실패 등 사용자에게 보여줄 비치명적 안내를 전달.
    """

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터 (선택)

        Returns:
            전송 성공 여부
        """
        ...
