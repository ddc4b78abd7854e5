"""
Mock 저널 저장소

테스트 / 로컬 실행용 메모리 내 저장소.
ILedgerStore Protocol 준수.
"""

import asyncio
import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Mapping

from adapters.journal_api.errors import JournalApiError
from adapters.models import CreatedRef
from core.constants import Defaults
from core.ledger.filters import FilterCriteria, filter_records
from core.ledger.records import (
    Account,
    LedgerRecord,
    NamedEntity,
    apply_patch,
    coerce_record,
    patch_to_wire,
)
from core.money.currency import from_server_currency, to_server_currency
from core.utils.timezone import utc_iso


@dataclass
class MockStoreState:
    """Mock 상태 (메모리 내 저장)"""

    records: dict[str, LedgerRecord] = field(default_factory=dict)
    accounts: dict[str, Account] = field(default_factory=dict)
    markets: dict[str, NamedEntity] = field(default_factory=dict)
    strategies: dict[str, NamedEntity] = field(default_factory=dict)


@dataclass
class StoreCall:
    """호출 기록"""

    method: str
    args: tuple[Any, ...]


class MockLedgerStore:
    """Mock 저널 저장소

    ILedgerStore Protocol 구현.

    사용 예시:
    ```python
    store = MockLedgerStore()
    store.add_record(LedgerRecord(id="r1", result_money="10"))

    store.should_fail = True   # 이후 모든 쓰기 호출 실패
    store.gate = asyncio.Event()  # set() 전까지 update_record 대기
    ```

    Args:
        state: 초기 상태
        should_fail: True면 모든 호출이 JournalApiError(503)
    """

    def __init__(self, state: MockStoreState | None = None, should_fail: bool = False):
        self.state = state or MockStoreState()
        self.should_fail = should_fail
        self.gate: asyncio.Event | None = None
        self.calls: list[StoreCall] = []

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def add_record(self, record: LedgerRecord) -> LedgerRecord:
        self.state.records[record.id] = record
        return record

    def add_account(self, account: Account) -> Account:
        self.state.accounts[account.id] = account
        return account

    def add_market(self, market: NamedEntity) -> NamedEntity:
        self.state.markets[market.id] = market
        return market

    def add_strategy(self, strategy: NamedEntity) -> NamedEntity:
        self.state.strategies[strategy.id] = strategy
        return strategy

    def calls_to(self, method: str) -> list[StoreCall]:
        """특정 메서드 호출 기록"""
        return [c for c in self.calls if c.method == method]

    async def _enter(self, method: str, *args: Any) -> None:
        self.calls.append(StoreCall(method, args))
        if self.gate is not None and method in _GATED:
            await self.gate.wait()
        if self.should_fail:
            raise JournalApiError(status=503, message="Mock store unavailable")

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    # -------------------------------------------------------------------------
    # 저널 레코드
    # -------------------------------------------------------------------------

    async def list_records(
        self,
        criteria: FilterCriteria | None = None,
        limit: int = Defaults.LIST_LIMIT,
    ) -> list[LedgerRecord]:
        await self._enter("list_records", criteria, limit)
        return filter_records(self.state.records.values(), criteria)[:limit]

    async def get_record(self, record_id: str) -> LedgerRecord | None:
        await self._enter("get_record", record_id)
        return self.state.records.get(record_id)

    async def create_record(self, partial: Mapping[str, Any]) -> CreatedRef:
        await self._enter("create_record", dict(partial))
        now = utc_iso()
        wire = patch_to_wire(partial)
        wire.update(id=self._new_id(), updatedAt=now)
        wire.setdefault("createdAt", now)
        record = coerce_record(wire)
        self.state.records[record.id] = record
        return CreatedRef(id=record.id, updated_at=now)

    async def update_record(self, record_id: str, patch: Mapping[str, Any]) -> str:
        await self._enter("update_record", record_id, dict(patch))
        current = self.state.records.get(record_id)
        if current is None:
            raise JournalApiError(status=404, message=f"Record not found: {record_id}")
        now = utc_iso()
        self.state.records[record_id] = replace(apply_patch(current, patch), updated_at=now)
        return now

    async def delete_record(self, record_id: str) -> bool:
        await self._enter("delete_record", record_id)
        return self.state.records.pop(record_id, None) is not None

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    async def list_accounts(self, limit: int = Defaults.LIST_LIMIT) -> list[Account]:
        await self._enter("list_accounts", limit)
        return list(self.state.accounts.values())[:limit]

    async def create_account(
        self,
        name: str,
        currency: str,
        initial: Decimal = Decimal("0"),
        description: str = "",
    ) -> CreatedRef:
        await self._enter("create_account", name, currency, initial, description)
        now = utc_iso()
        account = Account(
            id=self._new_id(),
            name=name.strip(),
            currency=_round_trip_currency(currency),
            initial=initial,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self.state.accounts[account.id] = account
        return CreatedRef(id=account.id, updated_at=now)

    async def update_account(
        self,
        account_id: str,
        name: str | None = None,
        currency: str | None = None,
        initial: Decimal | None = None,
        description: str | None = None,
    ) -> str:
        await self._enter("update_account", account_id, name, currency, initial, description)
        current = self.state.accounts.get(account_id)
        if current is None:
            raise JournalApiError(status=404, message=f"Account not found: {account_id}")

        changes: dict[str, Any] = {"updated_at": utc_iso()}
        if name is not None:
            changes["name"] = name.strip()
        if currency:
            changes["currency"] = _round_trip_currency(currency)
        if initial is not None:
            changes["initial"] = initial
        if description is not None:
            changes["description"] = description

        self.state.accounts[account_id] = replace(current, **changes)
        return changes["updated_at"]

    async def delete_account(self, account_id: str) -> bool:
        await self._enter("delete_account", account_id)
        return self.state.accounts.pop(account_id, None) is not None

    async def set_all_accounts_currency(self, currency: str) -> int:
        await self._enter("set_all_accounts_currency", currency)
        code = _round_trip_currency(currency)
        for account_id, account in self.state.accounts.items():
            self.state.accounts[account_id] = replace(account, currency=code)
        return len(self.state.accounts)

    # -------------------------------------------------------------------------
    # 마켓 / 전략
    # -------------------------------------------------------------------------

    async def list_markets(self, limit: int = Defaults.LIST_LIMIT) -> list[NamedEntity]:
        await self._enter("list_markets", limit)
        return list(self.state.markets.values())[:limit]

    async def create_market(self, name: str) -> CreatedRef:
        await self._enter("create_market", name)
        return _create_named(self.state.markets, name, self._new_id())

    async def update_market(self, market_id: str, name: str) -> str:
        await self._enter("update_market", market_id, name)
        return _update_named(self.state.markets, market_id, name)

    async def delete_market(self, market_id: str) -> bool:
        await self._enter("delete_market", market_id)
        return self.state.markets.pop(market_id, None) is not None

    async def list_strategies(self, limit: int = Defaults.LIST_LIMIT) -> list[NamedEntity]:
        await self._enter("list_strategies", limit)
        return list(self.state.strategies.values())[:limit]

    async def create_strategy(self, name: str) -> CreatedRef:
        await self._enter("create_strategy", name)
        return _create_named(self.state.strategies, name, self._new_id())

    async def update_strategy(self, strategy_id: str, name: str) -> str:
        await self._enter("update_strategy", strategy_id, name)
        return _update_named(self.state.strategies, strategy_id, name)

    async def delete_strategy(self, strategy_id: str) -> bool:
        await self._enter("delete_strategy", strategy_id)
        return self.state.strategies.pop(strategy_id, None) is not None


_GATED = {"update_record", "create_record", "delete_record"}


def _round_trip_currency(code: str) -> str:
    """서버 저장 형식을 거친 통화 코드 (FCFA → XOF → FCFA)"""
    return from_server_currency(to_server_currency(code) or code)


def _create_named(table: dict[str, NamedEntity], name: str, entity_id: str) -> CreatedRef:
    now = utc_iso()
    table[entity_id] = NamedEntity(id=entity_id, name=name.strip(), created_at=now, updated_at=now)
    return CreatedRef(id=entity_id, updated_at=now)


def _update_named(table: dict[str, NamedEntity], entity_id: str, name: str) -> str:
    current = table.get(entity_id)
    if current is None:
        raise JournalApiError(status=404, message=f"Entity not found: {entity_id}")
    now = utc_iso()
    table[entity_id] = replace(current, name=name.strip(), updated_at=now)
    return now
