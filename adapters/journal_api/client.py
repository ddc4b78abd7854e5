"""
저널 저장소 REST 클라이언트

외부 저널 저장소(REST)와 통신하는 ILedgerStore 구현.
통화 코드는 core.money.currency 레지스트리를 통해서만 변환.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Mapping

import httpx

from adapters.journal_api.errors import JournalApiError
from adapters.journal_api.parsers import (
    parse_account_list,
    parse_created,
    parse_deleted,
    parse_entity_list,
    parse_record,
    parse_record_list,
    parse_updated,
    parse_updated_count,
    unwrap,
)
from adapters.models import CreatedRef
from core.constants import Defaults, StoreEndpoints
from core.ledger.filters import FilterCriteria
from core.ledger.records import Account, LedgerRecord, NamedEntity, as_mapping, patch_to_wire
from core.money.currency import to_server_currency

logger = logging.getLogger(__name__)


class JournalApiClient:
    """저널 저장소 REST 클라이언트

    ILedgerStore Protocol 구현.

    Args:
        base_url: 저장소 베이스 URL
        api_token: Bearer 토큰 (빈 문자열이면 헤더 생략)
        timeout: 요청 타임아웃 (초)
        max_retries: 타임아웃 / 전송 오류 시 최대 시도 횟수

    사용 예시:
    ```python
    client = JournalApiClient(base_url="https://example.com/api")
    records = await client.list_records()
    await client.close()
    ```
    """

    def __init__(
        self,
        base_url: str,
        api_token: str = "",
        timeout: float = Defaults.STORE_TIMEOUT_SEC,
        max_retries: int = Defaults.STORE_MAX_RETRIES,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """API 요청 실행

        Args:
            method: HTTP 메서드 (GET, POST, PATCH, DELETE)
            path: API 경로 (예: /journal)
            params: 쿼리 파라미터
            body: JSON 요청 본문

        Returns:
            봉투가 해제된 JSON 응답 (본문이 없으면 {})

        Raises:
            JournalApiError: HTTP 4xx/5xx 또는 {ok: false} 응답
            httpx.TimeoutException / httpx.RequestError: 재시도 모두 실패
        """
        url = f"{self.base_url}{path}"
        client = await self._get_client()

        for attempt in range(self.max_retries):
            try:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=body,
                    headers=self._headers(),
                )
            except httpx.TimeoutException:
                logger.warning(
                    "Request timeout",
                    extra={"path": path, "attempt": attempt + 1},
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(1 * (attempt + 1))
                    continue
                raise
            except httpx.RequestError as e:
                logger.error(
                    "Request error",
                    extra={"path": path, "error": str(e), "attempt": attempt + 1},
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(1 * (attempt + 1))
                    continue
                raise

            try:
                data = response.json() if response.content else {}
            except ValueError:
                data = None

            if response.status_code >= 400:
                payload = as_mapping(data)
                message = str(payload.get("error") or payload.get("message") or response.text)
                logger.error(
                    f"Journal API error: {response.status_code} - {message}",
                    extra={"path": path, "method": method},
                )
                raise JournalApiError(status=response.status_code, message=message)

            if data is None:
                raise JournalApiError(status=response.status_code, message="Invalid JSON response")

            return unwrap(data, response.status_code)

        # max_retries >= 1이므로 도달하지 않음
        raise JournalApiError(status=0, message="All retries failed")

    # -------------------------------------------------------------------------
    # 저널 레코드
    # -------------------------------------------------------------------------

    async def list_records(
        self,
        criteria: FilterCriteria | None = None,
        limit: int = Defaults.LIST_LIMIT,
    ) -> list[LedgerRecord]:
        """레코드 목록 조회

        서버가 지원하는 조건(q, accountId, result, dateFrom, dateTo)만 전달.
        전체 조건 적용은 호출 측 filter_records 책임.
        """
        params: dict[str, Any] = {"limit": limit}
        if criteria is not None:
            optional = {
                "q": criteria.text.strip(),
                "accountId": criteria.account_id,
                "result": criteria.result,
                "dateFrom": criteria.date_from,
                "dateTo": criteria.date_to,
            }
            params.update({k: v for k, v in optional.items() if v})

        data = await self._request("GET", StoreEndpoints.JOURNAL, params=params)
        return parse_record_list(data)

    async def get_record(self, record_id: str) -> LedgerRecord | None:
        data = await self._request("GET", f"{StoreEndpoints.JOURNAL}/{record_id}")
        return parse_record(data)

    async def create_record(self, partial: Mapping[str, Any]) -> CreatedRef:
        data = await self._request("POST", StoreEndpoints.JOURNAL, body=patch_to_wire(partial))
        created = parse_created(data)
        logger.info("Journal record created", extra={"record_id": created.id})
        return created

    async def update_record(self, record_id: str, patch: Mapping[str, Any]) -> str:
        data = await self._request(
            "PATCH",
            f"{StoreEndpoints.JOURNAL}/{record_id}",
            body=patch_to_wire(patch),
        )
        return parse_updated(data)

    async def delete_record(self, record_id: str) -> bool:
        data = await self._request("DELETE", f"{StoreEndpoints.JOURNAL}/{record_id}")
        return parse_deleted(data)

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    @staticmethod
    def _server_currency(code: str) -> str:
        """서버 통화 (ISO 코드가 없는 통화는 입력 그대로)"""
        return to_server_currency(code) or code

    async def list_accounts(self, limit: int = Defaults.LIST_LIMIT) -> list[Account]:
        data = await self._request("GET", StoreEndpoints.ACCOUNTS, params={"limit": limit})
        return parse_account_list(data)

    async def create_account(
        self,
        name: str,
        currency: str,
        initial: Decimal = Decimal("0"),
        description: str = "",
    ) -> CreatedRef:
        body = {
            "name": name,
            "currency": self._server_currency(currency),
            "initial": float(initial),
            "description": description,
        }
        data = await self._request("POST", StoreEndpoints.ACCOUNTS, body=body)
        return parse_created(data)

    async def update_account(
        self,
        account_id: str,
        name: str | None = None,
        currency: str | None = None,
        initial: Decimal | None = None,
        description: str | None = None,
    ) -> str:
        body: dict[str, Any] = {}
        if name is not None:
            body["name"] = name
        if currency:
            body["currency"] = self._server_currency(currency)
        if initial is not None:
            body["initial"] = float(initial)
        if description is not None:
            body["description"] = description

        data = await self._request("PATCH", f"{StoreEndpoints.ACCOUNTS}/{account_id}", body=body)
        return parse_updated(data)

    async def delete_account(self, account_id: str) -> bool:
        data = await self._request("DELETE", f"{StoreEndpoints.ACCOUNTS}/{account_id}")
        return parse_deleted(data)

    async def set_all_accounts_currency(self, currency: str) -> int:
        """모든 계좌 통화 일괄 변경

        Returns:
            변경된 계좌 수
        """
        data = await self._request(
            "PATCH",
            StoreEndpoints.ACCOUNTS_SET_CURRENCY,
            body={"currency": self._server_currency(currency)},
        )
        return parse_updated_count(data)

    # -------------------------------------------------------------------------
    # 마켓 / 전략
    # -------------------------------------------------------------------------

    async def _list_named(self, path: str, limit: int) -> list[NamedEntity]:
        data = await self._request("GET", path, params={"limit": limit})
        return parse_entity_list(data)

    async def _create_named(self, path: str, name: str) -> CreatedRef:
        data = await self._request("POST", path, body={"name": name})
        return parse_created(data)

    async def _update_named(self, path: str, entity_id: str, name: str) -> str:
        data = await self._request("PATCH", f"{path}/{entity_id}", body={"name": name})
        return parse_updated(data)

    async def _delete_named(self, path: str, entity_id: str) -> bool:
        data = await self._request("DELETE", f"{path}/{entity_id}")
        return parse_deleted(data)

    async def list_markets(self, limit: int = Defaults.LIST_LIMIT) -> list[NamedEntity]:
        return await self._list_named(StoreEndpoints.MARKETS, limit)

    async def create_market(self, name: str) -> CreatedRef:
        return await self._create_named(StoreEndpoints.MARKETS, name)

    async def update_market(self, market_id: str, name: str) -> str:
        return await self._update_named(StoreEndpoints.MARKETS, market_id, name)

    async def delete_market(self, market_id: str) -> bool:
        return await self._delete_named(StoreEndpoints.MARKETS, market_id)

    async def list_strategies(self, limit: int = Defaults.LIST_LIMIT) -> list[NamedEntity]:
        return await self._list_named(StoreEndpoints.STRATEGIES, limit)

    async def create_strategy(self, name: str) -> CreatedRef:
        return await self._create_named(StoreEndpoints.STRATEGIES, name)

    async def update_strategy(self, strategy_id: str, name: str) -> str:
        return await self._update_named(StoreEndpoints.STRATEGIES, strategy_id, name)

    async def delete_strategy(self, strategy_id: str) -> bool:
        return await self._delete_named(StoreEndpoints.STRATEGIES, strategy_id)
