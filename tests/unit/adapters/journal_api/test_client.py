"""
adapters/journal_api/client.py 테스트

httpx.MockTransport로 요청 / 응답 검증
"""

import json
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from adapters.journal_api.client import JournalApiClient
from adapters.journal_api.errors import JournalApiError
from core.ledger.filters import FilterCriteria


def _client_with(handler) -> JournalApiClient:
    client = JournalApiClient(base_url="http://journal.test/api/", api_token="tok", max_retries=2)
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client


class TestRequest:
    """_request 공통 동작"""

    @pytest.mark.asyncio
    async def test_headers_and_envelope(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True, "data": {"items": [{"id": "r1"}]}})

        client = _client_with(handler)
        records = await client.list_records()
        await client.close()

        assert [r.id for r in records] == ["r1"]
        assert seen[0].url.path == "/api/journal"
        assert seen[0].headers["Authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "not found"})

        client = _client_with(handler)

        with pytest.raises(JournalApiError) as exc_info:
            await client.get_record("missing")

        assert exc_info.value.status == 404
        assert exc_info.value.message == "not found"

    @pytest.mark.asyncio
    async def test_error_envelope_with_200(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": False, "error": "denied"})

        client = _client_with(handler)

        with pytest.raises(JournalApiError, match="denied"):
            await client.list_markets()

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        client = _client_with(handler)

        with pytest.raises(JournalApiError, match="Invalid JSON"):
            await client.list_accounts()

    @pytest.mark.asyncio
    async def test_retry_on_transport_error(self) -> None:
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            if len(attempts) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"items": []})

        client = _client_with(handler)

        with patch("adapters.journal_api.client.asyncio.sleep", new=AsyncMock()) as sleep:
            assert await client.list_strategies() == []

        assert len(attempts) == 2
        sleep.assert_awaited_once_with(1)

    @pytest.mark.asyncio
    async def test_retries_exhausted(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = _client_with(handler)

        with patch("adapters.journal_api.client.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(httpx.TimeoutException):
                await client.list_records()


class TestRecords:
    @pytest.mark.asyncio
    async def test_list_params(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = _client_with(handler)
        criteria = FilterCriteria(text=" gold ", account_id="a1", market_id="m1")
        await client.list_records(criteria, limit=50)

        params = dict(seen[0].url.params)
        assert params == {"limit": "50", "q": "gold", "accountId": "a1"}

    @pytest.mark.asyncio
    async def test_update_sends_camel_case(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True, "data": {"updatedAt": "t1"}})

        client = _client_with(handler)
        updated_at = await client.update_record("r1", {"result_money": "-5", "result_pct": ""})

        assert updated_at == "t1"
        assert seen[0].method == "PATCH"
        assert seen[0].url.path == "/api/journal/r1"
        assert json.loads(seen[0].content) == {"resultMoney": "-5", "resultPct": ""}

    @pytest.mark.asyncio
    async def test_create_without_id_fails(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={"ok": True, "data": {}})

        client = _client_with(handler)

        with pytest.raises(JournalApiError):
            await client.create_record({"date": "2025-01-01"})

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"deleted": True})

        client = _client_with(handler)

        assert await client.delete_record("r1") is True


class TestAccounts:
    @pytest.mark.asyncio
    async def test_create_account_server_currency(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": "a9"})

        client = _client_with(handler)
        created = await client.create_account("Main", "FCFA", Decimal("250.5"))

        assert created.id == "a9"
        body = json.loads(seen[0].content)
        assert body["currency"] == "XOF"
        assert body["initial"] == 250.5

    @pytest.mark.asyncio
    async def test_crypto_currency_sent_as_is(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"updated": 2})

        client = _client_with(handler)

        assert await client.set_all_accounts_currency("BTC") == 2
        assert json.loads(seen[0].content) == {"currency": "BTC"}
        assert seen[0].url.path == "/api/journal/accounts/set-currency"

    @pytest.mark.asyncio
    async def test_update_account_partial_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"updatedAt": "t"})

        client = _client_with(handler)
        await client.update_account("a1", currency="FCFA_BEAC")

        assert json.loads(seen[0].content) == {"currency": "XAF"}


class TestProtocol:
    def test_implements_store_protocol(self) -> None:
        from adapters.interfaces import ILedgerStore

        assert isinstance(JournalApiClient(base_url="http://x"), ILedgerStore)

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        client = JournalApiClient(base_url="http://x")
        await client._get_client()

        await client.close()
        await client.close()

        assert client._client is None
