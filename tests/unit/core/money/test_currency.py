"""
core/money/currency.py 테스트

통화 레지스트리 조회 / 서버 코드 변환
"""

import pytest

from core.money.currency import (
    SUPPORTED_CODES,
    currency_sign,
    dominant_currency,
    from_server_currency,
    is_supported,
    resolve,
    to_server_currency,
)


class TestResolve:
    def test_known_code(self) -> None:
        info = resolve("eur")

        assert info.code == "EUR"
        assert info.iso_code == "EUR"
        assert info.symbol == "€"

    def test_unknown_falls_back_to_first(self) -> None:
        assert resolve("DOGE").code == SUPPORTED_CODES[0] == "USD"
        assert resolve(None).code == "USD"

    def test_crypto_has_no_iso(self) -> None:
        info = resolve("BTC")

        assert info.iso_code is None
        assert info.is_iso is False


class TestServerConversion:
    """서버 ISO 코드 ↔ 사용자 코드"""

    @pytest.mark.parametrize(
        "code, expected",
        [("FCFA", "XOF"), ("FCFA_BEAC", "XAF"), ("XOF", "XOF"), ("usd", "USD")],
    )
    def test_to_server(self, code, expected) -> None:
        assert to_server_currency(code) == expected

    @pytest.mark.parametrize("code", ["BTC", "DOGE", ""])
    def test_to_server_none(self, code) -> None:
        assert to_server_currency(code) is None

    @pytest.mark.parametrize(
        "value, expected",
        [("XOF", "FCFA"), ("XAF", "FCFA_BEAC"), ("gbp", "GBP"), ("???", "USD"), (None, "USD")],
    )
    def test_from_server(self, value, expected) -> None:
        assert from_server_currency(value) == expected


class TestHelpers:
    def test_is_supported(self) -> None:
        assert is_supported("fcfa") is True
        assert is_supported("DOGE") is False

    def test_currency_sign(self) -> None:
        assert currency_sign("GBP") == "£"
        assert currency_sign("nope") == "$"

    def test_dominant_currency(self) -> None:
        assert dominant_currency(["EUR", "USD", "EUR"]) == "EUR"

    def test_dominant_currency_tie_keeps_first(self) -> None:
        assert dominant_currency(["GBP", "EUR"]) == "GBP"

    def test_dominant_currency_empty(self) -> None:
        assert dominant_currency([]) == "USD"
