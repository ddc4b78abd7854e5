"""
통화 / 금액 처리

통화 레지스트리, 금액 포맷, 소수 입력 정규화.
"""

from core.money.currency import (
    CURRENCIES,
    SUPPORTED_CODES,
    CurrencyInfo,
    currency_sign,
    dominant_currency,
    from_server_currency,
    is_supported,
    resolve,
    to_server_currency,
)
from core.money.decimal_input import (
    filter_lot,
    is_zeroish,
    normalize_decimal,
    parse_decimal,
    round2,
)
from core.money.formatter import format_money

__all__ = [
    # 레지스트리
    "CURRENCIES",
    "SUPPORTED_CODES",
    "CurrencyInfo",
    "resolve",
    "is_supported",
    "to_server_currency",
    "from_server_currency",
    "currency_sign",
    "dominant_currency",
    # 포맷
    "format_money",
    # 입력
    "normalize_decimal",
    "filter_lot",
    "parse_decimal",
    "round2",
    "is_zeroish",
]
