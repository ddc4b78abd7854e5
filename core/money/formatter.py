"""
금액 포맷터

금액 + 사용자 통화 코드 → 로케일에 맞는 표시 문자열.
ISO 코드가 있으면 Babel 통화 포맷, 실패하거나 ISO 코드가 없으면
"<숫자> <기호>" 형태의 fallback. 어떤 입력에도 예외를 던지지 않음.
"""

import logging
from decimal import Decimal
from typing import Any

from babel.core import UnknownLocaleError
from babel.numbers import format_currency, format_decimal

from core.constants import Defaults
from core.money.currency import resolve
from core.money.decimal_input import parse_decimal

logger = logging.getLogger(__name__)


# fallback 숫자 패턴 (소수 최대 2자리)
FALLBACK_PATTERN = "#,##0.##"

_FORMAT_ERRORS = (UnknownLocaleError, ValueError, TypeError, ArithmeticError, LookupError)


def _to_amount(amount: Any) -> Decimal:
    """포맷용 금액 변환 (None / NaN / 무한대 / 해석 불가 → 0)"""
    if isinstance(amount, float):
        amount = str(amount)
    parsed = parse_decimal(amount)
    return parsed if parsed is not None else Decimal("0")


def _format_plain(amount: Decimal, locale: str) -> str:
    """로케일 숫자 포맷 (기호 없음)"""
    try:
        return format_decimal(amount, format=FALLBACK_PATTERN, locale=locale)
    except _FORMAT_ERRORS:
        if locale != Defaults.FALLBACK_LOCALE:
            return _format_plain(amount, Defaults.FALLBACK_LOCALE)
        return f"{amount:.2f}"


def format_money(
    amount: Any,
    code: Any,
    fallback_locale: str | None = None,
) -> str:
    """금액 포맷

    Args:
        amount: 금액 (Decimal, int, float, 문자열 또는 None)
        code: 사용자용 통화 코드 (미인식 시 USD)
        fallback_locale: 로케일 매핑이 없는 통화에 사용할 로케일

    Returns:
        포맷된 문자열. 음수는 포맷터 고유의 부호 규칙을 따름.
    """
    info = resolve(code)
    locale = info.locale or fallback_locale or Defaults.FALLBACK_LOCALE
    value = _to_amount(amount)

    if info.iso_code:
        try:
            return format_currency(value, info.iso_code, locale=locale)
        except _FORMAT_ERRORS as e:
            logger.debug(
                "Currency format failed, using symbol fallback",
                extra={"code": info.code, "locale": locale, "error": str(e)},
            )

    return f"{_format_plain(value, locale)} {info.symbol}"
