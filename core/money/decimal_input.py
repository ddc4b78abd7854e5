"""
소수 입력 정규화

자유 입력 문자열(쉼표/점 혼용, 잡문자, 부호)을 정규화된 소수 문자열로 변환.
입력 단계는 항상 문자열을 반환하며, 숫자 해석은 저장 시점에 parse_decimal로 별도 수행.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from core.constants import Defaults


_NON_NUMERIC = re.compile(r"[^\d.,-]")
_NON_DIGIT = re.compile(r"\D")
_WHITESPACE = re.compile(r"\s")

_CENT = Decimal("0.01")


def normalize_decimal(
    raw: str | None,
    max_decimals: int = Defaults.MONEY_DECIMALS,
    allow_negative: bool = False,
) -> str:
    """자유 입력 → 정규화된 소수 문자열

    규칙:
    - 숫자, 쉼표, 점, 마이너스 외 문자 제거
    - 가장 오른쪽(마지막 입력) 구분자가 소수점, 나머지 구분자는 천 단위 흔적으로 제거
    - 소수부는 max_decimals 자리에서 절사 (반올림 아님)
    - 끝에 붙은 구분자는 유지 ("12." 입력 중 상태 보존)
    - allow_negative=False면 마이너스 전부 제거,
      True면 입력 위치와 무관하게 선행 마이너스 하나만 유지

    Args:
        raw: 사용자 입력
        max_decimals: 최대 소수 자릿수
        allow_negative: 음수 허용 여부

    Returns:
        정규화된 문자열 (빈 문자열 가능)
    """
    s = _NON_NUMERIC.sub("", raw or "")
    negative = allow_negative and "-" in s
    s = s.replace("-", "")

    sep = max(s.rfind("."), s.rfind(","))
    if sep == -1:
        int_part, frac_part = s, None
    else:
        int_part = _NON_DIGIT.sub("", s[:sep])
        frac_part = _NON_DIGIT.sub("", s[sep + 1:])

    if frac_part is None or max_decimals <= 0:
        body = int_part
    elif frac_part == "":
        body = f"{int_part or '0'}."
    else:
        body = f"{int_part or '0'}.{frac_part[:max_decimals]}"

    if negative:
        # 입력 중인 단독 "-"도 유지
        return f"-{body}"
    return body


def filter_lot(raw: str | None) -> str:
    """랏 크기 입력 (소수 4자리, 음수 불가)"""
    return normalize_decimal(raw, Defaults.LOT_DECIMALS, allow_negative=False)


def parse_decimal(value: Any) -> Decimal | None:
    """저장 시점 숫자 해석 (로케일 관대)

    공백 제거, 쉼표는 소수점으로 취급.
    빈 문자열 / 해석 불가 / 무한대 / NaN은 None ("없음"). 0으로 취급하지 않음.

    Args:
        value: 문자열, 숫자 또는 None

    Returns:
        Decimal 또는 None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None

    text = _WHITESPACE.sub("", str(value)).replace(",", ".")
    if not text:
        return None

    try:
        parsed = Decimal(text)
    except (InvalidOperation, ValueError):
        return None

    return parsed if parsed.is_finite() else None


def round2(value: Decimal) -> str:
    """소수 2자리 반올림 문자열 (HALF_UP)

    음수 0("-0.00")은 "0.00"으로 정규화.
    """
    q = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    if q == 0:
        q = abs(q)
    return f"{q:.2f}"


def is_zeroish(value: str) -> bool:
    """0으로 해석되는 입력 여부 ("0", "0.00", "00.")"""
    parsed = parse_decimal(value)
    return parsed is not None and parsed == 0
