"""
통화 레지스트리

사용자용 통화 코드 → 정산용 ISO 코드 / 표시 기호 / 포맷 로케일 매핑.
여러 사용자 코드가 같은 ISO 코드를 가리킬 수 있음 (예: FCFA, XOF → XOF).
ISO 코드가 없는 코드(암호화폐)는 기호 접미사로 표시.

서버와 주고받는 통화 코드는 항상 ISO 형식이며,
이 모듈이 양방향 변환의 유일한 지점.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable

from core.constants import Defaults


@dataclass(frozen=True)
class CurrencyInfo:
    """통화 정보

    Attributes:
        code: 사용자용 코드 (예: FCFA_BEAC)
        iso_code: 정산용 ISO 4217 코드 (없으면 None)
        symbol: 표시 기호
        locale: 포맷에 사용할 로케일 (None이면 fallback 로케일)
    """

    code: str
    iso_code: str | None
    symbol: str
    locale: str | None = None

    @property
    def is_iso(self) -> bool:
        """ISO 코드 보유 여부"""
        return self.iso_code is not None


# 순서 중요: 첫 항목이 미인식 코드의 기본값
CURRENCIES: tuple[CurrencyInfo, ...] = (
    CurrencyInfo("USD", "USD", "$", "en_US"),
    CurrencyInfo("EUR", "EUR", "€"),
    CurrencyInfo("FCFA", "XOF", "CFA"),
    CurrencyInfo("FCFA_BEAC", "XAF", "CFA"),
    CurrencyInfo("XOF", "XOF", "CFA"),
    CurrencyInfo("XAF", "XAF", "CFA"),
    CurrencyInfo("GBP", "GBP", "£", "en_GB"),
    CurrencyInfo("JPY", "JPY", "¥", "ja_JP"),
    CurrencyInfo("CAD", "CAD", "C$"),
    CurrencyInfo("AUD", "AUD", "A$"),
    CurrencyInfo("CNY", "CNY", "¥"),
    CurrencyInfo("CHF", "CHF", "CHF"),
    CurrencyInfo("NGN", "NGN", "₦"),
    CurrencyInfo("ZAR", "ZAR", "R"),
    CurrencyInfo("MAD", "MAD", "د.م."),
    CurrencyInfo("INR", "INR", "₹"),
    CurrencyInfo("AED", "AED", "د.إ"),
    CurrencyInfo("GHS", "GHS", "₵"),
    CurrencyInfo("KES", "KES", "KSh"),
    # 암호화폐 (ISO 코드 없음)
    CurrencyInfo("BTC", None, "₿"),
    CurrencyInfo("ETH", None, "Ξ"),
    CurrencyInfo("BNB", None, "BNB"),
    CurrencyInfo("USDT", None, "USDT"),
)

_BY_CODE: dict[str, CurrencyInfo] = {c.code: c for c in CURRENCIES}

# 서버 ISO 코드 → 사용자 코드 (별칭이 있는 경우 별칭 우선)
_SERVER_TO_CLIENT: dict[str, str] = {
    "XOF": "FCFA",
    "XAF": "FCFA_BEAC",
}

SUPPORTED_CODES: tuple[str, ...] = tuple(c.code for c in CURRENCIES)
DEFAULT_CURRENCY: CurrencyInfo = CURRENCIES[0]


def is_supported(code: Any) -> bool:
    """지원 통화 코드 여부 (대소문자 무시)"""
    return str(code or "").strip().upper() in _BY_CODE


def resolve(code: Any) -> CurrencyInfo:
    """사용자 통화 코드 해석

    순수 조회. 대소문자 무시, 미인식 코드는 첫 지원 통화(USD).

    Args:
        code: 사용자용 통화 코드

    Returns:
        CurrencyInfo
    """
    return _BY_CODE.get(str(code or "").strip().upper(), DEFAULT_CURRENCY)


def to_server_currency(code: Any) -> str | None:
    """사용자 코드 → 서버 ISO 코드

    ISO 코드가 없는 통화(암호화폐)나 미지원 코드는 None.
    """
    info = _BY_CODE.get(str(code or "").strip().upper())
    if info is None:
        return None
    return info.iso_code


def from_server_currency(value: Any) -> str:
    """서버 ISO 코드 → 사용자 코드

    XOF/XAF는 FCFA 별칭으로, 미지원 코드는 기본 통화로 변환.
    """
    s = str(value or "").strip().upper()
    if s in _SERVER_TO_CLIENT:
        return _SERVER_TO_CLIENT[s]
    return s if s in _BY_CODE else DEFAULT_CURRENCY.code


def currency_sign(code: Any) -> str:
    """표시 기호 반환 (KPI 헤더 등)"""
    return resolve(code).symbol


def dominant_currency(currencies: Iterable[str]) -> str:
    """가장 많이 사용된 통화 코드

    동률이면 먼저 등장한 코드. 비어 있으면 기본 통화.

    Args:
        currencies: 계좌별 통화 코드 목록

    Returns:
        사용자용 통화 코드
    """
    counts = Counter(resolve(c).code for c in currencies)
    if not counts:
        return Defaults.CURRENCY
    # Counter.most_common은 동률 시 최초 등장 순서를 유지
    return counts.most_common(1)[0][0]
