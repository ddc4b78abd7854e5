"""
저널 레코드 모델

LedgerRecord(거래 기록), Account(계좌), NamedEntity(마켓/전략) 정의와
외부 저장소 응답 → 도메인 모델 관대한 변환(coerce).

변환 규칙:
- 누락 / 알 수 없는 필드는 예외 없이 빈 값 / 0으로 기본 설정
- 범주형 필드가 허용 값이 아니면 빈 문자열
- 서버 구버전 값(Perte, Nul, Oui, Non, asiatique)은 현재 값으로 매핑
"""

import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Any, Mapping

from core.constants import Defaults
from core.money.currency import from_server_currency
from core.money.decimal_input import parse_decimal
from core.types import EntityKind

logger = logging.getLogger(__name__)


# 범주형 필드 허용 값 (구버전 별칭 포함)
RESULT_VALUES: dict[str, str] = {
    "Gain": "Gain",
    "Loss": "Loss",
    "Breakeven": "Breakeven",
    "Perte": "Loss",
    "Nul": "Breakeven",
}
ORDER_VALUES: dict[str, str] = {"Buy": "Buy", "Sell": "Sell"}
RESPECT_VALUES: dict[str, str] = {"Yes": "Yes", "No": "No", "Oui": "Yes", "Non": "No"}
SESSION_VALUES: dict[str, str] = {
    "london": "london",
    "newyork": "newyork",
    "asian": "asian",
    "asiatique": "asian",
}


@dataclass(frozen=True)
class LedgerRecord:
    """거래 기록 (저널 엔트리)

    모든 금액은 입력 그대로의 소수 문자열. 숫자 해석은 parse_decimal로 필요 시점에 수행.

    Attributes:
        id: 레코드 ID
        date: 거래일 (YYYY-MM-DD, 비어 있으면 created_at 사용)
        created_at: 생성 시각 (ISO 8601)
        updated_at: 서버 최종 수정 시각
        account_id / market_id / strategy_id: 외래 키 (비어 있을 수 있음)
        account_name / market_name / strategy_name: 비정규화 이름 (외래 키 없을 때 그룹 식별용)
        order: Buy / Sell / ""
        result: Gain / Loss / Breakeven / ""
        invested: 투자 금액
        result_money: 부호 있는 결과 금액
        result_pct: 결과 비율 (result_money / invested * 100, 소수 2자리)
    """

    id: str = ""
    date: str = ""
    created_at: str = ""
    updated_at: str = ""

    account_id: str = ""
    account_name: str = ""
    market_id: str = ""
    market_name: str = ""
    strategy_id: str = ""
    strategy_name: str = ""

    order: str = ""
    lot: str = ""
    result: str = ""
    detail: str = ""

    invested: str = ""
    result_money: str = ""
    result_pct: str = ""

    respect: str = ""
    duration: str = ""
    timeframes: tuple[str, ...] = ()
    session: str = ""
    comment: str = ""
    images: tuple[str, ...] = ()

    @property
    def sort_key(self) -> str:
        """시간순 정렬 키 (date 우선, 없으면 created_at)"""
        return self.date or self.created_at

    @property
    def day(self) -> str:
        """달력 날짜 (date 또는 created_at 앞 10자)"""
        return self.date or self.created_at[:10]

    def foreign_id(self, kind: EntityKind) -> str:
        """차원별 외래 키"""
        return getattr(self, f"{kind.value}_id")

    def denormalized_name(self, kind: EntityKind) -> str:
        """차원별 비정규화 이름"""
        return getattr(self, f"{kind.value}_name")

    def to_wire(self) -> dict[str, Any]:
        """저장소 전송 형식 (camelCase)"""
        return {
            WIRE_NAMES[f.name]: list(getattr(self, f.name))
            if f.name in _TUPLE_FIELDS
            else getattr(self, f.name)
            for f in fields(self)
        }


_TUPLE_FIELDS = {"timeframes", "images"}
_ENUM_FIELDS: dict[str, dict[str, str]] = {
    "result": RESULT_VALUES,
    "order": ORDER_VALUES,
    "respect": RESPECT_VALUES,
    "session": SESSION_VALUES,
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


# 필드명 ↔ 저장소 키
WIRE_NAMES: dict[str, str] = {f.name: _camel(f.name) for f in fields(LedgerRecord)}
FIELD_NAMES: dict[str, str] = {wire: name for name, wire in WIRE_NAMES.items()}
RECORD_FIELDS: frozenset[str] = frozenset(WIRE_NAMES)


@dataclass(frozen=True)
class Account:
    """저널 계좌

    Attributes:
        id: 계좌 ID
        name: 계좌 이름
        currency: 사용자용 통화 코드
        initial: 초기 잔고
        description: 설명
    """

    id: str = ""
    name: str = ""
    currency: str = Defaults.CURRENCY
    initial: Decimal = Decimal("0")
    description: str = ""
    created_at: str = ""
    updated_at: str = ""


@dataclass(frozen=True)
class NamedEntity:
    """이름만 가진 참조 엔티티 (마켓, 전략)"""

    id: str = ""
    name: str = ""
    created_at: str = ""
    updated_at: str = ""


# -------------------------------------------------------------------------
# 관대한 변환 (coerce)
# -------------------------------------------------------------------------

def as_mapping(value: Any) -> Mapping[str, Any]:
    """dict가 아니면 빈 매핑"""
    return value if isinstance(value, Mapping) else {}


def as_text(value: Any) -> str:
    """None → "", 나머지는 str()"""
    if value is None:
        return ""
    return str(value)


def coerce_choice(value: Any, allowed: Mapping[str, str]) -> str:
    """허용 값이면 정규 값, 아니면 빈 문자열"""
    if isinstance(value, str):
        return allowed.get(value, "")
    return ""


def coerce_strings(value: Any, limit: int | None = None) -> tuple[str, ...]:
    """문자열 목록 변환 (빈 항목 제거)"""
    if not isinstance(value, (list, tuple)):
        return ()
    items = tuple(s for s in (as_text(v).strip() for v in value) if s)
    return items[:limit] if limit is not None else items


def _coerce_field(name: str, value: Any) -> Any:
    if name in _ENUM_FIELDS:
        return coerce_choice(value, _ENUM_FIELDS[name])
    if name == "images":
        return coerce_strings(value, Defaults.MAX_IMAGES)
    if name == "timeframes":
        return coerce_strings(value)
    return as_text(value)


def coerce_record(raw: Any) -> LedgerRecord:
    """저장소 응답 항목 → LedgerRecord

    어떤 입력에도 예외를 던지지 않음.
    """
    data = as_mapping(raw)
    values: dict[str, Any] = {}
    for name, wire in WIRE_NAMES.items():
        value = data.get(wire)
        if name == "id" and value is None:
            value = data.get("_id")
        values[name] = _coerce_field(name, value)

    # 대표 이미지만 있는 구버전 응답
    if not values["images"]:
        single = as_text(data.get("imageUrl") or data.get("imageDataUrl")).strip()
        if single:
            values["images"] = (single,)

    return LedgerRecord(**values)


def coerce_account(raw: Any) -> Account:
    """저장소 응답 항목 → Account"""
    data = as_mapping(raw)
    initial = parse_decimal(data.get("initial"))
    return Account(
        id=as_text(data.get("id") or data.get("_id") or data.get("accountId")),
        name=as_text(data.get("name") or data.get("accountName")).strip(),
        currency=from_server_currency(data.get("currency")),
        initial=initial if initial is not None else Decimal("0"),
        description=as_text(data.get("description")),
        created_at=as_text(data.get("createdAt")),
        updated_at=as_text(data.get("updatedAt")),
    )


def coerce_entity(raw: Any) -> NamedEntity:
    """저장소 응답 항목 → NamedEntity"""
    data = as_mapping(raw)
    return NamedEntity(
        id=as_text(data.get("id") or data.get("_id")),
        name=as_text(data.get("name")).strip(),
        created_at=as_text(data.get("createdAt")),
        updated_at=as_text(data.get("updatedAt")),
    )


def apply_patch(record: LedgerRecord, patch: Mapping[str, Any]) -> LedgerRecord:
    """필드 단위 변경 적용 (새 레코드 반환)

    patch 키는 필드명(snake_case) 또는 저장소 키(camelCase) 모두 허용.
    알 수 없는 키와 id 변경은 무시.
    """
    changes: dict[str, Any] = {}
    for key, value in patch.items():
        name = key if key in RECORD_FIELDS else FIELD_NAMES.get(key)
        if name is None or name == "id":
            logger.debug("Ignoring unknown patch field", extra={"field": key})
            continue
        changes[name] = _coerce_field(name, value)
    return replace(record, **changes) if changes else record


def patch_to_wire(patch: Mapping[str, Any]) -> dict[str, Any]:
    """patch → 저장소 전송 형식 (camelCase, 튜플은 리스트)"""
    wire: dict[str, Any] = {}
    for key, value in patch.items():
        name = key if key in RECORD_FIELDS else FIELD_NAMES.get(key)
        if name is None:
            continue
        coerced = _coerce_field(name, value)
        wire[WIRE_NAMES[name]] = list(coerced) if name in _TUPLE_FIELDS else coerced
    return wire
