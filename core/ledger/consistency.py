"""
결과-금액 일관성 규칙

거래 결과(result)에 따라 결과 금액(result_money) 부호를 강제하고
결과 비율(result_pct)을 재계산.

신규 입력(journal.entry_draft)과 인라인 수정(build_quick_edit_patch) 모두
이 모듈의 같은 함수를 사용.
"""

from typing import Any

from core.constants import Defaults
from core.ledger.records import FIELD_NAMES, RECORD_FIELDS, RESULT_VALUES, LedgerRecord
from core.money.decimal_input import (
    filter_lot,
    is_zeroish,
    normalize_decimal,
    parse_decimal,
    round2,
)
from core.types import TradeResult


def normalize_result(result: Any) -> str:
    """결과 값 정규화 (구버전 별칭 포함, 허용 값이 아니면 "")"""
    if isinstance(result, TradeResult):
        return result.value
    if isinstance(result, str):
        return RESULT_VALUES.get(result, "")
    return ""


def money_editable(result: Any) -> bool:
    """금액 입력 가능 여부 (Breakeven이면 불가)"""
    return normalize_result(result) != TradeResult.BREAKEVEN.value


def apply_result_rule(result: Any, raw_money: str | None) -> str:
    """결과 상태에 맞게 금액 입력 정규화

    - Breakeven: 항상 "0"
    - Loss: 부호 제거 후 선행 마이너스 강제 (절댓값 0이면 "0", 빈 입력은 "")
    - Gain: 마이너스 전부 제거
    - 미선택: 정규화만 수행 (음수 허용)

    Args:
        result: 거래 결과
        raw_money: 사용자 입력

    Returns:
        저장할 금액 문자열
    """
    state = normalize_result(result)

    if state == TradeResult.BREAKEVEN.value:
        return "0"

    if state == TradeResult.LOSS.value:
        absolute = normalize_decimal(raw_money, Defaults.MONEY_DECIMALS, allow_negative=False)
        if not absolute:
            return ""
        if is_zeroish(absolute):
            return "0"
        return f"-{absolute}"

    if state == TradeResult.GAIN.value:
        return normalize_decimal(raw_money, Defaults.MONEY_DECIMALS, allow_negative=False)

    return normalize_decimal(raw_money, Defaults.MONEY_DECIMALS, allow_negative=True)


def derive_result_pct(invested: Any, result_money: Any, result: Any = "") -> str:
    """결과 비율 계산

    invested가 0이 아니고 두 값 모두 해석 가능하면 round2(money / invested * 100).
    그 외에는 빈 문자열, 단 Breakeven이면 "0.00".
    """
    inv = parse_decimal(invested)
    money = parse_decimal(result_money)

    if inv is not None and inv != 0 and money is not None:
        return round2(money / inv * 100)
    if normalize_result(result) == TradeResult.BREAKEVEN.value:
        return "0.00"
    return ""


def _field_name(field: str) -> str:
    if field in RECORD_FIELDS:
        return field
    name = FIELD_NAMES.get(field)
    if name is None:
        raise ValueError(f"Unknown record field: {field!r}")
    return name


def build_quick_edit_patch(record: LedgerRecord, field: str, value: Any) -> dict[str, Any]:
    """인라인 단일 필드 수정 → 일관성 있는 patch

    파생 필드(result_money 부호, result_pct)를 함께 계산해 반환.
    patch 키는 필드명(snake_case).

    Args:
        record: 현재 레코드
        field: 수정할 필드 (snake_case 또는 camelCase)
        value: 입력 값

    Returns:
        적용할 patch

    Raises:
        ValueError: 알 수 없는 필드 또는 id 수정 시도
    """
    name = _field_name(field)
    if name == "id":
        raise ValueError("Record id cannot be edited")

    if name == "result":
        result = normalize_result(value)
        patch: dict[str, Any] = {"result": result}
        money = record.result_money.strip()
        if result == TradeResult.BREAKEVEN.value or (money and result):
            money = apply_result_rule(result, money)
            patch["result_money"] = money
        patch["result_pct"] = derive_result_pct(record.invested, money, result)
        return patch

    if name == "result_money":
        money = apply_result_rule(record.result, "" if value is None else str(value))
        return {
            "result_money": money,
            "result_pct": derive_result_pct(record.invested, money, record.result),
        }

    if name == "invested":
        invested = normalize_decimal(
            "" if value is None else str(value), Defaults.MONEY_DECIMALS, allow_negative=False
        )
        return {
            "invested": invested,
            "result_pct": derive_result_pct(invested, record.result_money, record.result),
        }

    if name == "lot":
        return {"lot": filter_lot("" if value is None else str(value))}

    return {name: value}
