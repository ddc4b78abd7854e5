"""
신규 엔트리 입력 상태

입력 폼의 필드 상태와 결과-금액 일관성 규칙 적용.
인라인 수정(build_quick_edit_patch)과 같은 규칙 함수를 사용.
"""

import re
from dataclasses import fields, replace
from typing import Any

from core.constants import Defaults
from core.domain.state_machines import ResultStateMachine
from core.ledger.consistency import apply_result_rule, derive_result_pct, normalize_result
from core.ledger.records import LedgerRecord, apply_patch
from core.money.decimal_input import filter_lot, normalize_decimal
from core.types import TradeResult
from core.utils.timezone import today_utc, utc_iso

# 결과 금액 입력 안내 메시지
HINT_BREAKEVEN = "Breakeven selected: amount fixed at 0."
HINT_LOSS_EMPTY = "Loss: enter an amount (it will be made negative automatically)."
HINT_LOSS_ZERO = "Loss: zero amount accepted (0)."
HINT_LOSS_FORCED = "Loss selected: amount forced negative."
HINT_GAIN_MINUS = "Gain: the '-' sign is not allowed and was removed."

_MINUS = re.compile(r"-")

# 생성 요청에서 제외하는 필드 (서버가 부여)
_SERVER_FIELDS = {"id", "updated_at"}


class EntryDraft:
    """신규 엔트리 입력 상태

    Args:
        initial: 초기 값 (복제 / 재입력용)

    사용 예시:
    ```python
    draft = EntryDraft()
    draft.set_result("Loss")
    draft.set_result_money("12.5")   # → "-12.5"
    draft.set_invested("100")        # result_pct → "-12.50"

    if draft.is_valid:
        await editor.create(draft.to_partial())
    ```
    """

    def __init__(self, initial: LedgerRecord | None = None):
        record = initial or LedgerRecord()
        self._record = replace(
            record,
            date=record.date or today_utc(),
            created_at=record.created_at or utc_iso(),
            images=record.images[: Defaults.MAX_IMAGES],
        )
        self._result = ResultStateMachine(self._record.result)
        self.money_hint = ""

    @property
    def record(self) -> LedgerRecord:
        return self._record

    @property
    def money_editable(self) -> bool:
        return self._result.money_editable

    @property
    def is_valid(self) -> bool:
        """저장 가능 여부 (날짜 필수)"""
        return bool(self._record.date.strip())

    def _update(self, **changes: Any) -> None:
        self._record = replace(self._record, **changes)

    def _rederive_pct(self) -> None:
        self._update(
            result_pct=derive_result_pct(
                self._record.invested, self._record.result_money, self._record.result
            )
        )

    # -------------------------------------------------------------------------
    # 결과 / 금액
    # -------------------------------------------------------------------------

    def set_result(self, result: str | TradeResult) -> None:
        """결과 선택 (현재 금액에 새 규칙 재적용)"""
        state = self._result.select(normalize_result(result))
        self._update(result=state)

        if state == TradeResult.BREAKEVEN.value:
            self._update(result_money="0")
            self.money_hint = HINT_BREAKEVEN
        elif self._record.result_money:
            self.set_result_money(self._record.result_money)
            return
        else:
            self.money_hint = ""

        self._rederive_pct()

    def set_result_money(self, raw: str) -> None:
        """결과 금액 입력"""
        state = self._result.state
        money = apply_result_rule(state, raw)

        if state == TradeResult.BREAKEVEN.value:
            self.money_hint = HINT_BREAKEVEN
        elif state == TradeResult.LOSS.value:
            if not money:
                self.money_hint = HINT_LOSS_EMPTY
            elif money == "0":
                self.money_hint = HINT_LOSS_ZERO
            else:
                self.money_hint = HINT_LOSS_FORCED
        elif state == TradeResult.GAIN.value and _MINUS.search(raw or ""):
            self.money_hint = HINT_GAIN_MINUS
        else:
            self.money_hint = ""

        self._update(result_money=money)
        self._rederive_pct()

    def set_invested(self, raw: str) -> None:
        self._update(invested=normalize_decimal(raw, Defaults.MONEY_DECIMALS, allow_negative=False))
        self._rederive_pct()

    def set_lot(self, raw: str) -> None:
        self._update(lot=filter_lot(raw))

    # -------------------------------------------------------------------------
    # 기타 필드
    # -------------------------------------------------------------------------

    def set_field(self, name: str, value: Any) -> None:
        """일반 필드 입력 (범주형 값은 허용 값으로 보정)

        Raises:
            ValueError: 결과 / 금액 / 비율 필드 (전용 setter 사용)
        """
        if name in ("result", "result_money", "result_pct", "invested", "lot"):
            raise ValueError(f"Use the dedicated setter for {name!r}")
        self._record = apply_patch(self._record, {name: value})

    def add_images(self, urls: list[str]) -> int:
        """이미지 추가 (최대 5개)

        Returns:
            실제 추가된 수
        """
        current = list(self._record.images)
        room = max(0, Defaults.MAX_IMAGES - len(current))
        added = [u.strip() for u in urls if u and u.strip()][:room]
        self._update(images=tuple(current + added))
        return len(added)

    def remove_image(self, index: int) -> None:
        images = list(self._record.images)
        if 0 <= index < len(images):
            del images[index]
            self._update(images=tuple(images))

    def to_partial(self) -> dict[str, Any]:
        """생성 요청용 필드 (서버 부여 필드 제외)"""
        return {
            f.name: getattr(self._record, f.name)
            for f in fields(self._record)
            if f.name not in _SERVER_FIELDS
        }
