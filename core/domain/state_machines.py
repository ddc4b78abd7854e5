"""
State Machines

거래 결과(result) 필드와 레코드 동기화 상태의 상태 전이 관리.
"""

import logging
from enum import Enum

from core.types import SyncState, TradeResult

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name
        self._history: list[tuple[str, str]] = []

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인

        Args:
            to_state: 목표 상태

        Returns:
            전이 가능 여부
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state!r} to {target!r}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target
        self._history.append((old_state, target))

        logger.debug(f"{self._name}: {old_state!r} → {target!r}")

        return target

    @property
    def history(self) -> list[tuple[str, str]]:
        """상태 전이 이력"""
        return self._history.copy()


_RESULT_STATES = [r.value for r in TradeResult]


class ResultStateMachine(StateMachine):
    """거래 결과 상태 머신

    Gain / Loss / Breakeven / 미선택("") 사이의 모든 전이 허용.
    상태별로 금액 입력에 부호 제약이 걸림 (core.ledger.consistency 참고):
    - Breakeven: 금액 "0" 고정, 편집 불가
    - Loss: 0이 아니면 음수 강제
    - Gain: 마이너스 제거
    - 미선택: 제약 없음
    """

    TRANSITIONS: dict[str, list[str]] = {
        state: [s for s in _RESULT_STATES if s != state] for state in _RESULT_STATES
    }

    def __init__(self, initial_state: str | TradeResult = TradeResult.UNSET):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="ResultStateMachine",
        )

    def select(self, result: str | TradeResult) -> str:
        """결과 선택 (같은 상태 재선택은 전이 없이 유지)"""
        target = result.value if isinstance(result, Enum) else result
        if target == self._state:
            return self._state
        return self.transition(target)

    @property
    def money_editable(self) -> bool:
        """금액 입력 가능 여부"""
        return self._state != TradeResult.BREAKEVEN.value


class RecordSyncStateMachine(StateMachine):
    """레코드 서버 동기화 상태 머신

    전이 규칙:
    - SYNCED → PENDING: 낙관적 변경 적용 후 원격 저장 시작
    - PENDING → PENDING: 다른 저장이 아직 진행 중
    - PENDING → SYNCED: 진행 중 저장 없음, 미반영 필드 없음
    - PENDING → DIRTY: 원격 저장 실패 (로컬에만 반영)
    - DIRTY → PENDING: 재저장 시작
    """

    TRANSITIONS: dict[str, list[str]] = {
        "SYNCED": ["PENDING"],
        "PENDING": ["PENDING", "SYNCED", "DIRTY"],
        "DIRTY": ["PENDING"],
    }

    def __init__(self, initial_state: str | SyncState = SyncState.SYNCED):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="RecordSyncStateMachine",
        )

    @property
    def is_dirty(self) -> bool:
        """로컬 전용 변경 존재 여부"""
        return self._state == SyncState.DIRTY.value
