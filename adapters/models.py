"""
어댑터 공통 데이터 모델

저장소 쓰기 응답을 표준화한 모델.
읽기 응답은 core.ledger.records의 LedgerRecord / Account / NamedEntity로 변환.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CreatedRef:
    """생성 응답

    Attributes:
        id: 서버가 부여한 ID (항상 비어 있지 않음)
        updated_at: 서버 수정 시각 (없으면 빈 문자열)
    """

    id: str
    updated_at: str = ""
