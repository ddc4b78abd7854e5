"""
저널 저장소 응답 파서

응답 형태가 조금씩 달라도(봉투 {ok, data}, items / data.items / 배열) 도메인 모델로 변환.
누락 필드는 기본값. 예외는 {ok: false} 봉투와 ID 없는 생성 응답에서만 발생.
"""

from typing import Any

from adapters.journal_api.errors import JournalApiError
from adapters.models import CreatedRef
from core.ledger.records import (
    Account,
    LedgerRecord,
    NamedEntity,
    as_mapping,
    as_text,
    coerce_account,
    coerce_entity,
    coerce_record,
)


def unwrap(raw: Any, status: int = 200) -> Any:
    """{ok, data} 봉투 해제

    Raises:
        JournalApiError: ok가 true가 아닌 봉투
    """
    if isinstance(raw, dict) and "ok" in raw:
        if raw.get("ok") is True:
            data = raw.get("data")
            return data if data is not None else {}
        message = as_text(raw.get("error") or raw.get("message")) or "API error"
        raise JournalApiError(status=status if status >= 400 else 400, message=message)
    return raw


def dig(obj: Any, *path: str) -> Any:
    """중첩 dict 경로 조회 (없으면 None)"""
    cur = obj
    for key in path:
        if not isinstance(cur, dict):
            return None
        cur = cur.get(key)
    return cur


def _first(obj: Any, *paths: tuple[str, ...]) -> Any:
    for path in paths:
        value = dig(obj, *path)
        if value is not None:
            return value
    return None


def pick_items(data: Any) -> list[Any]:
    """목록 추출: items → data.items → 배열 그대로 → 빈 목록"""
    items = _first(data, ("items",), ("data", "items"))
    if items is None and isinstance(data, list):
        items = data
    return items if isinstance(items, list) else []


def _pick_doc(data: Any, key: str) -> Any:
    doc = _first(data, (key,), ("data", key))
    if doc is None and isinstance(data, dict) and (data.get("id") or data.get("_id")):
        doc = data
    return doc


# -------------------------------------------------------------------------
# 레코드
# -------------------------------------------------------------------------

def parse_record_list(data: Any) -> list[LedgerRecord]:
    return [coerce_record(item) for item in pick_items(data)]


def parse_record(data: Any) -> LedgerRecord | None:
    """단건 레코드 (entry / data.entry / 문서 자체)"""
    doc = _pick_doc(data, "entry")
    return coerce_record(doc) if doc is not None else None


# -------------------------------------------------------------------------
# 계좌 / 마켓 / 전략
# -------------------------------------------------------------------------

def parse_account_list(data: Any) -> list[Account]:
    return [coerce_account(item) for item in pick_items(data)]


def parse_account(data: Any) -> Account | None:
    doc = _pick_doc(data, "item")
    return coerce_account(doc) if doc is not None else None


def parse_entity_list(data: Any) -> list[NamedEntity]:
    return [coerce_entity(item) for item in pick_items(data)]


# -------------------------------------------------------------------------
# 쓰기 응답
# -------------------------------------------------------------------------

_ID_PATHS = (("id",), ("data", "id"), ("entry", "id"), ("data", "entry", "id"))
_UPDATED_PATHS = (
    ("updatedAt",),
    ("data", "updatedAt"),
    ("entry", "updatedAt"),
    ("data", "entry", "updatedAt"),
)


def parse_created(data: Any) -> CreatedRef:
    """생성 응답 → CreatedRef

    Raises:
        JournalApiError: 응답에 ID가 없음 (저장 실패로 취급)
    """
    entity_id = as_text(_first(data, *_ID_PATHS))
    if not entity_id:
        raise JournalApiError(status=0, message="Create response has no id")
    return CreatedRef(id=entity_id, updated_at=as_text(_first(data, *_UPDATED_PATHS)))


def parse_updated(data: Any) -> str:
    """수정 응답 → updatedAt (없으면 빈 문자열)"""
    return as_text(_first(data, *_UPDATED_PATHS))


def parse_deleted(data: Any) -> bool:
    return bool(_first(data, ("deleted",), ("data", "deleted")))


def parse_updated_count(data: Any) -> int:
    """일괄 수정 응답 → 수정 건수"""
    value = as_mapping(data).get("updated")
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
