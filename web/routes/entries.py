"""
엔트리 API 라우트

인라인 단일 필드 수정
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from journal.runtime import JournalRuntime
from web.dependencies import get_runtime
from web.models.requests import QuickEditRequest
from web.models.responses import EntryEditResponse
from web.services.entry_service import EntryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/entries", tags=["Entries"])


@router.patch("/{record_id}", response_model=EntryEditResponse)
async def quick_edit_entry(
    record_id: str,
    request: QuickEditRequest,
    runtime: JournalRuntime = Depends(get_runtime),
):
    """단일 필드 수정

    로컬에 즉시 반영하고 원격 저장 결과를 함께 반환.
    원격 저장 실패 시에도 200 (outcome = failure, sync_state = DIRTY).
    """
    service = EntryService(runtime)
    try:
        return await service.quick_edit(record_id, request.field, request.value)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Entry not found: {record_id}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
