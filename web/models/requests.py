"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

from typing import Any

from pydantic import BaseModel, Field


class QuickEditRequest(BaseModel):
    """인라인 단일 필드 수정 요청"""

    field: str = Field(..., min_length=1, description="필드명 (snake_case 또는 camelCase)")
    value: Any = Field(default=None, description="입력 값")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"field": "result", "value": "Loss"},
                {"field": "resultMoney", "value": "12,50"},
            ]
        }
    }
