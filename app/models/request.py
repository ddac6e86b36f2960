"""API 요청 본문 모델."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class JudgeRequest(BaseModel):
    """
    판정 요청.

    context는 Context로, values는 값 집합으로 해석됩니다.
    객체가 아닌 값이 오면 빈 객체로 취급합니다.
    """

    context: dict[str, Any] = Field(default_factory=dict, description="zoning, use, jurisdiction, floors...")
    values: dict[str, Any] = Field(default_factory=dict, description="사용자 입력값 (입력 key → 값)")

    @field_validator("context", "values", mode="before")
    @classmethod
    def _object_or_empty(cls, v: Any) -> dict:
        return v if isinstance(v, dict) else {}
