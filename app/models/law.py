"""법령 참조(laws.json) 데이터 모델입니다."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LawDoc(BaseModel):
    """법령 조문 한 건. 작성자가 추가한 키는 그대로 보존합니다."""

    model_config = ConfigDict(extra="allow")

    code: str
    title: str = ""
    law_name: str = ""
    article: str = ""
    summary: str = ""
    url: str = ""
    tags: list[str] = Field(default_factory=list)

    @field_validator("code", "title", "law_name", "article", "summary", "url", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        tags = (str(t).strip() for t in v if t is not None)
        return [t for t in tags if t]


class LawLookup(BaseModel):
    """코드 목록 조회 결과. 등록되지 않은 코드는 missing에 모입니다."""

    found: dict[str, LawDoc] = Field(default_factory=dict)
    missing: list[str] = Field(default_factory=list)
