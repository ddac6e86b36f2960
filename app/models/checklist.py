"""
체크리스트 항목 정의(checklists.json) 데이터 모델입니다.

체크리스트 항목은 화면에 표시되는 질문/주제이며, 판정 로직은
rule_engine.json의 같은 id 항목이 담당합니다.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .values import to_number


class InputDescriptor(BaseModel):
    """사용자가 입력해야 하는 항목 하나의 정의입니다."""

    model_config = ConfigDict(frozen=True, extra="allow")

    key: str = ""
    label: str = ""
    type: str = "text"
    placeholder: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("label"):
            return {**data, "label": data.get("key")}
        return data

    @field_validator("key", mode="before")
    @classmethod
    def _strip_key(cls, v: Any) -> str:
        return str(v or "").strip()

    @field_validator("label", "type", "placeholder", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> str:
        return "" if v is None else str(v)


class AppliesTo(BaseModel):
    """
    체크리스트 항목의 적용 조건입니다.

    - *_in: 허용 값 목록. 값이 있으면 컨텍스트 값이 목록에 있어야 합니다.
    - min_*: 숫자 하한. 컨텍스트 값을 모르면 항목을 숨기지 않습니다.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    zoning_in: Optional[list[str]] = None
    use_in: Optional[list[str]] = None
    jurisdiction_in: Optional[list[str]] = None
    min_floors: Optional[float] = None
    min_height_m: Optional[float] = None
    min_gross_area_m2: Optional[float] = None

    @field_validator("zoning_in", "use_in", "jurisdiction_in", mode="before")
    @classmethod
    def _string_members(cls, v: Any) -> Optional[list[str]]:
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            return None
        return [str(x).strip() for x in v]

    @field_validator("min_floors", "min_height_m", "min_gross_area_m2", mode="before")
    @classmethod
    def _threshold(cls, v: Any) -> Optional[float]:
        # 숫자로 해석되지 않는 하한은 없는 것으로 취급
        return to_number(v)


class ChecklistItemDefinition(BaseModel):
    """
    checklists.json의 항목 하나입니다.

    category, logic_level 등 엔진이 해석하지 않는 메타데이터와
    작성자가 추가한 임의의 키는 그대로 보존되어 응답에 다시 실립니다.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    title: str = ""
    why: str = ""
    inputs: list[Union[InputDescriptor, str]] = Field(default_factory=list)
    refs: list[str] = Field(default_factory=list)
    applies_to: Optional[AppliesTo] = None
    category: Optional[str] = None
    logic_level: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _require_id(cls, v: Any) -> str:
        text = str(v or "").strip()
        if not text:
            raise ValueError("checklist item id is required")
        return text

    @field_validator("inputs", mode="before")
    @classmethod
    def _list_or_empty(cls, v: Any) -> list:
        return list(v) if isinstance(v, (list, tuple)) else []

    @field_validator("refs", mode="before")
    @classmethod
    def _clean_refs(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)):
            return []
        codes = (str(code).strip() for code in v if code is not None)
        return [code for code in codes if code]

    @property
    def structured_inputs(self) -> list[InputDescriptor]:
        """사용자가 직접 입력하는 구조화된 입력 항목만 반환합니다."""
        return [inp for inp in self.inputs if isinstance(inp, InputDescriptor)]
