"""
검토 대상 건축물의 컨텍스트(용도지역, 용도, 지자체, 규모)와
판정에 쓰일 값 집합(value set) 병합 규칙입니다.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .values import is_missing_value, to_number


# 컨텍스트가 값 집합에 합류할 때 사용하는 잘 알려진 키
CONTEXT_VALUE_KEYS = ("zoning", "use", "jurisdiction", "floors", "height_m", "gross_area_m2")


class Context(BaseModel):
    """
    한 번의 판정에 쓰이는 읽기 전용 컨텍스트입니다.

    숫자 항목은 유한한 숫자로 해석되지 않으면 None(미상)으로 저장됩니다.
    """

    model_config = ConfigDict(frozen=True)

    zoning: str = Field(default="", description="용도지역 (예: 제1종일반주거지역)")
    use: str = Field(default="", description="건축물 용도 코드 (예: RES_HOUSE)")
    jurisdiction: str = Field(default="", description="관할 지자체")
    floors: Optional[float] = Field(default=None, description="층수")
    height_m: Optional[float] = Field(default=None, description="높이(m)")
    gross_area_m2: Optional[float] = Field(default=None, description="연면적(㎡)")

    @field_validator("zoning", "use", "jurisdiction", mode="before")
    @classmethod
    def _strip_text(cls, v: Any) -> str:
        return str(v or "").strip()

    @field_validator("floors", "height_m", "gross_area_m2", mode="before")
    @classmethod
    def _parse_metric(cls, v: Any) -> Optional[float]:
        return to_number(v)

    def overlay(self, values: Mapping[str, Any]) -> "Context":
        """값 집합의 잘 알려진 키로 덮어쓴 새 컨텍스트를 반환합니다."""
        update = {
            key: values[key]
            for key in CONTEXT_VALUE_KEYS
            if key in values and values[key] is not None
        }
        return Context.model_validate({**self.model_dump(), **update})


def merge_values(context: Context, values: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """
    컨텍스트와 사용자 입력값을 하나의 값 집합으로 병합합니다.

    컨텍스트의 알려진 항목을 먼저 넣고, 사용자 입력값으로 덮어씁니다.
    사용자 입력값이 None이 아니면 항상 사용자 입력값이 우선합니다.
    두 입력 모두 변경하지 않고 새 사전을 반환합니다.
    """
    merged: dict[str, Any] = {}
    for key in CONTEXT_VALUE_KEYS:
        value = getattr(context, key)
        if not is_missing_value(value):
            merged[key] = value

    for key, value in (values or {}).items():
        if value is None:
            continue
        merged[str(key)] = value
    return merged
