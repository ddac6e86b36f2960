"""용도지역 기준(base_rules.json)과 용도 가능 여부 데이터 모델입니다."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .status import JudgeStatus


class ZoningRule(BaseModel):
    """
    용도지역 하나의 기준입니다.

    bcr_max(건폐율 상한, %), far_max(용적률 상한, %)가 없으면 None입니다.
    uses는 용도 코드 → 판정 문자열(allow/conditional/deny...) 사전입니다.
    """

    model_config = ConfigDict(extra="allow")

    zoning: str
    bcr_max: Optional[float] = None
    far_max: Optional[float] = None
    uses: dict[str, str] = Field(default_factory=dict)
    source: Literal["base_rules", "fallback"] = "base_rules"


class UseEntry(BaseModel):
    """건축물 용도 카탈로그 항목."""

    code: str
    label: str = ""


class UseCheckResult(BaseModel):
    """용도지역 안에서 특정 용도가 가능한지에 대한 간이 판정입니다."""

    zoning: str
    use: str
    status: JudgeStatus
    message: str
    source: str


class ZoningMatch(BaseModel):
    """외부(GIS) 용도지역 명칭을 알려진 용도지역명에 대응시킨 결과입니다."""

    matched: bool = False
    zoning: str = ""
    raw_name: str = ""
    normalized: str = ""
    candidates: list[str] = Field(default_factory=list)
