"""
판정 엔진의 중간 결과와 최종 출력 모델입니다.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .checklist import ChecklistItemDefinition
from .rule_engine import AutoRule, RuleSet
from .status import JudgeStatus


class MatchResult(BaseModel):
    """자동 규칙 중 처음으로 일치한 규칙의 판정 내용입니다."""

    model_config = ConfigDict(frozen=True)

    result: JudgeStatus
    message: str = ""
    rule_id: Optional[str] = None
    priority: float = 0.0


class MergedItem(BaseModel):
    """체크리스트 정의와 판정 로직 정의를 id로 합친 항목입니다."""

    model_config = ConfigDict(frozen=True)

    item: ChecklistItemDefinition
    rule_set: RuleSet
    auto_rules: tuple[AutoRule, ...] = ()
    optional_inputs: frozenset[str] = frozenset()
    has_rule_definition: bool = False

    @property
    def id(self) -> str:
        return self.item.id


class MissingInput(BaseModel):
    """누락된 필수 입력 항목."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str


class JudgedItem(BaseModel):
    """체크리스트 항목 하나의 최종 판정 결과입니다."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: JudgeStatus
    message: str = ""
    missing_inputs: list[MissingInput] = Field(default_factory=list)
    matched_rule_id: Optional[str] = None
    priority: Optional[float] = None


class StatusCounts(BaseModel):
    """상태별 항목 수."""

    allow: int = 0
    conditional: int = 0
    deny: int = 0
    need_input: int = 0
    unknown: int = 0


class Summary(BaseModel):
    """판정 결과 목록을 종합한 요약입니다. 항목 목록에서만 파생됩니다."""

    status: JudgeStatus
    total: int
    counts: StatusCounts
    missing_inputs: list[str] = Field(default_factory=list, description="누락 입력 키(라벨 아님)")
