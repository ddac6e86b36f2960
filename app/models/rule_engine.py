"""
판정 로직 정의(rule_engine.json) 데이터 모델입니다.

조건(condition)은 op 필드로 구분되는 닫힌 유니언입니다.
원본 JSON의 조건 객체는 로딩 시점에 parse_condition()으로 한 번만 검증되며,
잘못 작성된 조건은 MalformedCondition이 되어 항상 거짓으로 평가됩니다.
이렇게 하면 비개발자가 작성한 규칙 하나가 잘못되어도
나머지 체크리스트 판정은 계속 동작합니다.
"""

import logging
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from .values import to_number

logger = logging.getLogger(__name__)


DEFAULT_REVIEW_MESSAGE = "⚠️ 추가 검토가 필요합니다."


# =============================================================
# Conditions
# =============================================================

class _ConditionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str

    @field_validator("key", mode="before")
    @classmethod
    def _require_key(cls, v: Any) -> str:
        text = str(v or "").strip()
        if not text:
            raise ValueError("condition key is required")
        return text


class MissingCondition(_ConditionBase):
    """값이 비어 있으면 참."""
    op: Literal["missing"] = "missing"


class PresentCondition(_ConditionBase):
    """값이 있으면 참."""
    op: Literal["present"] = "present"


class InCondition(_ConditionBase):
    """값이 목록에 포함되면(in) / 포함되지 않으면(not_in) 참."""
    op: Literal["in", "not_in"]
    value: list[Any] = Field(default_factory=list)

    @field_validator("value", mode="before")
    @classmethod
    def _list_or_empty(cls, v: Any) -> list:
        return list(v) if isinstance(v, (list, tuple)) else []


class EqCondition(_ConditionBase):
    """숫자 또는 문자열 일치 비교."""
    op: Literal["eq", "neq"]
    value: Any = None


class ComparisonCondition(_ConditionBase):
    """숫자 대소 비교. 어느 한쪽이라도 숫자가 아니면 거짓."""
    op: Literal["lt", "lte", "gt", "gte"]
    value: Any = None


class MalformedCondition(BaseModel):
    """잘못 작성된 조건. 평가 결과는 항상 거짓입니다."""

    model_config = ConfigDict(frozen=True)

    op: Literal["malformed"] = "malformed"
    raw: Any = None
    reason: str = ""


Condition = Annotated[
    Union[
        MissingCondition,
        PresentCondition,
        InCondition,
        EqCondition,
        ComparisonCondition,
        MalformedCondition,
    ],
    Field(discriminator="op"),
]

_condition_adapter: TypeAdapter = TypeAdapter(Condition)

_CONDITION_TYPES = (
    MissingCondition,
    PresentCondition,
    InCondition,
    EqCondition,
    ComparisonCondition,
    MalformedCondition,
)


def parse_condition(raw: Any) -> Condition:
    """
    원본 JSON 조건 객체를 Condition으로 변환합니다.

    op는 앞뒤 공백을 제거하고 소문자로 맞춥니다. key/op가 없거나
    알 수 없는 op이면 예외 대신 MalformedCondition을 반환합니다.
    """
    if isinstance(raw, _CONDITION_TYPES):
        return raw
    if not isinstance(raw, dict):
        return MalformedCondition(raw=raw, reason="condition must be an object")

    op = str(raw.get("op") or "").strip().lower()
    if not op or op == "malformed":
        return MalformedCondition(raw=raw, reason="condition op is required")

    try:
        return _condition_adapter.validate_python({**raw, "op": op})
    except ValidationError as e:
        reason = "; ".join(err["msg"] for err in e.errors())
        return MalformedCondition(raw=raw, reason=reason)


def _parse_condition_list(v: Any) -> list:
    if not isinstance(v, (list, tuple)):
        return []
    return [parse_condition(c) for c in v]


# =============================================================
# Rules
# =============================================================

class AutoRule(BaseModel):
    """
    우선순위가 있는 자동 판정 규칙입니다.

    when / when_all / when_any 중 먼저 설정된 형태 하나만 사용됩니다.
    result는 작성된 문자열 그대로 보관하고, 판정 시점에 정규화합니다.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: Optional[str] = None
    when: Optional[Condition] = None
    when_all: list[Condition] = Field(default_factory=list)
    when_any: list[Condition] = Field(default_factory=list)
    result: str = ""
    message: str = ""
    priority: float = 0.0

    @field_validator("id", mode="before")
    @classmethod
    def _optional_id(cls, v: Any) -> Optional[str]:
        text = str(v).strip() if v is not None else ""
        return text or None

    @field_validator("when", mode="before")
    @classmethod
    def _parse_when(cls, v: Any) -> Any:
        # 빈 값("", None)은 조건 없음
        if v is None or v == "":
            return None
        return parse_condition(v)

    @field_validator("when_all", "when_any", mode="before")
    @classmethod
    def _parse_many(cls, v: Any) -> list:
        return _parse_condition_list(v)

    @field_validator("result", mode="before")
    @classmethod
    def _result_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("message", mode="before")
    @classmethod
    def _message_text(cls, v: Any) -> str:
        return str(v or "").strip()

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, v: Any) -> float:
        number = to_number(v)
        return number if number is not None else 0.0

    def conditions(self) -> list[Condition]:
        """이 규칙이 가진 모든 조건을 반환합니다."""
        found = [self.when] if self.when is not None else []
        return found + list(self.when_all) + list(self.when_any)


class RuleSet(BaseModel):
    """자동 규칙이 하나도 맞지 않을 때 사용하는 기본 판정입니다."""

    model_config = ConfigDict(frozen=True, extra="allow")

    default_result: str = "conditional"
    default_message: str = DEFAULT_REVIEW_MESSAGE

    @field_validator("default_result", mode="before")
    @classmethod
    def _result(cls, v: Any) -> str:
        return str(v or "").strip() or "conditional"

    @field_validator("default_message", mode="before")
    @classmethod
    def _message(cls, v: Any) -> str:
        return str(v or "").strip() or DEFAULT_REVIEW_MESSAGE


class RuleEngineDefinition(BaseModel):
    """rule_engine.json의 항목 하나입니다. 체크리스트 항목과 id로 1:1 연결됩니다."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    rule_set: RuleSet = Field(default_factory=RuleSet)
    auto_rules: list[AutoRule] = Field(default_factory=list)
    optional_inputs: list[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _require_id(cls, v: Any) -> str:
        text = str(v or "").strip()
        if not text:
            raise ValueError("rule engine item id is required")
        return text

    @field_validator("rule_set", mode="before")
    @classmethod
    def _rule_set(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, RuleSet)) else {}

    @field_validator("auto_rules", mode="before")
    @classmethod
    def _auto_rules(cls, v: Any) -> list:
        if not isinstance(v, (list, tuple)):
            return []
        rules = []
        for raw in v:
            if isinstance(raw, (dict, AutoRule)):
                rules.append(raw)
            else:
                logger.warning(f"[RuleEngine] 객체가 아닌 auto_rule을 건너뜁니다: {raw!r}")
        return rules

    @field_validator("optional_inputs", mode="before")
    @classmethod
    def _optional_inputs(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)):
            return []
        keys = (str(k).strip() for k in v if k)
        return [k for k in keys if k]

    def malformed_conditions(self) -> list[tuple[Optional[str], MalformedCondition]]:
        """(규칙 id, 잘못된 조건) 목록을 반환합니다."""
        found = []
        for rule in self.auto_rules:
            for cond in rule.conditions():
                if isinstance(cond, MalformedCondition):
                    found.append((rule.id, cond))
        return found
