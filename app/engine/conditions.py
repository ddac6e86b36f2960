"""
원자 조건(condition) 하나를 값 집합에 대해 평가합니다.

연산자:
┌──────────────┬──────────────────────────────────────────────────────┐
│ missing      │ 값이 없음 / 유한하지 않은 숫자 / 공백뿐인 문자열      │
│ present      │ missing의 부정                                        │
│ in, not_in   │ 문자열로 바꾼 값이 목록(문자열화)에 있는지            │
│ eq, neq      │ 둘 다 숫자면 숫자 비교, 아니면 공백 제거 문자열 비교  │
│ lt lte gt gte│ 둘 다 숫자일 때만 비교, 아니면 거짓                   │
└──────────────┴──────────────────────────────────────────────────────┘

잘못 작성된 조건은 거짓이며, 이 모듈은 어떤 경우에도 예외를 던지지 않습니다.
"""

import operator
from typing import Any, Callable, Mapping

from app.models import (
    ComparisonCondition,
    Condition,
    EqCondition,
    InCondition,
    MissingCondition,
    PresentCondition,
    as_text,
    is_missing_value,
    parse_condition,
    to_number,
)


_COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    "lt": operator.lt,
    "lte": operator.le,
    "gt": operator.gt,
    "gte": operator.ge,
}


def evaluate_condition(condition: Any, values: Mapping[str, Any]) -> bool:
    """
    조건 하나를 평가합니다.

    Args:
        condition: Condition 모델 또는 원본 JSON 조건 사전
        values: 입력 키 → 값 매핑

    Returns:
        조건 충족 여부 (잘못된 조건은 False)
    """
    values = values or {}
    cond: Condition = parse_condition(condition)
    if isinstance(cond, (MissingCondition, PresentCondition)):
        missing = is_missing_value(values.get(cond.key))
        return missing if isinstance(cond, MissingCondition) else not missing

    if isinstance(cond, InCondition):
        actual = as_text(values.get(cond.key))
        hit = actual in (as_text(member) for member in cond.value)
        return hit if cond.op == "in" else not hit

    if isinstance(cond, EqCondition):
        equal = _loosely_equal(values.get(cond.key), cond.value)
        return equal if cond.op == "eq" else not equal

    if isinstance(cond, ComparisonCondition):
        actual = to_number(values.get(cond.key))
        target = to_number(cond.value)
        if actual is None or target is None:
            return False
        return _COMPARATORS[cond.op](actual, target)

    return False


def _loosely_equal(actual: Any, target: Any) -> bool:
    actual_num = to_number(actual)
    target_num = to_number(target)
    if actual_num is not None and target_num is not None:
        return actual_num == target_num
    return as_text(actual).strip() == as_text(target).strip()
