"""
자동 규칙(auto rule)의 일치 여부 판단과 최우선 규칙 선택.

충돌 해소는 오직 "우선순위 내림차순 정렬 후 첫 번째 일치" 하나뿐입니다.
우선순위가 같으면 작성된 순서를 유지합니다(안정 정렬).
"""

from typing import Any, Iterable, Mapping, Optional

from app.models import AutoRule, MatchResult, normalize_status

from .conditions import evaluate_condition


def rule_matches(rule: AutoRule, values: Mapping[str, Any]) -> bool:
    """
    규칙의 조건 충족 여부를 판단합니다.

    우선 적용 순서:
    1. when이 있으면 그 조건 하나
    2. when_all이 비어 있지 않으면 모두 참이어야 함
    3. when_any가 비어 있지 않으면 하나라도 참이면 됨
    4. 조건이 없는 규칙은 일치하지 않음 (기본값 역할을 하지 않음)
    """
    if rule.when is not None:
        return evaluate_condition(rule.when, values)
    if rule.when_all:
        results = [evaluate_condition(c, values) for c in rule.when_all]
        return all(results)
    if rule.when_any:
        return any(evaluate_condition(c, values) for c in rule.when_any)
    return False


def sort_by_priority(rules: Iterable[AutoRule]) -> list[AutoRule]:
    """우선순위 내림차순으로 정렬합니다. sorted()는 안정 정렬입니다."""
    return sorted(rules, key=lambda r: r.priority, reverse=True)


def select_first_match(
    rules: Iterable[AutoRule],
    values: Mapping[str, Any],
) -> Optional[MatchResult]:
    """
    우선순위가 가장 높은 일치 규칙을 찾습니다.

    Args:
        rules: 항목의 auto_rules
        values: 판정에 쓰일 값 집합

    Returns:
        일치한 규칙의 판정 내용. 규칙이 없거나 하나도 맞지 않으면 None.
    """
    for rule in sort_by_priority(rules):
        if not rule_matches(rule, values):
            continue
        return MatchResult(
            result=normalize_status(rule.result),
            message=rule.message,
            rule_id=rule.id,
            priority=rule.priority,
        )
    return None
