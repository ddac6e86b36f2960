"""
체크리스트 항목 하나의 최종 판정.

처리 순서:
1. 정의 병합 (merger)
2. 누락 입력 계산 (missing_inputs)
3. 자동 규칙 선택 (rule_matcher)
4. 일치 규칙이 있으면 그 결과, 없으면 rule_set 기본 판정 (문구가 비면 기본 문구)
5. need_input인데 실제 누락 입력이 없으면 기본 문구와 함께 conditional로 완화

어떤 입력에 대해서도 예외 없이 완전한 JudgedItem을 반환합니다.
"""

import logging
from typing import Any, Mapping, Optional

from app.models import (
    DEFAULT_REVIEW_MESSAGE,
    ChecklistItemDefinition,
    JudgedItem,
    JudgeStatus,
    MergedItem,
    RuleEngineDefinition,
    normalize_status,
)

from .merger import merge_definitions
from .missing_inputs import compute_missing_inputs
from .rule_matcher import select_first_match

logger = logging.getLogger(__name__)


def default_message_for(merged: MergedItem, fallback_message: str = DEFAULT_REVIEW_MESSAGE) -> str:
    """
    항목의 기본 안내 문구.

    작성된 rule_set.default_message를 우선 사용하고,
    작성되지 않아 공통 문구가 들어 있으면 설정된 공통 문구로 바꿉니다.
    """
    message = merged.rule_set.default_message
    if not message or message == DEFAULT_REVIEW_MESSAGE:
        return fallback_message
    return message


def judge_merged(
    merged: MergedItem,
    values: Mapping[str, Any],
    fallback_message: str = DEFAULT_REVIEW_MESSAGE,
) -> JudgedItem:
    """이미 병합된 항목을 판정합니다."""
    missing_inputs = compute_missing_inputs(merged, values)
    hit = select_first_match(merged.auto_rules, values)
    default_message = default_message_for(merged, fallback_message)

    if hit is not None:
        status = normalize_status(hit.result)
        message = hit.message or default_message
    else:
        status = normalize_status(merged.rule_set.default_result)
        message = default_message

    if status == JudgeStatus.NEED_INPUT and not missing_inputs:
        # 작성 데이터 불일치: 가리킬 입력 없이 need_input을 보여주지 않는다
        logger.debug(f"[ItemJudge] {merged.id}: 누락 입력 없는 need_input → conditional")
        status = JudgeStatus.CONDITIONAL
        message = default_message

    return JudgedItem(
        id=merged.id,
        status=status,
        message=message,
        missing_inputs=missing_inputs,
        matched_rule_id=hit.rule_id if hit else None,
        priority=hit.priority if hit else None,
    )


def judge_item(
    item: ChecklistItemDefinition,
    rule_definition: Optional[RuleEngineDefinition],
    values: Mapping[str, Any],
    fallback_message: str = DEFAULT_REVIEW_MESSAGE,
) -> JudgedItem:
    """
    체크리스트 항목 하나를 판정합니다.

    Args:
        item: 체크리스트 항목 정의
        rule_definition: 같은 id의 판정 로직 정의 (없으면 None)
        values: 판정에 쓰일 값 집합
        fallback_message: 기본 안내 문구가 작성되지 않은 항목에 쓸 공통 문구

    Returns:
        JudgedItem
    """
    merged = merge_definitions(item, rule_definition)
    return judge_merged(merged, values, fallback_message)
