"""
체크리스트 판정 파이프라인.

컨텍스트와 값 집합이 함께 들어오면:
1. 적용 필터로 항목을 추리고
2. 항목마다 정의를 병합해 판정한 뒤
3. 전체 결과를 요약합니다.

정의 묶음(DefinitionSet)은 호출자(정의 저장소)가 불러와 넘겨 주며,
이 모듈은 전역 상태를 읽지 않고 입력을 변경하지 않습니다.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from app.models import (
    DEFAULT_REVIEW_MESSAGE,
    ChecklistItemDefinition,
    Context,
    JudgedItem,
    MergedItem,
    RuleEngineDefinition,
    Summary,
    merge_values,
)

from .applicability import applies
from .judge import judge_merged
from .merger import RuleIndex, build_rule_index, merge_definitions
from .summarizer import summarize


@dataclass(frozen=True)
class DefinitionSet:
    """한 번의 로딩 주기에 만들어지는 불변 정의 묶음."""

    checklist_items: tuple[ChecklistItemDefinition, ...]
    rule_index: RuleIndex

    @classmethod
    def build(
        cls,
        checklist_items: Iterable[ChecklistItemDefinition],
        rule_definitions: Iterable[RuleEngineDefinition],
    ) -> "DefinitionSet":
        return cls(
            checklist_items=tuple(checklist_items),
            rule_index=build_rule_index(rule_definitions),
        )

    def merged(self, item: ChecklistItemDefinition) -> MergedItem:
        return merge_definitions(item, self.rule_index.get(item.id))


@dataclass(frozen=True)
class EnrichedItem:
    """화면 표시용: 병합된 정의와 서버 사전 판정."""

    merged: MergedItem
    judged: JudgedItem


@dataclass(frozen=True)
class ChecklistEvaluation:
    """판정 명령의 결과."""

    results: list[JudgedItem]
    summary: Summary
    items: tuple[ChecklistItemDefinition, ...]


def applicable_items(definitions: DefinitionSet, context: Context) -> list[ChecklistItemDefinition]:
    """컨텍스트에 적용되는 항목만 원래 순서대로 반환합니다."""
    return [item for item in definitions.checklist_items if applies(item, context)]


def enrich_checklist(
    definitions: DefinitionSet,
    context: Context,
    fallback_message: str = DEFAULT_REVIEW_MESSAGE,
) -> list[EnrichedItem]:
    """
    조회용: 적용 항목에 서버 사전 판정을 붙입니다.

    값 집합은 컨텍스트(규모 계산값 포함)만으로 만듭니다.
    """
    values = merge_values(context)
    enriched = []
    for item in applicable_items(definitions, context):
        merged = definitions.merged(item)
        enriched.append(EnrichedItem(merged=merged, judged=judge_merged(merged, values, fallback_message)))
    return enriched


def evaluate_checklist(
    definitions: DefinitionSet,
    context: Context,
    values: Optional[Mapping[str, Any]] = None,
    fallback_message: str = DEFAULT_REVIEW_MESSAGE,
) -> ChecklistEvaluation:
    """
    판정 명령: 사용자 입력값으로 적용 항목을 모두 판정하고 요약합니다.

    입력값은 작성된 그대로 조건에 넘기며, 숫자 비교는 조건 평가에서 해석합니다.
    적용 필터에는 사용자 입력으로 덮어쓴 컨텍스트를 사용합니다.
    """
    merged_values = merge_values(context, values)
    effective_context = context.overlay(merged_values)

    items = tuple(applicable_items(definitions, effective_context))
    results = [
        judge_merged(definitions.merged(item), merged_values, fallback_message)
        for item in items
    ]
    return ChecklistEvaluation(results=results, summary=summarize(results), items=items)


def collect_refs(items: Iterable[ChecklistItemDefinition]) -> list[str]:
    """항목들의 법령 참조 코드를 중복 없이 처음 나온 순서대로 모읍니다."""
    seen: dict[str, None] = {}
    for item in items:
        for code in item.refs:
            seen.setdefault(code, None)
    return list(seen)
