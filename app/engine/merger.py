"""
체크리스트 정의와 판정 로직 정의를 id로 합칩니다.

판정 로직 정의가 없는 항목도 항상 판정할 수 있도록
"조건부(conditional)" 기본 판정을 채워 넣습니다.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from app.models import (
    ChecklistItemDefinition,
    MergedItem,
    RuleEngineDefinition,
    RuleSet,
)

logger = logging.getLogger(__name__)


RuleIndex = Mapping[str, RuleEngineDefinition]


def build_rule_index(definitions: Iterable[RuleEngineDefinition]) -> RuleIndex:
    """
    id → 판정 로직 정의 인덱스를 만듭니다.

    정의를 불러올 때 한 번만 만들고, 읽기 전용 매핑으로 반환합니다.
    같은 id가 여러 번 나오면 처음 것을 사용합니다.
    """
    index: dict[str, RuleEngineDefinition] = {}
    for definition in definitions:
        if definition.id in index:
            logger.warning(f"[DefinitionMerger] 중복된 rule_engine id는 무시합니다: {definition.id}")
            continue
        index[definition.id] = definition
    return MappingProxyType(index)


def merge_definitions(
    item: ChecklistItemDefinition,
    rule_definition: Optional[RuleEngineDefinition],
) -> MergedItem:
    """
    체크리스트 항목과 판정 로직 정의를 합칩니다.

    Args:
        item: 체크리스트 항목 정의
        rule_definition: 같은 id의 판정 로직 정의 (없으면 None)

    Returns:
        판정에 필요한 정보를 모두 가진 MergedItem
    """
    if rule_definition is None:
        return MergedItem(item=item, rule_set=RuleSet(), has_rule_definition=False)

    return MergedItem(
        item=item,
        rule_set=rule_definition.rule_set,
        auto_rules=tuple(rule_definition.auto_rules),
        optional_inputs=frozenset(rule_definition.optional_inputs),
        has_rule_definition=True,
    )
