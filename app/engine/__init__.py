"""Checklist rule-evaluation engine (pure, synchronous)."""

from .conditions import evaluate_condition
from .rule_matcher import rule_matches, select_first_match, sort_by_priority
from .applicability import applies
from .merger import RuleIndex, build_rule_index, merge_definitions
from .missing_inputs import compute_missing_inputs
from .judge import judge_item, judge_merged
from .summarizer import summarize
from .pipeline import (
    DefinitionSet,
    EnrichedItem,
    ChecklistEvaluation,
    applicable_items,
    enrich_checklist,
    evaluate_checklist,
    collect_refs,
)

__all__ = [
    "evaluate_condition",
    "rule_matches",
    "select_first_match",
    "sort_by_priority",
    "applies",
    "RuleIndex",
    "build_rule_index",
    "merge_definitions",
    "compute_missing_inputs",
    "judge_item",
    "judge_merged",
    "summarize",
    "DefinitionSet",
    "EnrichedItem",
    "ChecklistEvaluation",
    "applicable_items",
    "enrich_checklist",
    "evaluate_checklist",
    "collect_refs",
]
