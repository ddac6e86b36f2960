"""Data models for the building-code self-check system."""

from .status import JudgeStatus, normalize_status, STATUS_ALIASES, STATUS_PRIORITY
from .values import to_number, is_missing_value, as_text
from .context import Context, merge_values, CONTEXT_VALUE_KEYS
from .checklist import InputDescriptor, AppliesTo, ChecklistItemDefinition
from .rule_engine import (
    DEFAULT_REVIEW_MESSAGE,
    Condition,
    MissingCondition,
    PresentCondition,
    InCondition,
    EqCondition,
    ComparisonCondition,
    MalformedCondition,
    parse_condition,
    AutoRule,
    RuleSet,
    RuleEngineDefinition,
)
from .judgment import (
    MatchResult,
    MergedItem,
    MissingInput,
    JudgedItem,
    StatusCounts,
    Summary,
)
from .law import LawDoc, LawLookup
from .zoning import ZoningRule, UseEntry, UseCheckResult, ZoningMatch
from .calc import AreaCalcResult
from .geo import GeoPoint, GeocodeResult, ReverseResult, ZoningLookupResult
from .request import JudgeRequest
from .error import ErrorResponse

__all__ = [
    # Status
    "JudgeStatus",
    "normalize_status",
    "STATUS_ALIASES",
    "STATUS_PRIORITY",
    # Value helpers
    "to_number",
    "is_missing_value",
    "as_text",
    # Context
    "Context",
    "merge_values",
    "CONTEXT_VALUE_KEYS",
    # Checklist definitions
    "InputDescriptor",
    "AppliesTo",
    "ChecklistItemDefinition",
    # Rule engine definitions
    "DEFAULT_REVIEW_MESSAGE",
    "Condition",
    "MissingCondition",
    "PresentCondition",
    "InCondition",
    "EqCondition",
    "ComparisonCondition",
    "MalformedCondition",
    "parse_condition",
    "AutoRule",
    "RuleSet",
    "RuleEngineDefinition",
    # Judgment
    "MatchResult",
    "MergedItem",
    "MissingInput",
    "JudgedItem",
    "StatusCounts",
    "Summary",
    # Laws
    "LawDoc",
    "LawLookup",
    # Zoning & uses
    "ZoningRule",
    "UseEntry",
    "UseCheckResult",
    "ZoningMatch",
    # Area calc
    "AreaCalcResult",
    # Geo
    "GeoPoint",
    "GeocodeResult",
    "ReverseResult",
    "ZoningLookupResult",
    # Requests
    "JudgeRequest",
    # Errors
    "ErrorResponse",
]
