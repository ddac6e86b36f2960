"""Unit tests for zoning standards, use checks, and zoning-name resolution.

All functions under test take an already-loaded base_rules document, so
these tests need no file system access.
"""

import pytest

from app.models import JudgeStatus
from app.services.zoning import (
    DEFAULT_BCR_MAX,
    DEFAULT_FAR_MAX,
    USES_FALLBACK,
    ZONING_FALLBACK,
    ZONING_NOT_FOUND_MESSAGE,
    apply_zoning,
    check_use,
    list_zonings,
    normalize_zoning_key,
    resolve_zoning_name,
    use_message,
    uses_catalog,
    zoning_rules,
)


BASE_RULES = {
    "rules": [
        {
            "zoning": "제1종일반주거지역",
            "bcr_max": 60,
            "far_max": 200,
            "uses": {"RES_HOUSE": "allow", "NEIGHBOR_2": "warn", "OFFICE": "deny"},
        },
        {"zoning": "일반상업지역", "bcr": "80", "far": 1300},
    ],
    "uses_catalog": [
        {"code": "RES_HOUSE", "label": "단독주택"},
        {"code": "", "label": "ignored"},
        "text",
    ],
}


class TestZoningRules:
    def test_current_shape(self):
        rules = zoning_rules(BASE_RULES)
        assert [r.zoning for r in rules] == ["제1종일반주거지역", "일반상업지역"]

    def test_legacy_bcr_far_keys(self):
        commercial = zoning_rules(BASE_RULES)[1]
        assert commercial.bcr_max == 80.0
        assert commercial.far_max == 1300.0

    def test_legacy_zoning_rules_key(self):
        rules = zoning_rules({"zoning_rules": [{"zoning": "준공업지역", "bcr_max": 70}]})
        assert rules[0].zoning == "준공업지역"

    def test_list_shape_accepts_strings(self):
        rules = zoning_rules({"list": ["녹지지역", {"zoning": "준공업지역"}, "", 7]})
        assert [r.zoning for r in rules] == ["녹지지역", "준공업지역"]
        assert rules[0].bcr_max is None

    def test_mapping_shape_skips_reserved_keys(self):
        doc = {
            "제2종일반주거지역": {"bcr_max": 60, "far_max": 250},
            "uses_catalog": {"not": "a zoning"},
            "version": "2026",
        }
        rules = zoning_rules(doc)
        assert [r.zoning for r in rules] == ["제2종일반주거지역"]

    @pytest.mark.parametrize("doc", [None, [], "text"])
    def test_unknown_shape_is_empty(self, doc):
        assert zoning_rules(doc) == []


class TestListAndApply:
    def test_list_from_document(self):
        names, source = list_zonings(BASE_RULES)
        assert names == ["제1종일반주거지역", "일반상업지역"]
        assert source == "base_rules"

    def test_list_fallback(self):
        names, source = list_zonings(None)
        assert names == ZONING_FALLBACK
        assert source == "fallback"

    def test_apply_known_zoning(self):
        rule = apply_zoning(BASE_RULES, " 제1종일반주거지역 ")
        assert rule.bcr_max == 60
        assert rule.far_max == 200
        assert rule.source == "base_rules"

    def test_apply_unknown_zoning_uses_fallback(self):
        rule = apply_zoning(BASE_RULES, "자연녹지지역")
        assert rule.zoning == "자연녹지지역"
        assert rule.bcr_max == DEFAULT_BCR_MAX
        assert rule.far_max == DEFAULT_FAR_MAX
        assert rule.source == "fallback"


class TestUses:
    def test_catalog_from_document(self):
        entries, source = uses_catalog(BASE_RULES)
        assert [e.code for e in entries] == ["RES_HOUSE"]
        assert source == "base_rules.uses_catalog"

    def test_catalog_fallback(self):
        entries, source = uses_catalog({"rules": []})
        assert entries == USES_FALLBACK
        assert source == "fallback"

    @pytest.mark.parametrize("use,expected", [
        ("RES_HOUSE", JudgeStatus.ALLOW),
        ("NEIGHBOR_2", JudgeStatus.CONDITIONAL),
        ("OFFICE", JudgeStatus.DENY),
        ("FACTORY", JudgeStatus.UNKNOWN),
    ])
    def test_check_use(self, use, expected):
        result = check_use(BASE_RULES, "제1종일반주거지역", use)
        assert result.status == expected
        assert result.message == use_message(expected)
        assert result.source == "base_rules.rules[].uses"

    def test_check_use_unknown_zoning(self):
        result = check_use(BASE_RULES, "자연녹지지역", "RES_HOUSE")
        assert result.status == JudgeStatus.UNKNOWN
        assert result.message == ZONING_NOT_FOUND_MESSAGE
        assert result.source == "base_rules_not_found"


class TestResolveZoningName:
    KNOWN = ["제1종일반주거지역", "제2종일반주거지역", "일반상업지역", "준공업지역"]

    def test_normalize_key(self):
        assert normalize_zoning_key(" 제1종 일반주거지역(용도지역) ") == "제1종일반주거지역"
        assert normalize_zoning_key("A·B") == "ab"

    def test_exact_match(self):
        match = resolve_zoning_name("일반상업지역", self.KNOWN)
        assert match.matched is True
        assert match.zoning == "일반상업지역"

    def test_normalized_match(self):
        match = resolve_zoning_name("제2종 일반주거지역", self.KNOWN)
        assert match.matched is True
        assert match.zoning == "제2종일반주거지역"

    def test_unique_containment_match(self):
        match = resolve_zoning_name("준공업", self.KNOWN)
        assert match.matched is True
        assert match.zoning == "준공업지역"
        assert match.candidates == ["준공업지역"]

    def test_ambiguous_containment_not_matched(self):
        match = resolve_zoning_name("일반주거지역", self.KNOWN)
        assert match.matched is False
        assert match.candidates == ["제1종일반주거지역", "제2종일반주거지역"]

    def test_no_candidates(self):
        match = resolve_zoning_name("자연녹지지역", self.KNOWN)
        assert match.matched is False
        assert match.candidates == []
        assert match.raw_name == "자연녹지지역"

    def test_blank_name(self):
        assert resolve_zoning_name("  ", self.KNOWN).matched is False

    def test_parenthesis_only_name_does_not_match_everything(self):
        match = resolve_zoning_name("(미지정)", self.KNOWN)
        assert match.matched is False
        assert match.candidates == []
