"""Unit tests for ChecklistService response assembly.

Uses the temporary rules directory from conftest so the response shape,
missing law references, and fallback message wiring can be checked in
isolation from the HTTP layer.
"""

import json

import pytest

from app.models import Context
from app.services.checklist_service import ChecklistService


@pytest.fixture
def service(definition_store, law_store):
    return ChecklistService(
        definition_store=definition_store,
        law_store=law_store,
        fallback_message="추가 검토 필요",
    )


class TestEnriched:
    async def test_shape_and_server_judge(self, service):
        result = await service.enriched(Context(zoning="제1종일반주거지역"))
        items = result["data"]["default_conditional"]

        assert [i["id"] for i in items] == ["road_access", "daylight_setback", "manual_only"]

        road = items[0]
        assert road["server_judge"] == {"result": "need_input", "message": "도로 폭 입력", "rule_id": "road_need_input"}
        assert road["missing_inputs"] == [{"key": "road_width_m", "label": "도로 폭"}]
        assert road["rule_set"]["default_result"] == "conditional"
        assert [r["id"] for r in road["auto_rules"]] == ["road_need_input", "road_ok"]
        assert road["optional_inputs"] == []
        assert road["refs"] == ["BA_44"]

    async def test_item_without_rule_definition_uses_fallback(self, service):
        result = await service.enriched(Context())
        manual = next(i for i in result["data"]["default_conditional"] if i["id"] == "manual_only")
        assert manual["server_judge"]["result"] == "conditional"
        assert manual["auto_rules"] == []
        assert manual["inputs"] == ["관할 지자체에 문의"]

    async def test_need_input_default_kept_when_input_missing(self, service):
        result = await service.enriched(Context(zoning="제1종일반주거지역"))
        daylight = next(i for i in result["data"]["default_conditional"] if i["id"] == "daylight_setback")
        assert daylight["server_judge"]["result"] == "need_input"
        assert daylight["missing_inputs"] == [{"key": "north_setback_m", "label": "north_setback_m"}]

    async def test_missing_refs_only_for_applicable_items(self, service):
        residential = await service.enriched(Context(zoning="제1종일반주거지역"))
        assert residential["meta"]["missing_refs"] == ["NOT_REGISTERED"]

        commercial = await service.enriched(Context(zoning="일반상업지역"))
        assert commercial["meta"]["missing_refs"] == []

    async def test_meta_context_and_values(self, service):
        result = await service.enriched(Context(zoning="일반상업지역", floors="3"))
        assert result["meta"]["context"]["floors"] == 3.0
        assert result["meta"]["values"] == {"zoning": "일반상업지역", "floors": 3.0}


class TestJudge:
    async def test_summary_and_results(self, service):
        result = await service.judge(Context(zoning="일반상업지역"), {"road_width_m": "5"})
        summary = result["data"]["summary"]
        results = result["data"]["results"]

        assert [r["id"] for r in results] == ["road_access", "manual_only"]
        assert results[0]["status"] == "allow"
        assert results[0]["matched_rule_id"] == "road_ok"
        assert results[1]["status"] == "conditional"
        assert results[1]["message"] == "추가 검토 필요"

        assert summary["status"] == "conditional"
        assert summary["total"] == 2
        assert summary["counts"] == {"allow": 1, "conditional": 1, "deny": 0, "need_input": 0, "unknown": 0}
        assert summary["missing_inputs"] == []

    async def test_fallback_message_used_for_downgrade(self, service):
        result = await service.judge(Context(zoning="제1종일반주거지역"), {"north_setback_m": 2, "road_width_m": 5})
        daylight = next(r for r in result["data"]["results"] if r["id"] == "daylight_setback")
        assert daylight["status"] == "conditional"
        assert daylight["message"] == "추가 검토 필요"

    async def test_summary_missing_inputs_are_keys(self, service):
        result = await service.judge(Context(zoning="제1종일반주거지역"), {})
        assert result["data"]["summary"]["missing_inputs"] == ["road_width_m", "north_setback_m"]
        assert result["meta"]["missing_refs"] == ["NOT_REGISTERED"]


class TestUnreadableLawFile:
    @pytest.fixture(params=[["not", "an", "object"], "{broken"])
    def broken_laws(self, request, rules_dir):
        content = request.param if isinstance(request.param, str) else json.dumps(request.param)
        (rules_dir / "laws.json").write_text(content, encoding="utf-8")

    async def test_judge_still_returns_summary(self, service, broken_laws):
        result = await service.judge(Context(zoning="제1종일반주거지역"), {})
        summary = result["data"]["summary"]

        assert summary["total"] == 3
        assert summary["missing_inputs"] == ["road_width_m", "north_setback_m"]
        assert result["meta"]["laws_loaded"] is False
        assert result["meta"]["missing_refs"] == ["BA_44", "BA_61", "NOT_REGISTERED"]

    async def test_enriched_still_returns_items(self, service, broken_laws):
        result = await service.enriched(Context(zoning="일반상업지역"))

        assert [i["id"] for i in result["data"]["default_conditional"]] == ["road_access", "manual_only"]
        assert result["meta"]["laws_loaded"] is False
        assert result["meta"]["missing_refs"] == ["BA_44"]

    async def test_readable_law_file_is_reported_loaded(self, service):
        result = await service.judge(Context(zoning="일반상업지역"), {})
        assert result["meta"]["laws_loaded"] is True
