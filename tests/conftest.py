"""공유 pytest fixture 모음."""

import json

import pytest

from app.models import (
    ChecklistItemDefinition,
    RuleEngineDefinition,
)


def write_json(path, document):
    """테스트용 JSON 파일을 씁니다."""
    path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def road_item():
    """입력 두 개를 가진 접도 체크리스트 항목 fixture."""
    return ChecklistItemDefinition.model_validate({
        "id": "road_access",
        "category": "대지",
        "title": "대지와 도로의 관계",
        "inputs": [
            {"key": "road_width_m", "label": "전면도로 폭(m)", "type": "number"},
            {"key": "frontage_m", "label": "도로에 접한 길이(m)", "type": "number"},
        ],
        "refs": ["BA_44"],
    })


@pytest.fixture
def road_rule():
    """접도 항목의 판정 로직 fixture."""
    return RuleEngineDefinition.model_validate({
        "id": "road_access",
        "rule_set": {"default_result": "conditional", "default_message": "도로 조건 확인"},
        "auto_rules": [
            {
                "id": "road_need_input",
                "when_any": [
                    {"key": "road_width_m", "op": "missing"},
                    {"key": "frontage_m", "op": "missing"},
                ],
                "result": "need_input",
                "message": "도로 폭과 접도 길이를 입력",
                "priority": 100,
            },
            {
                "id": "road_too_narrow",
                "when": {"key": "road_width_m", "op": "lt", "value": 4},
                "result": "deny",
                "message": "도로 폭 4m 미만",
                "priority": 50,
            },
            {
                "id": "road_ok",
                "when_all": [
                    {"key": "road_width_m", "op": "gte", "value": 4},
                    {"key": "frontage_m", "op": "gte", "value": 2},
                ],
                "result": "allow",
                "message": "접도 요건 통과",
                "priority": 10,
            },
        ],
    })


@pytest.fixture
def checklist_document():
    """checklists.json 봉투 형태의 문서 fixture."""
    return {
        "version": "test",
        "default_conditional": [
            {
                "id": "road_access",
                "title": "접도",
                "inputs": [{"key": "road_width_m", "label": "도로 폭"}],
                "refs": ["BA_44"],
            },
            {
                "id": "daylight_setback",
                "title": "일조",
                "inputs": [{"key": "north_setback_m"}],
                "refs": ["BA_61", "NOT_REGISTERED"],
                "applies_to": {"zoning_in": ["제1종일반주거지역"]},
            },
            {
                "id": "manual_only",
                "title": "수동 확인",
                "inputs": ["관할 지자체에 문의"],
            },
        ],
    }


@pytest.fixture
def rule_engine_document():
    """rule_engine.json 봉투 형태의 문서 fixture."""
    return {
        "default_conditional": [
            {
                "id": "road_access",
                "rule_set": {"default_result": "conditional"},
                "auto_rules": [
                    {
                        "id": "road_need_input",
                        "when": {"key": "road_width_m", "op": "missing"},
                        "result": "need_input",
                        "message": "도로 폭 입력",
                        "priority": 10,
                    },
                    {
                        "id": "road_ok",
                        "when": {"key": "road_width_m", "op": "gte", "value": 4},
                        "result": "allow",
                        "message": "통과",
                        "priority": 5,
                    },
                ],
            },
            {
                "id": "daylight_setback",
                "rule_set": {"default_result": "need_input"},
            },
        ],
    }


@pytest.fixture
def laws_document():
    """laws.json 문서 fixture."""
    return {
        "BA_44": {"title": "대지와 도로의 관계", "law_name": "건축법", "article": "제44조"},
        "BA_61": {"title": "일조 등의 확보", "law_name": "건축법", "article": "제61조", "tags": "높이"},
    }


@pytest.fixture
def rules_dir(tmp_path, checklist_document, rule_engine_document, laws_document):
    """임시 룰 데이터 디렉토리 fixture (base_rules.json은 없음)."""
    write_json(tmp_path / "checklists.json", checklist_document)
    write_json(tmp_path / "rule_engine.json", rule_engine_document)
    write_json(tmp_path / "laws.json", laws_document)
    return tmp_path


@pytest.fixture
def definition_store(rules_dir):
    """임시 디렉토리 기반 DefinitionStore fixture."""
    from app.services.definition_store import DefinitionStore
    return DefinitionStore(rules_dir=rules_dir)


@pytest.fixture
def law_store(rules_dir):
    """임시 디렉토리 기반 LawStore fixture."""
    from app.services.law_store import LawStore
    return LawStore(rules_dir / "laws.json")
