"""
룰 데이터 저장소 서비스입니다.
데이터베이스 대신 JSON 파일(비개발자가 직접 수정)을 읽어 정의 묶음을 만듭니다.

관리하는 데이터:
1. 체크리스트 항목 정의 (checklists.json)
2. 판정 로직 정의 (rule_engine.json)
3. 용도지역별 기준 (base_rules.json)

파일 파싱 결과는 DefinitionCache에 보관되며, 파일이 수정되면 자동으로 다시 읽습니다.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Type, TypeVar

import aiofiles
from pydantic import BaseModel, ValidationError

from app.config import get_settings
from app.engine import DefinitionSet
from app.exceptions import DefinitionLoadError
from app.models import ChecklistItemDefinition, RuleEngineDefinition
from app.services.cache import DefinitionCache, get_definition_cache

logger = logging.getLogger(__name__)


T = TypeVar("T", bound=BaseModel)


# 배열을 감싸는 봉투(envelope) 키. 앞에 있는 키가 우선입니다.
CHECKLIST_ENVELOPE_KEYS = ("default_conditional", "items", "checklists")
RULE_ENGINE_ENVELOPE_KEYS = ("default_conditional",)


async def read_json_file(path: Path) -> Optional[Any]:
    """
    JSON 파일을 읽습니다.

    Returns:
        파싱된 JSON. 파일이 없으면 None.

    Raises:
        DefinitionLoadError: JSON 문법 오류 또는 읽기 실패
    """
    if not path.exists():
        logger.warning(f"[DefinitionStore] 파일이 없습니다: {path}")
        return None

    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            content = await f.read()
    except OSError as e:
        raise DefinitionLoadError(
            f"룰 데이터 파일을 읽지 못했습니다: {path.name}",
            details={"path": str(path), "error": str(e)},
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise DefinitionLoadError(
            f"룰 데이터 JSON 형식이 올바르지 않습니다: {path.name}",
            details={"path": str(path), "line": e.lineno, "column": e.colno, "error": e.msg},
        ) from e


def extract_entries(document: Any, envelope_keys: Sequence[str], source: str = "") -> list:
    """
    문서에서 항목 배열을 꺼냅니다.

    배열 자체이거나, 봉투 키 중 처음으로 배열을 가진 키의 값입니다.
    둘 다 아니면 빈 목록입니다.
    """
    if document is None:
        return []
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        for key in envelope_keys:
            if isinstance(document.get(key), list):
                return document[key]
    logger.warning(f"[DefinitionStore] 항목 배열을 찾지 못했습니다: {source} (키: {', '.join(envelope_keys)})")
    return []


def parse_entries(entries: Sequence[Any], model_class: Type[T], source: str = "") -> tuple[list[T], list[str]]:
    """
    항목을 하나씩 검증합니다.

    잘못된 항목은 건너뛰고 사유를 모읍니다.
    한 항목의 오류가 전체 체크리스트를 막지 않아야 합니다.

    Returns:
        (검증된 항목 목록, 건너뛴 항목 사유 목록)
    """
    parsed: list[T] = []
    skipped: list[str] = []
    for index, raw in enumerate(entries):
        if not isinstance(raw, dict):
            reason = f"{source}[{index}]: 객체가 아닙니다"
            skipped.append(reason)
            logger.warning(f"[DefinitionStore] 항목을 건너뜁니다. {reason}")
            continue
        try:
            parsed.append(model_class.model_validate(raw))
        except ValidationError as e:
            errors = "; ".join(err["msg"] for err in e.errors())
            reason = f"{source}[{index}] (id={raw.get('id')!r}): {errors}"
            skipped.append(reason)
            logger.warning(f"[DefinitionStore] 항목을 건너뜁니다. {reason}")
    return parsed, skipped


class DefinitionStore:
    """JSON 파일 기반 룰 데이터 저장소 클래스입니다."""

    def __init__(
        self,
        rules_dir: Path,
        checklists_file: str = "checklists.json",
        rule_engine_file: str = "rule_engine.json",
        base_rules_file: str = "base_rules.json",
        cache: Optional[DefinitionCache] = None,
    ):
        self.rules_dir = Path(rules_dir)
        self.checklists_path = self.rules_dir / checklists_file
        self.rule_engine_path = self.rules_dir / rule_engine_file
        self.base_rules_path = self.rules_dir / base_rules_file
        self.cache = cache or DefinitionCache()

        # 마지막으로 만든 정의 묶음과 그 재료
        self._definition_set: Optional[DefinitionSet] = None
        self._built_from: tuple[Any, Any] = (None, None)

    # ==================== 체크리스트 / 판정 로직 ====================

    async def load_checklist_definitions(self) -> tuple[ChecklistItemDefinition, ...]:
        """체크리스트 항목 정의를 불러옵니다."""
        return await self.cache.get_or_load(self.checklists_path, self._parse_checklists)

    async def load_rule_engine_definitions(self) -> tuple[RuleEngineDefinition, ...]:
        """판정 로직 정의를 불러옵니다."""
        return await self.cache.get_or_load(self.rule_engine_path, self._parse_rule_engine)

    async def load_definitions(self) -> DefinitionSet:
        """
        두 정의 파일로 불변 정의 묶음을 만듭니다.

        두 파일이 모두 바뀌지 않았으면 이전 묶음을 그대로 재사용합니다.
        """
        items = await self.load_checklist_definitions()
        rules = await self.load_rule_engine_definitions()

        built_items, built_rules = self._built_from
        if self._definition_set is None or built_items is not items or built_rules is not rules:
            self._definition_set = DefinitionSet.build(items, rules)
            self._built_from = (items, rules)
            logger.info(
                f"[DefinitionStore] 정의 로딩 완료: 체크리스트 {len(items)}개, 판정 로직 {len(rules)}개"
            )
        return self._definition_set

    # ==================== 용도지역 기준 ====================

    async def load_base_rules(self) -> Optional[Any]:
        """용도지역 기준 문서를 원본 그대로 불러옵니다. 파일이 없으면 None."""
        return await self.cache.get_or_load(self.base_rules_path, read_json_file)

    # ==================== 내부 도우미 함수들 ====================

    async def _parse_checklists(self, path: Path) -> tuple[ChecklistItemDefinition, ...]:
        document = await read_json_file(path)
        entries = extract_entries(document, CHECKLIST_ENVELOPE_KEYS, path.name)
        items, _ = parse_entries(entries, ChecklistItemDefinition, path.name)
        return tuple(items)

    async def _parse_rule_engine(self, path: Path) -> tuple[RuleEngineDefinition, ...]:
        document = await read_json_file(path)
        entries = extract_entries(document, RULE_ENGINE_ENVELOPE_KEYS, path.name)
        rules, _ = parse_entries(entries, RuleEngineDefinition, path.name)
        for rule_def in rules:
            for rule_id, cond in rule_def.malformed_conditions():
                logger.warning(
                    f"[DefinitionStore] 잘못된 조건(항상 거짓): item={rule_def.id}, rule={rule_id}, 사유={cond.reason}"
                )
        return tuple(rules)


# 싱글톤 인스턴스 (프로그램 전체에서 공유)
_definition_store: Optional[DefinitionStore] = None


def get_definition_store() -> DefinitionStore:
    """DefinitionStore 인스턴스를 반환합니다."""
    global _definition_store
    if _definition_store is None:
        settings = get_settings()
        _definition_store = DefinitionStore(
            rules_dir=settings.rules_dir,
            checklists_file=settings.checklists_file,
            rule_engine_file=settings.rule_engine_file,
            base_rules_file=settings.base_rules_file,
            cache=get_definition_cache(),
        )
    return _definition_store
