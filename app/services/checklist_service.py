"""
체크리스트 조회/판정 서비스입니다.
정의 저장소, 법령 저장소, 판정 엔진을 엮어 API 응답 본문을 만듭니다.

두 가지 흐름:
1. 조회(enriched): 컨텍스트만으로 적용 항목과 서버 사전 판정을 보여줍니다.
2. 판정(judge): 사용자 입력값까지 합쳐 항목별 판정과 종합 요약을 돌려줍니다.
"""

import logging
from typing import Any, Mapping, Optional

from app.config import get_settings
from app.engine import (
    collect_refs,
    enrich_checklist,
    evaluate_checklist,
)
from app.engine.pipeline import EnrichedItem
from app.exceptions import DefinitionLoadError, LawStoreError
from app.models import Context, merge_values
from app.services.definition_store import DefinitionStore, get_definition_store
from app.services.law_store import LawStore, get_law_store

logger = logging.getLogger(__name__)


DEFINITION_SOURCE = "checklists.json + rule_engine.json"


def serialize_enriched_item(enriched: EnrichedItem) -> dict[str, Any]:
    """작성된 항목 그대로에 판정 로직과 서버 사전 판정을 덧붙입니다."""
    merged = enriched.merged
    judged = enriched.judged

    payload = merged.item.model_dump(mode="json", exclude_none=True)
    payload.update(
        rule_set=merged.rule_set.model_dump(mode="json"),
        auto_rules=[rule.model_dump(mode="json", exclude_none=True) for rule in merged.auto_rules],
        optional_inputs=sorted(merged.optional_inputs),
        server_judge={
            "result": judged.status.value,
            "message": judged.message,
            "rule_id": judged.matched_rule_id,
        },
        missing_inputs=[m.model_dump() for m in judged.missing_inputs],
    )
    return payload


class ChecklistService:
    """체크리스트 조회/판정 흐름을 관리하는 서비스입니다."""

    def __init__(
        self,
        definition_store: Optional[DefinitionStore] = None,
        law_store: Optional[LawStore] = None,
        fallback_message: Optional[str] = None,
    ):
        self.definition_store = definition_store or get_definition_store()
        self.law_store = law_store or get_law_store()
        self.fallback_message = fallback_message or get_settings().default_review_message

    async def _missing_refs(self, items) -> tuple[list[str], bool]:
        """
        laws.json에 없는 참조 코드를 찾습니다.

        법령 파일은 참조 안내용이므로 읽지 못해도 판정은 계속합니다.
        이때 모든 참조를 미등록으로 보고 두 번째 값으로 False를 돌려줍니다.

        Returns:
            (미등록 코드 목록, 법령 파일을 읽었는지 여부)
        """
        refs = collect_refs(items)
        try:
            lookup = await self.law_store.lookup_laws_by_codes(refs)
        except (LawStoreError, DefinitionLoadError) as e:
            logger.warning(f"[ChecklistService] 법령 파일을 읽지 못해 모든 refs를 미등록으로 봅니다: {e.message}")
            return refs, False
        if lookup.missing:
            logger.info(f"[ChecklistService] laws.json 미등록 refs: {', '.join(lookup.missing)}")
        return lookup.missing, True

    async def enriched(self, context: Context) -> dict[str, Any]:
        """
        조회 흐름.

        Returns:
            {"data": {"default_conditional": [...]}, "meta": {...}}
        """
        definitions = await self.definition_store.load_definitions()
        enriched = enrich_checklist(definitions, context, self.fallback_message)
        missing_refs, laws_loaded = await self._missing_refs(e.merged.item for e in enriched)

        return {
            "data": {"default_conditional": [serialize_enriched_item(e) for e in enriched]},
            "meta": {
                "context": context.model_dump(),
                "values": merge_values(context),
                "missing_refs": missing_refs,
                "laws_loaded": laws_loaded,
                "source": DEFINITION_SOURCE,
            },
        }

    async def judge(
        self,
        context: Context,
        values: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        판정 흐름.

        Returns:
            {"data": {"summary": {...}, "results": [...]}, "meta": {...}}
        """
        definitions = await self.definition_store.load_definitions()
        evaluation = evaluate_checklist(definitions, context, values, self.fallback_message)
        missing_refs, laws_loaded = await self._missing_refs(evaluation.items)

        logger.info(
            f"[ChecklistService] 판정 완료: {evaluation.summary.total}개 항목, "
            f"종합={evaluation.summary.status.value}"
        )
        return {
            "data": {
                "summary": evaluation.summary.model_dump(mode="json"),
                "results": [r.model_dump(mode="json") for r in evaluation.results],
            },
            "meta": {
                "context": context.model_dump(),
                "missing_refs": missing_refs,
                "laws_loaded": laws_loaded,
                "source": DEFINITION_SOURCE,
            },
        }


# 싱글톤 인스턴스
_checklist_service: Optional[ChecklistService] = None


def get_checklist_service() -> ChecklistService:
    """ChecklistService 인스턴스를 반환합니다."""
    global _checklist_service
    if _checklist_service is None:
        _checklist_service = ChecklistService()
    return _checklist_service
