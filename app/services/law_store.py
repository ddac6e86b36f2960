"""
법령 참조 저장소 서비스입니다.

laws.json은 법령 코드를 키로 하는 객체입니다:

    {
      "BA_44": {"title": "대지와 도로의 관계", "law_name": "건축법", "article": "제44조", ...},
      ...
    }

체크리스트 항목의 refs에 적힌 코드를 이 파일에서 찾아 화면에 보여줍니다.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from app.config import get_settings
from app.exceptions import LawStoreError
from app.models import LawDoc, LawLookup
from app.services.cache import DefinitionCache, get_definition_cache
from app.services.definition_store import read_json_file

logger = logging.getLogger(__name__)


# 전체 목록 조회 상한
DEFAULT_LIST_LIMIT = 500


def normalize_codes(codes: Iterable[Any]) -> list[str]:
    """코드 앞뒤 공백을 제거하고 빈 값과 중복을 뺍니다. 순서는 유지합니다."""
    seen: dict[str, None] = {}
    for code in codes:
        text = str(code or "").strip()
        if text:
            seen.setdefault(text, None)
    return list(seen)


def parse_codes_param(raw: Optional[str]) -> list[str]:
    """쉼표로 구분된 codes 쿼리 파라미터를 코드 목록으로 바꿉니다."""
    return normalize_codes((raw or "").split(","))


class LawStore:
    """JSON 파일 기반 법령 참조 저장소 클래스입니다."""

    def __init__(self, laws_path: Path, cache: Optional[DefinitionCache] = None):
        self.laws_path = Path(laws_path)
        self.cache = cache or DefinitionCache()

    async def load_laws(self) -> dict[str, LawDoc]:
        """코드 → 법령 문서 사전을 불러옵니다. 파일이 없으면 빈 사전입니다."""
        return await self.cache.get_or_load(self.laws_path, self._parse_laws)

    async def lookup_laws_by_codes(self, codes: Iterable[Any]) -> LawLookup:
        """
        여러 코드를 한 번에 조회합니다.

        Returns:
            found: 등록된 코드의 문서, missing: 등록되지 않은 코드 (요청 순서)
        """
        laws = await self.load_laws()
        lookup = LawLookup()
        for code in normalize_codes(codes):
            doc = laws.get(code)
            if doc is None:
                lookup.missing.append(code)
            else:
                lookup.found[code] = doc
        return lookup

    async def get_law(self, code: str) -> Optional[LawDoc]:
        """코드 하나를 조회합니다."""
        laws = await self.load_laws()
        return laws.get(str(code or "").strip())

    async def list_laws(self, limit: int = DEFAULT_LIST_LIMIT) -> tuple[dict[str, LawDoc], bool]:
        """
        등록된 법령을 최대 limit개까지 반환합니다.

        Returns:
            (코드 → 문서 사전, 상한에 걸려 잘렸는지 여부)
        """
        if limit <= 0:
            raise LawStoreError("조회 상한은 1 이상이어야 합니다.", details={"limit": limit})
        laws = await self.load_laws()
        codes = list(laws)[:limit]
        return {code: laws[code] for code in codes}, len(laws) > limit

    async def _parse_laws(self, path: Path) -> dict[str, LawDoc]:
        document = await read_json_file(path)
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise LawStoreError(
                f"법령 파일은 코드를 키로 하는 객체여야 합니다: {path.name}",
                details={"path": str(path), "type": type(document).__name__},
            )

        laws: dict[str, LawDoc] = {}
        for raw_code, raw_doc in document.items():
            code = str(raw_code or "").strip()
            if not code or not isinstance(raw_doc, dict):
                logger.warning(f"[LawStore] 잘못된 법령 항목을 건너뜁니다: {raw_code!r}")
                continue
            try:
                laws[code] = LawDoc.model_validate({**raw_doc, "code": raw_doc.get("code") or code})
            except ValidationError as e:
                logger.warning(f"[LawStore] 법령 항목 검증 실패, 건너뜁니다: {code}: {e.error_count()}개 오류")
                continue
            if not laws[code].title:
                logger.warning(f"[LawStore] 제목이 없는 법령: {code}")

        logger.info(f"[LawStore] 법령 {len(laws)}건 로딩")
        return laws


# 싱글톤 인스턴스
_law_store: Optional[LawStore] = None


def get_law_store() -> LawStore:
    """LawStore 인스턴스를 반환합니다."""
    global _law_store
    if _law_store is None:
        settings = get_settings()
        _law_store = LawStore(settings.rules_dir / settings.laws_file, cache=get_definition_cache())
    return _law_store
