"""
법령 참조 API입니다.
체크리스트 항목의 refs 코드로 법령 요약을 조회합니다.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.services import get_law_store
from app.services.law_store import parse_codes_param
from app.utils import parse_flag, validate_list_limit

router = APIRouter()

LAW_SOURCE = "laws.json"


@router.get("")
async def list_laws(
    codes: Optional[str] = None,
    all_: Optional[str] = Query(None, alias="all"),
    limit: Optional[str] = None,
) -> dict:
    """
    법령 조회.

    - codes=A,B,C: 해당 코드만 조회하고, 없는 코드는 missing으로 돌려줌
    - all=1: 전체 목록 (최대 500건, 넘치면 limited=true)
    """
    store = get_law_store()

    if parse_flag(all_):
        laws, limited = await store.list_laws(limit=validate_list_limit(limit))
        return {
            "ok": True,
            "list": {code: doc.model_dump() for code, doc in laws.items()},
            "limited": limited,
            "source": LAW_SOURCE,
        }

    lookup = await store.lookup_laws_by_codes(parse_codes_param(codes))
    return {
        "ok": True,
        "list": {code: doc.model_dump() for code, doc in lookup.found.items()},
        "missing": lookup.missing,
        "source": LAW_SOURCE,
    }


@router.get("/{code}")
async def get_law(code: str) -> dict:
    """코드 하나로 법령 조회. 없으면 found=false."""
    doc = await get_law_store().get_law(code)
    return {
        "ok": True,
        "found": doc is not None,
        "code": code.strip(),
        "data": doc.model_dump() if doc else None,
        "source": LAW_SOURCE,
    }
