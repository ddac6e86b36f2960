"""
용도지역 기준 / 용도 API입니다.
base_rules.json을 바탕으로 용도지역 목록, 건폐율/용적률, 용도 가능 여부를 제공합니다.
"""

from typing import Optional

from fastapi import APIRouter

from app.services import get_definition_store
from app.services import zoning as zoning_service
from app.utils import require_text

router = APIRouter()
uses_router = APIRouter()


@router.get("/zoning")
async def list_zonings() -> dict:
    """용도지역 목록. base_rules.json이 없으면 기본 목록을 돌려줍니다."""
    document = await get_definition_store().load_base_rules()
    names, source = zoning_service.list_zonings(document)
    return {"ok": True, "list": names, "source": source}


@router.get("/apply")
async def apply_zoning(zoning: Optional[str] = None) -> dict:
    """용도지역의 건폐율(bcr_max)/용적률(far_max) 기준."""
    name = require_text("zoning", zoning)
    document = await get_definition_store().load_base_rules()
    rule = zoning_service.apply_zoning(document, name)
    return {"ok": True, "rule": rule.model_dump()}


@uses_router.get("")
async def list_uses() -> dict:
    """건축물 용도 카탈로그."""
    document = await get_definition_store().load_base_rules()
    entries, source = zoning_service.uses_catalog(document)
    return {"ok": True, "list": [e.model_dump() for e in entries], "source": source}


@uses_router.get("/check")
async def check_use(zoning: Optional[str] = None, use: Optional[str] = None) -> dict:
    """용도지역 안에서 해당 용도가 가능한지 간이 판정합니다."""
    zoning_name = require_text("zoning", zoning)
    use_code = require_text("use", use)
    document = await get_definition_store().load_base_rules()
    result = zoning_service.check_use(document, zoning_name, use_code)
    return {"ok": True, **result.model_dump(mode="json")}
