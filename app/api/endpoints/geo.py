"""
주소/좌표 API입니다.
주소 검색, 관할 지자체 조회, 좌표 기반 용도지역 조회를 제공합니다.
외부 서비스 오류는 502로 응답합니다.
"""

from typing import Optional

from fastapi import APIRouter

from app.services import get_definition_store, get_geo_client
from app.services.zoning import list_zonings
from app.utils import require_text, validate_lat_lon

router = APIRouter()


@router.get("/geocode")
async def geocode(q: Optional[str] = None) -> dict:
    """주소/장소명 → 좌표 (첫 번째 결과)."""
    query = require_text("q", q)
    result = await get_geo_client().geocode(query)
    return {"ok": True, **result.model_dump()}


@router.get("/reverse")
async def reverse(lat: Optional[str] = None, lon: Optional[str] = None) -> dict:
    """좌표 → 관할 지자체."""
    lat_num, lon_num = validate_lat_lon(lat, lon)
    result = await get_geo_client().reverse(lat_num, lon_num)
    return {"ok": True, **result.model_dump()}


@router.get("/zoning/by-coord")
async def zoning_by_coord(lat: Optional[str] = None, lon: Optional[str] = None) -> dict:
    """
    좌표 → 용도지역.

    V월드에서 받은 명칭을 base_rules.json의 용도지역명으로 대응시킵니다.
    대응에 실패하면 found=false와 후보 목록을 돌려주며, 사용자가 직접 선택합니다.
    """
    lat_num, lon_num = validate_lat_lon(lat, lon)
    document = await get_definition_store().load_base_rules()
    known, _ = list_zonings(document)
    result = await get_geo_client().zoning_by_coord(lat_num, lon_num, known)
    return {"ok": True, **result.model_dump()}
