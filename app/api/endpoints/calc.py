"""
규모 간이 산정 API입니다.
"""

from typing import Optional

from fastapi import APIRouter

from app.services.area_calc import CALC_NOTE, calculate_area

router = APIRouter()


@router.get("")
async def calc(
    site: Optional[str] = None,
    coverage: Optional[str] = None,
    far: Optional[str] = None,
    floor: Optional[str] = None,
) -> dict:
    """
    대지면적(site, ㎡), 건폐율(coverage, %), 용적률(far, %), 층고(floor, m, 기본 3.3)로
    최대 건축면적/연면적과 추정 층수/높이를 계산합니다.
    """
    result = calculate_area(site, coverage, far, floor)
    return {"ok": True, "result": result.model_dump(), "note": CALC_NOTE}
