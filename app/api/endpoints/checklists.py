"""
체크리스트 API입니다.
적용 항목 조회(서버 사전 판정 포함)와 사용자 입력 기반 판정을 제공합니다.
"""

from typing import Optional

from fastapi import APIRouter

from app.models import Context, JudgeRequest
from app.services import get_checklist_service

router = APIRouter()


@router.get("/enriched")
async def get_enriched_checklist(
    zoning: str = "",
    use: str = "",
    jurisdiction: str = "",
    floors: Optional[str] = None,
    height_m: Optional[str] = None,
    gross_area_m2: Optional[str] = None,
) -> dict:
    """
    컨텍스트에 적용되는 체크리스트 항목 조회.

    규모 값(floors, height_m, gross_area_m2)은 숫자로 해석되지 않으면 미상으로 취급합니다.
    각 항목에는 판정 로직(rule_set, auto_rules, optional_inputs)과
    화면 초기 배지용 server_judge가 붙습니다.
    """
    context = Context(
        zoning=zoning,
        use=use,
        jurisdiction=jurisdiction,
        floors=floors,
        height_m=height_m,
        gross_area_m2=gross_area_m2,
    )
    result = await get_checklist_service().enriched(context)
    return {"ok": True, **result}


@router.post("/judge")
async def judge_checklist(request: JudgeRequest) -> dict:
    """
    사용자 입력값으로 적용 항목을 판정하고 종합 요약을 반환합니다.

    요청 예:
        {"context": {"zoning": "제1종일반주거지역", "use": "RES_HOUSE"},
         "values": {"road_width_m": "4"}}
    """
    context = Context.model_validate(request.context)
    result = await get_checklist_service().judge(context, request.values)
    return {"ok": True, **result}
