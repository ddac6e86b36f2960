"""
헬스 체크(Health Check) 엔드포인트입니다.
서버가 살아서 정상적으로 응답하는지 확인하는 용도입니다.
"""

from fastapi import APIRouter

from app.config import get_settings
from app.services import get_definition_cache

router = APIRouter()


@router.get("")
async def health_check():
    """
    기본 상태 확인 함수.
    서버가 켜져 있으면 {"status": "healthy"}를 반환합니다.
    """
    return {"ok": True, "status": "healthy"}


@router.get("/detail")
async def health_check_detail():
    """
    상세 상태 확인 함수.
    룰 데이터 파일 존재 여부, 외부 서비스 설정, 캐시 통계를 같이 보여줍니다.
    """
    settings = get_settings()
    rules_dir = settings.rules_dir
    cache = get_definition_cache()
    stats = cache.stats
    return {
        "ok": True,
        "status": "healthy",
        "config": {
            "rules_dir": str(rules_dir),
            "files": {
                "checklists": (rules_dir / settings.checklists_file).exists(),
                "rule_engine": (rules_dir / settings.rule_engine_file).exists(),
                "base_rules": (rules_dir / settings.base_rules_file).exists(),
                "laws": (rules_dir / settings.laws_file).exists(),
            },
            "vworld": {
                "enabled": bool(settings.vworld_key),  # 키 자체는 노출하지 않음
                "datasets": settings.zoning_datasets,
                "has_domain": bool(settings.vworld_domain),
            },
        },
        "cache": {
            "hits": stats.hits,
            "misses": stats.misses,
            "reloads": stats.reloads,
            "hit_rate": round(stats.hit_rate, 4),
            "entries": cache.describe_entries(),
        },
    }
