"""
API 라우터 설정 파일입니다.
각 기능별로 나누어진 API 주소들을 하나로 모으는 역할을 합니다.
"""

from fastapi import APIRouter

from app.api.endpoints import health, checklists, laws, rules, geo, calc

# 메인 API 라우터 생성
api_router = APIRouter()

# 헬스 체크 엔드포인트: 서버 상태 확인용 (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# 체크리스트 엔드포인트: 적용 항목 조회 및 판정 (/checklists)
api_router.include_router(
    checklists.router,
    prefix="/checklists",
    tags=["checklists"]
)

# 법령 엔드포인트: refs 코드로 법령 요약 조회 (/laws)
api_router.include_router(
    laws.router,
    prefix="/laws",
    tags=["laws"]
)

# 용도지역 기준 엔드포인트: 목록 및 건폐율/용적률 (/rules)
api_router.include_router(
    rules.router,
    prefix="/rules",
    tags=["rules"]
)

# 용도 엔드포인트: 카탈로그 및 가능 여부 (/uses)
api_router.include_router(
    rules.uses_router,
    prefix="/uses",
    tags=["uses"]
)

# 규모 산정 엔드포인트 (/calc)
api_router.include_router(
    calc.router,
    prefix="/calc",
    tags=["calc"]
)

# 주소/좌표 엔드포인트: /geocode, /reverse, /zoning/by-coord
api_router.include_router(
    geo.router,
    tags=["geo"]
)
