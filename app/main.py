"""
건축법규 셀프 체크 시스템의 메인 진입점 파일입니다.
웹 서버 애플리케이션을 생성하고 설정하는 역할을 담당합니다.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.api.router import api_router
from app.exceptions import CheckerError, ExternalServiceError, InputValidationError
from app.models import ErrorResponse

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """루트 로거를 한 번 설정합니다."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션의 생명주기(시작과 종료)를 관리하는 함수입니다.

    서버가 시작될 때:
    1. 룰 데이터 위치를 로그로 남깁니다.
    2. V월드 키 설정 여부를 알립니다.
    """
    settings = get_settings()
    logger.info(f"건축법규 셀프 체크가 다음 주소에서 시작됩니다: {settings.host}:{settings.port}")
    logger.info(f"룰 데이터 위치: {settings.rules_dir}")
    if not settings.vworld_key:
        logger.info("VWORLD_KEY가 없어 좌표 기반 용도지역 자동 조회는 비활성화됩니다")

    yield

    logger.info("건축법규 셀프 체크가 종료됩니다")


def _error_body(error: ErrorResponse) -> dict:
    return error.model_dump(mode="json")


def create_app() -> FastAPI:
    """
    FastAPI 웹 애플리케이션을 생성하고 설정하는 함수입니다.

    주요 기능:
    1. 기본 앱 정보 설정 (제목, 설명 등)
    2. CORS 설정 (프론트엔드와의 통신 허용 설정)
    3. 예외 핸들러 (커스텀 예외 → {ok: false, ...} 응답)
    4. API 라우터 연결 (/api)
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="건축법규 셀프 체크",
        description="용도지역/용도/규모로 적용 체크리스트를 고르고 항목별 판정을 요약하는 서비스",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS 미들웨어 설정: 정적 프론트엔드가 이 서버에 접속할 수 있도록 허용합니다.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 글로벌 예외 핸들러: 커스텀 예외를 구조화된 JSON 응답으로 변환
    @app.exception_handler(CheckerError)
    async def checker_error_handler(request: Request, exc: CheckerError):
        if isinstance(exc, InputValidationError):
            status_code = 400
        elif isinstance(exc, ExternalServiceError):
            status_code = 502
        else:
            status_code = 500
            logger.error(f"[{exc.error_code}] {exc.message}: {exc.details}")
        return JSONResponse(
            status_code=status_code,
            content=_error_body(ErrorResponse.from_error(exc)),
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorResponse(error_code="ERR_INTERNAL", message="내부 서버 오류가 발생했습니다")
            ),
        )

    # API 라우터 포함: /api 주소 아래에 모든 기능을 연결합니다.
    app.include_router(api_router, prefix="/api")

    return app


# 애플리케이션 인스턴스 생성
app = create_app()


@app.get("/")
async def root():
    """
    루트 엔드포인트: 서버의 기본 정보를 반환합니다.
    """
    return {
        "name": "건축법규 셀프 체크",
        "version": "1.0.0",
        "description": "건축 계획 초기 단계의 법규 1차 셀프 체크",
        "docs": "/docs",
        "api": "/api",
    }


# 이 파일을 직접 실행했을 때 서버를 구동시키는 코드입니다.
if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,  # 코드가 변경되면 자동으로 재시작 (개발 모드)
    )
