"""API 에러 응답 모델."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from app.exceptions import CheckerError


class ErrorResponse(BaseModel):
    """
    구조화된 API 에러 응답.

    성공 응답과 같은 ok 플래그를 가지므로 프론트엔드는 ok 하나로 분기합니다.
    """

    ok: Literal[False] = False
    error_code: str = Field(description="에러 코드 (예: ERR_INPUT_001)")
    message: str = Field(description="사용자에게 보여줄 에러 메시지")
    details: Optional[Any] = Field(default=None, description="필드명, 외부 서비스 상태 코드 등")
    timestamp: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_error(cls, exc: CheckerError) -> "ErrorResponse":
        return cls(error_code=exc.error_code, message=exc.message, details=exc.details)
