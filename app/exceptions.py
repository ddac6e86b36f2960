"""
건축법규 셀프 체크 시스템 커스텀 예외 계층입니다.
판정 엔진 바깥(정의 로딩, 법령 조회, 외부 서비스, 요청 검증)에서만 사용하며,
판정 엔진 자체는 잘못된 룰 데이터에 대해 예외를 던지지 않습니다.
"""

from typing import Optional, Any


class CheckerError(Exception):
    """셀프 체크 시스템 기본 예외 클래스."""

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class DefinitionLoadError(CheckerError):
    """룰 데이터(JSON) 로딩/파싱 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_DEF_001", details=details)


class LawStoreError(CheckerError):
    """법령 참조 저장소 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_LAW_001", details=details)


class ExternalServiceError(CheckerError):
    """외부 서비스(주소 검색, V월드) 통신 에러 (502 응답)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_EXT_001", details=details)


class InputValidationError(CheckerError):
    """입력 유효성 검증 에러 (400 응답)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_INPUT_001", details=details)
