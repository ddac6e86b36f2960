"""입력 유효성 검증 유틸리티.

쿼리 파라미터(좌표, 필수 문자열, 목록 상한) 검증을 수행합니다.
판정 엔진 입력(컨텍스트, 값 집합)은 검증하지 않고 관대하게 해석하며,
여기서는 엔드포인트가 처리를 시작할 수 없는 입력만 거부합니다.
"""

from typing import Any, Optional

from app.exceptions import InputValidationError
from app.models import to_number


# 전체 목록 조회 상한
MAX_LIST_LIMIT = 500


def require_text(name: str, value: Optional[str]) -> str:
    """
    필수 문자열 파라미터 검증.

    Returns:
        앞뒤 공백을 제거한 값

    Raises:
        InputValidationError: 값이 비어 있음
    """
    text = (value or "").strip()
    if not text:
        raise InputValidationError(
            f"{name} 파라미터가 필요합니다",
            details={"field": name},
        )
    return text


def validate_lat_lon(lat: Any, lon: Any) -> tuple[float, float]:
    """
    위도/경도 검증.

    - 유한한 숫자여야 함
    - 위도 -90 ~ 90, 경도 -180 ~ 180

    Raises:
        InputValidationError: 좌표가 올바르지 않음
    """
    lat_num = to_number(lat)
    lon_num = to_number(lon)

    if lat_num is None or lon_num is None:
        raise InputValidationError(
            "위도/경도가 올바른 숫자가 아닙니다",
            details={"lat": lat, "lon": lon},
        )

    if not (-90 <= lat_num <= 90) or not (-180 <= lon_num <= 180):
        raise InputValidationError(
            "위도/경도 범위를 벗어났습니다",
            details={"lat": lat_num, "lon": lon_num},
        )

    return lat_num, lon_num


def validate_list_limit(limit: Any, maximum: int = MAX_LIST_LIMIT) -> int:
    """
    목록 조회 상한 검증. 비어 있으면 maximum, 넘치면 maximum으로 자릅니다.

    Raises:
        InputValidationError: 1 미만이거나 숫자가 아님
    """
    if limit is None or limit == "":
        return maximum

    number = to_number(limit)
    if number is None or number < 1:
        raise InputValidationError(
            "limit은 1 이상의 숫자여야 합니다",
            details={"limit": limit},
        )
    return min(int(number), maximum)


def parse_flag(value: Optional[str]) -> bool:
    """'1', 'true', 'yes', 'on'을 참으로 해석합니다."""
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
