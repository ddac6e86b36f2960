"""
입력값(value) 해석 유틸리티입니다.

룰 데이터와 사용자 입력은 JSON에서 오기 때문에 숫자가 문자열로 들어오거나,
빈 문자열이 "값 없음"을 뜻하는 경우가 많습니다. 엔진 전체가 같은 기준으로
값을 해석하도록 이 모듈의 함수만 사용합니다.
"""

import math
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """
    값을 유한한 실수로 변환합니다. 변환할 수 없으면 None을 반환합니다.

    - None, 빈 문자열 → None
    - "12", " 3.5 " → 12.0, 3.5
    - "abc", NaN, Infinity → None
    - True / False → 1.0 / 0.0
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        # "1_000"처럼 파이썬만 허용하는 표기는 숫자로 보지 않는다
        if not value.strip() or "_" in value:
            return None
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_missing_value(value: Any) -> bool:
    """
    입력값이 "비어 있음"인지 판단합니다.

    - None → 비어 있음
    - 숫자 → 유한하지 않으면(NaN, Infinity) 비어 있음
    - 그 외 → 문자열로 바꿔 공백 제거 후 빈 문자열이면 비어 있음
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not math.isfinite(value)
    return str(value).strip() == ""


def as_text(value: Any) -> str:
    """
    값을 JSON 표기와 같은 문자열로 바꿉니다.

    True → "true", 5.0 → "5", None → "" 처럼 프론트엔드가 보내는 표기와
    맞춰야 in / eq 비교가 데이터 작성자의 의도대로 동작합니다.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)

