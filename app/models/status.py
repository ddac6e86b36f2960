"""
판정 상태(status) 어휘와 정규화 함수입니다.

모든 판정 결과는 다섯 가지 표준 상태 중 하나로만 표현됩니다.
상태 문자열을 만들어 내는 모든 경계(자동 규칙 결과, 기본 판정, 용도 판정)는
반드시 normalize_status()를 거쳐야 합니다.
"""

from enum import Enum
from typing import Any


class JudgeStatus(str, Enum):
    """
    체크리스트 판정 상태입니다.

    - ALLOW: 1차 통과
    - CONDITIONAL: 조건부 가능 (추가 검토 필요)
    - DENY: 불가 / 제한 가능성 큼
    - NEED_INPUT: 판정을 위해 입력이 더 필요함
    - UNKNOWN: 정보 부족으로 판정 불가
    """
    ALLOW = "allow"
    CONDITIONAL = "conditional"
    DENY = "deny"
    NEED_INPUT = "need_input"
    UNKNOWN = "unknown"


# 과거 데이터 호환용 별칭 (새 별칭은 여기에 한 줄 추가)
STATUS_ALIASES: dict[str, JudgeStatus] = {
    "warn": JudgeStatus.CONDITIONAL,
}

# 종합 판정 우선순위 (앞에 있을수록 우선)
STATUS_PRIORITY: tuple[JudgeStatus, ...] = (
    JudgeStatus.DENY,
    JudgeStatus.NEED_INPUT,
    JudgeStatus.CONDITIONAL,
    JudgeStatus.ALLOW,
)


def normalize_status(value: Any) -> JudgeStatus:
    """
    임의의 상태 값을 표준 JudgeStatus로 변환합니다.

    대소문자와 앞뒤 공백은 무시합니다. 인식할 수 없는 값은 UNKNOWN이 되며,
    예외를 던지지 않습니다.
    """
    if isinstance(value, JudgeStatus):
        return value
    text = str(value or "").strip().lower()
    if text in STATUS_ALIASES:
        return STATUS_ALIASES[text]
    try:
        return JudgeStatus(text)
    except ValueError:
        return JudgeStatus.UNKNOWN
