"""
항목별 판정 결과를 하나의 종합 판정으로 모읍니다.

종합 상태 우선순위: deny > need_input > conditional > allow.
하나라도 막히거나 애매한 항목이 있으면 그것이 화면의 대표 문구가 됩니다.
해당 상태가 하나도 없으면 unknown입니다.
"""

from typing import Iterable

from app.models import (
    STATUS_PRIORITY,
    JudgedItem,
    JudgeStatus,
    StatusCounts,
    Summary,
)


def summarize(judged_items: Iterable[JudgedItem]) -> Summary:
    """
    판정 결과 목록을 요약합니다.

    Returns:
        상태별 개수, 종합 상태, 누락 입력 키(중복 제거, 처음 나온 순서)
    """
    items = list(judged_items)
    counts = {status.value: 0 for status in JudgeStatus}
    missing_keys: dict[str, None] = {}

    for item in items:
        counts[item.status.value] += 1
        for missing in item.missing_inputs:
            missing_keys.setdefault(missing.key, None)

    overall = next(
        (status for status in STATUS_PRIORITY if counts[status.value] > 0),
        JudgeStatus.UNKNOWN,
    )

    return Summary(
        status=overall,
        total=len(items),
        counts=StatusCounts(**counts),
        missing_inputs=list(missing_keys),
    )
