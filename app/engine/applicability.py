"""
체크리스트 항목이 현재 컨텍스트에 적용되는지 판단합니다.

목록 조건(zoning_in / use_in / jurisdiction_in)은 엄격하게,
숫자 하한(min_floors / min_height_m / min_gross_area_m2)은 관대하게 판단합니다.
규모 값을 아직 모르는 경우에는 항목을 숨기지 않고 보여 주어
사용자가 값을 입력하도록 유도합니다.
"""

from typing import Optional

from app.models import ChecklistItemDefinition, Context


# (하한 필드, 컨텍스트 필드)
_THRESHOLDS = (
    ("min_floors", "floors"),
    ("min_height_m", "height_m"),
    ("min_gross_area_m2", "gross_area_m2"),
)

# (허용 목록 필드, 컨텍스트 필드)
_MEMBERSHIPS = (
    ("zoning_in", "zoning"),
    ("use_in", "use"),
    ("jurisdiction_in", "jurisdiction"),
)


def applies(item: ChecklistItemDefinition, context: Context) -> bool:
    """
    항목 적용 여부를 반환합니다.

    Args:
        item: 체크리스트 항목 정의
        context: 용도지역/용도/지자체/규모 컨텍스트

    Returns:
        적용되면 True. applies_to가 없는 항목은 항상 True.
    """
    rule = item.applies_to
    if rule is None:
        return True

    for field_name, context_field in _MEMBERSHIPS:
        allowed: Optional[list[str]] = getattr(rule, field_name)
        if not allowed:
            continue
        current = getattr(context, context_field)
        if not current or current not in allowed:
            return False

    for field_name, context_field in _THRESHOLDS:
        threshold: Optional[float] = getattr(rule, field_name)
        if threshold is None:
            continue
        current = getattr(context, context_field)
        if current is None:
            # 판단 불가 → 표시 (입력 유도)
            continue
        if current < threshold:
            return False

    return True
