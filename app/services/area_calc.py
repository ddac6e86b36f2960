"""
규모 간이 산정 서비스입니다.

대지면적, 건폐율, 용적률로 최대 건축면적/연면적과 추정 층수/높이를 계산합니다.
도로, 조례, 심의, 지구단위계획 등은 반영하지 않는 단순 산정입니다.
"""

import math
from typing import Any, Optional

from app.exceptions import InputValidationError
from app.models import AreaCalcResult, to_number


DEFAULT_FLOOR_HEIGHT_M = 3.3
CALC_NOTE = "단순 산정(간이)입니다. 실제는 도로·조례·심의·지구단위 등으로 달라질 수 있어요."


def _positive(name: str, value: Any) -> float:
    number = to_number(value)
    if number is None or number <= 0:
        raise InputValidationError(
            f"{name}은(는) 0보다 큰 숫자여야 합니다.",
            details={"field": name, "value": value},
        )
    return number


def calculate_area(
    site: Any,
    coverage: Any,
    far: Any,
    floor: Optional[Any] = None,
) -> AreaCalcResult:
    """
    최대 규모를 산정합니다.

    Args:
        site: 대지면적(㎡)
        coverage: 건폐율(%)
        far: 용적률(%)
        floor: 층고(m). 비어 있으면 3.3m

    Raises:
        InputValidationError: 값이 유한한 양수가 아닐 때
    """
    site_m2 = _positive("site", site)
    coverage_pct = _positive("coverage", coverage)
    far_pct = _positive("far", far)
    floor_m = _positive("floor", DEFAULT_FLOOR_HEIGHT_M if floor in (None, "") else floor)

    max_building_area = site_m2 * coverage_pct / 100
    max_total_floor_area = site_m2 * far_pct / 100
    est_floors = max(1, math.floor(max_total_floor_area / max(1.0, max_building_area)))

    return AreaCalcResult(
        max_building_area_m2=max_building_area,
        max_total_floor_area_m2=max_total_floor_area,
        est_floors=est_floors,
        est_height_m=est_floors * floor_m,
    )
