"""규모 간이 산정 모델."""

from pydantic import BaseModel, Field


class AreaCalcResult(BaseModel):
    """대지면적과 건폐율/용적률로 계산한 최대 규모입니다."""

    max_building_area_m2: float = Field(..., description="최대 건축면적(㎡)")
    max_total_floor_area_m2: float = Field(..., description="최대 연면적(㎡)")
    est_floors: int = Field(..., ge=1, description="추정 층수")
    est_height_m: float = Field(..., description="추정 높이(m)")
