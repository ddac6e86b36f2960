"""주소 검색 / 관할 지자체 / 좌표 기반 용도지역 조회 결과 모델입니다."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class GeoPoint(BaseModel):
    """주소 검색 결과 한 건."""

    lat: float
    lon: float
    display_name: str = ""
    address: Optional[dict[str, Any]] = None


class GeocodeResult(BaseModel):
    found: bool
    result: Optional[GeoPoint] = None


class ReverseResult(BaseModel):
    """좌표 → 관할 지자체."""

    found: bool
    jurisdiction: str = ""
    raw: Optional[dict[str, Any]] = None


class ZoningLookupResult(BaseModel):
    """좌표 → 용도지역. 자동 조회가 불가능하면 found=False와 안내 문구를 돌려줍니다."""

    found: bool
    zoning: str = ""
    raw_name: str = ""
    normalized: str = ""
    candidates: list[str] = Field(default_factory=list)
    source: dict[str, Any] = Field(default_factory=dict)
    note: str = ""
