"""
외부 지리 정보 서비스 클라이언트입니다.

- Nominatim(OpenStreetMap): 주소 검색, 좌표 → 관할 지자체
- V월드 2D 데이터 API: 좌표 → 용도지역

판정 엔진과는 독립적이며, 화면의 컨텍스트 입력을 돕는 용도입니다.
"""

import logging
from typing import Any, Iterable, Optional

import httpx

from app.config import Settings, get_settings
from app.exceptions import ExternalServiceError
from app.models import (
    GeocodeResult,
    GeoPoint,
    ReverseResult,
    ZoningLookupResult,
)
from app.services.zoning import resolve_zoning_name

logger = logging.getLogger(__name__)


# 관할 지자체로 사용할 주소 필드. 앞에 있는 필드가 우선입니다.
JURISDICTION_FIELDS = ("city", "county", "state", "region", "town", "village")

# V월드 피처 속성 중 용도지역명이 들어 있을 수 있는 필드
ZONING_NAME_FIELDS = ("uname", "zonename", "zone_nm", "name", "dong_nm")

NO_KEY_NOTE = "VWORLD_KEY 환경변수가 없어 자동 조회를 건너뛰었습니다. (수동 선택 가능)"
MATCHED_NOTE = "좌표 기반 자동 조회 결과(정규화 매칭)입니다. 실제 적용은 지구단위/조례 등 추가 검토 필요."
UNMATCHED_NOTE = "V월드에서 명칭은 찾았지만 용도지역 기준과 매칭되지 않아 자동 설정을 중단했습니다. (수동 선택 가능)"
NO_NAME_NOTE = "V월드 조회는 됐지만 해당 좌표에서 용도지역 명칭을 추출하지 못했습니다. (데이터셋/필드명이 다를 수 있어요)"


def pick_jurisdiction(address: Any) -> str:
    """Nominatim 주소 객체에서 관할 지자체 이름을 고릅니다."""
    if not isinstance(address, dict):
        return ""
    for field in JURISDICTION_FIELDS:
        value = str(address.get(field) or "").strip()
        if value:
            return value
    return ""


def pick_zoning_name(feature: Any) -> str:
    """V월드 피처에서 용도지역 명칭을 꺼냅니다. 필드명 대소문자는 구분하지 않습니다."""
    if not isinstance(feature, dict):
        return ""
    props = feature.get("properties") or feature.get("property") or {}
    if not isinstance(props, dict):
        return ""
    lowered = {str(k).lower(): v for k, v in props.items()}
    for field in ZONING_NAME_FIELDS:
        value = str(lowered.get(field) or "").strip()
        if value:
            return value
    return ""


def extract_features(payload: Any) -> list:
    """V월드 응답의 여러 모양에서 피처 목록을 꺼냅니다."""
    if not isinstance(payload, dict):
        return []
    result = (payload.get("response") or {}).get("result") or payload.get("result") or payload
    if not isinstance(result, dict):
        return []
    features = (
        result.get("features")
        or (result.get("featureCollection") or {}).get("features")
        or (result.get("geojson") or {}).get("features")
        or []
    )
    return features if isinstance(features, list) else []


class GeoClient:
    """
    Nominatim / V월드 비동기 클라이언트.

    transport를 넘기면 해당 전송 계층을 사용합니다(테스트에서 httpx.MockTransport).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.http_timeout_seconds,
            headers={
                "User-Agent": self.settings.http_user_agent,
                "Accept-Language": "ko-KR,ko;q=0.9,en;q=0.8",
                "Accept": "application/json",
            },
        )

    async def _get_json(self, service: str, url: str, params: dict[str, Any]) -> Any:
        """GET 요청 후 JSON을 반환합니다. 통신/상태/형식 오류는 ExternalServiceError."""
        try:
            async with self._client() as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"[GeoClient] {service} 응답 오류: {e.response.status_code}")
            raise ExternalServiceError(
                f"{service} 요청이 실패했습니다.",
                details={"service": service, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"[GeoClient] {service} 통신 실패: {e}")
            raise ExternalServiceError(
                f"{service}에 연결하지 못했습니다.",
                details={"service": service, "error": str(e)},
            ) from e
        except ValueError as e:
            raise ExternalServiceError(
                f"{service} 응답을 해석하지 못했습니다.",
                details={"service": service, "error": str(e)},
            ) from e

    # ==================== Nominatim ====================

    async def geocode(self, query: str) -> GeocodeResult:
        """주소/장소명으로 좌표를 찾습니다. 첫 번째 결과만 사용합니다."""
        data = await self._get_json(
            "nominatim",
            f"{self.settings.nominatim_base_url.rstrip('/')}/search",
            {"q": query, "format": "json", "limit": 1, "addressdetails": 1},
        )
        hit = data[0] if isinstance(data, list) and data else None
        if not isinstance(hit, dict):
            return GeocodeResult(found=False)

        return GeocodeResult(
            found=True,
            result=GeoPoint(
                lat=hit.get("lat"),
                lon=hit.get("lon"),
                display_name=hit.get("display_name") or "",
                address=hit.get("address"),
            ),
        )

    async def reverse(self, lat: float, lon: float) -> ReverseResult:
        """좌표의 관할 지자체를 찾습니다."""
        data = await self._get_json(
            "nominatim",
            f"{self.settings.nominatim_base_url.rstrip('/')}/reverse",
            {"lat": lat, "lon": lon, "format": "json", "zoom": 12, "addressdetails": 1},
        )
        raw = data if isinstance(data, dict) else {}
        return ReverseResult(
            found=True,
            jurisdiction=pick_jurisdiction(raw.get("address")),
            raw=raw,
        )

    # ==================== V월드 ====================

    async def _vworld_features(self, lat: float, lon: float, dataset: str) -> list:
        params: dict[str, Any] = {
            "service": "data",
            "version": "2.0",
            "request": "GetFeature",
            "format": "json",
            "key": self.settings.vworld_key,
            "data": dataset,
            "geomFilter": f"POINT({lon} {lat})",
            "size": 10,
            "page": 1,
            "geometry": "false",
            "attribute": "true",
            "crs": "EPSG:4326",
        }
        if self.settings.vworld_domain:
            params["domain"] = self.settings.vworld_domain
        if self.settings.vworld_buffer_m > 0:
            params["buffer"] = self.settings.vworld_buffer_m

        payload = await self._get_json("vworld", self.settings.vworld_base_url, params)
        return extract_features(payload)

    async def zoning_by_coord(self, lat: float, lon: float, known_zonings: Iterable[str]) -> ZoningLookupResult:
        """
        좌표의 용도지역을 조회해 알려진 용도지역명으로 대응시킵니다.

        키가 없으면 조회하지 않고 found=False를 반환합니다.
        모든 데이터셋 조회가 실패한 경우에만 ExternalServiceError를 던집니다.
        """
        if not self.settings.vworld_key:
            return ZoningLookupResult(found=False, note=NO_KEY_NOTE)

        known = list(known_zonings)
        tried: list[str] = []
        failures = 0
        last_error: Optional[ExternalServiceError] = None

        for dataset in self.settings.zoning_datasets:
            tried.append(dataset)
            try:
                features = await self._vworld_features(lat, lon, dataset)
            except ExternalServiceError as e:
                failures += 1
                last_error = e
                continue

            raw_name = pick_zoning_name(features[0]) if features else ""
            if not raw_name:
                continue

            match = resolve_zoning_name(raw_name, known)
            if match.matched:
                logger.info(f"[GeoClient] 용도지역 매칭: {raw_name} → {match.zoning}")
                return ZoningLookupResult(
                    found=True,
                    zoning=match.zoning,
                    raw_name=match.raw_name,
                    normalized=match.normalized,
                    candidates=match.candidates,
                    source={"provider": "vworld", "data": dataset},
                    note=MATCHED_NOTE,
                )

            if not self.settings.vworld_try_all_datasets:
                return ZoningLookupResult(
                    found=False,
                    raw_name=match.raw_name,
                    normalized=match.normalized,
                    candidates=match.candidates,
                    source={"provider": "vworld", "data": dataset, "tried": tried},
                    note=UNMATCHED_NOTE,
                )

        if last_error is not None and failures == len(tried):
            raise last_error

        return ZoningLookupResult(
            found=False,
            source={"provider": "vworld", "tried": tried},
            note=NO_NAME_NOTE,
        )


# 싱글톤 인스턴스
_geo_client: Optional[GeoClient] = None


def get_geo_client() -> GeoClient:
    """GeoClient 싱글톤 인스턴스 반환."""
    global _geo_client
    if _geo_client is None:
        _geo_client = GeoClient()
    return _geo_client
