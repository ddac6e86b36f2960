"""
API 헬스 체크 및 루트 엔드포인트 통합 테스트.
서버의 기본 응답과 문서 페이지 접근을 확인합니다.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from app.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_root_endpoint(client: AsyncClient):
    """GET / 는 서버 기본 정보(name, version, docs)를 200으로 반환해야 한다."""
    response = await client.get("/")

    assert response.status_code == 200

    data = response.json()
    assert "name" in data
    assert "version" in data
    assert data["docs"] == "/docs"


async def test_docs_endpoint(client: AsyncClient):
    """GET /docs 는 Swagger UI 페이지를 200으로 반환해야 한다."""
    response = await client.get("/docs")

    assert response.status_code == 200


async def test_health_check(client: AsyncClient):
    """GET /api/health 는 ok=true, status=healthy를 반환해야 한다."""
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "status": "healthy"}


async def test_health_detail(client: AsyncClient):
    """GET /api/health/detail 은 룰 데이터 파일 존재 여부와 캐시 통계를 포함해야 한다."""
    response = await client.get("/api/health/detail")

    assert response.status_code == 200

    data = response.json()
    assert data["config"]["files"] == {
        "checklists": True,
        "rule_engine": True,
        "base_rules": True,
        "laws": True,
    }
    assert "key" not in data["config"]["vworld"]
    assert set(data["cache"]) == {"hits", "misses", "reloads", "hit_rate", "entries"}


async def test_health_detail_lists_cache_entries(client: AsyncClient):
    """법령 파일을 한 번 읽고 나면 캐시 엔트리에 파일명과 히트 수가 보여야 한다."""
    await client.get("/api/laws/BA_44")
    await client.get("/api/laws/BA_44")

    response = await client.get("/api/health/detail")

    entries = {e["file"]: e for e in response.json()["cache"]["entries"]}
    assert "laws.json" in entries
    assert entries["laws.json"]["hit_count"] >= 1
    assert entries["laws.json"]["loaded_at"]


async def test_unknown_path_returns_404(client: AsyncClient):
    """존재하지 않는 경로는 404를 반환해야 한다."""
    response = await client.get("/api/not-a-route")

    assert response.status_code == 404
