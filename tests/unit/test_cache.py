"""Unit tests for the file-signature definition cache.

Verifies hit/miss accounting, reload on file change, missing-file handling,
and that a failing loader leaves the cache untouched.
"""

import pytest

from app.services.cache import DefinitionCache, file_signature, get_definition_cache


def _counting_loader():
    """Return (loader, calls) where calls records every load."""
    calls = []

    async def loader(path):
        calls.append(path)
        return path.read_text(encoding="utf-8") if path.exists() else None

    return loader, calls


class TestFileSignature:
    def test_missing_file(self, tmp_path):
        assert file_signature(tmp_path / "nope.json") == (-1, -1)

    def test_existing_file(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text("{}", encoding="utf-8")
        mtime_ns, size = file_signature(path)
        assert size == 2
        assert mtime_ns > 0


class TestDefinitionCache:
    async def test_second_call_is_a_hit(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text("[1]", encoding="utf-8")
        cache = DefinitionCache()
        loader, calls = _counting_loader()

        assert await cache.get_or_load(path, loader) == "[1]"
        assert await cache.get_or_load(path, loader) == "[1]"

        assert len(calls) == 1
        assert cache.stats.hits == 1
        assert cache.stats.misses == 1
        assert cache.stats.reloads == 0
        assert cache.stats.hit_rate == pytest.approx(0.5)

    async def test_changed_file_is_reloaded(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text("[1]", encoding="utf-8")
        cache = DefinitionCache()
        loader, calls = _counting_loader()

        await cache.get_or_load(path, loader)
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert await cache.get_or_load(path, loader) == "[1, 2, 3]"

        assert len(calls) == 2
        assert cache.stats.reloads == 1

    async def test_missing_file_cached_until_created(self, tmp_path):
        path = tmp_path / "later.json"
        cache = DefinitionCache()
        loader, calls = _counting_loader()

        assert await cache.get_or_load(path, loader) is None
        assert await cache.get_or_load(path, loader) is None
        assert len(calls) == 1

        path.write_text("{}", encoding="utf-8")
        assert await cache.get_or_load(path, loader) == "{}"
        assert len(calls) == 2

    async def test_loader_error_not_cached(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text("x", encoding="utf-8")
        cache = DefinitionCache()

        async def failing(p):
            raise ValueError("broken")

        with pytest.raises(ValueError):
            await cache.get_or_load(path, failing)

        loader, calls = _counting_loader()
        assert await cache.get_or_load(path, loader) == "x"
        assert len(calls) == 1

    async def test_invalidate_and_clear(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text("x", encoding="utf-8")
        cache = DefinitionCache()
        loader, calls = _counting_loader()

        await cache.get_or_load(path, loader)
        assert cache.invalidate(path) is True
        assert cache.invalidate(path) is False

        await cache.get_or_load(path, loader)
        assert len(calls) == 2
        assert cache.clear() == 1
        assert cache.clear() == 0

    async def test_describe_entries(self, tmp_path):
        path = tmp_path / "laws.json"
        path.write_text("{}", encoding="utf-8")
        cache = DefinitionCache()
        loader, _ = _counting_loader()

        assert cache.describe_entries() == []
        await cache.get_or_load(path, loader)
        await cache.get_or_load(path, loader)
        await cache.get_or_load(path, loader)

        [entry] = cache.describe_entries()
        assert entry["file"] == "laws.json"
        assert entry["hit_count"] == 2
        assert entry["loaded_at"]

    def test_singleton(self):
        assert get_definition_cache() is get_definition_cache()
