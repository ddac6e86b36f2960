"""Definition cache for the building-code self-check system.

룰 데이터(JSON) 파일을 파싱한 결과를 메모리에 보관합니다.

주요 기능:
- 파일 경로 단위 캐시
- 파일 수정 시각(mtime_ns) + 크기 기반 무효화
- 캐시 히트/미스/재로딩 통계

비개발자가 JSON 파일을 수정하면 다음 요청에서 자동으로 다시 읽습니다.
요청마다 파일을 다시 파싱하지 않으면서도 서버 재시작이 필요 없습니다.

사용 예시:
    cache = get_definition_cache()

    data = await cache.get_or_load(path, loader)
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """캐시 엔트리."""
    value: Any
    mtime_ns: int
    size: int
    loaded_at: float
    hit_count: int = 0


@dataclass
class CacheStats:
    """캐시 통계."""
    hits: int = 0
    misses: int = 0
    reloads: int = 0

    @property
    def hit_rate(self) -> float:
        """캐시 히트율 계산."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


# 파일이 없을 때 사용하는 시그니처
_MISSING_SIGNATURE = (-1, -1)


def file_signature(path: Path) -> tuple[int, int]:
    """파일의 (mtime_ns, size). 파일이 없으면 (-1, -1)."""
    try:
        stat = path.stat()
    except FileNotFoundError:
        return _MISSING_SIGNATURE
    return stat.st_mtime_ns, stat.st_size


class DefinitionCache:
    """
    파일 시그니처 기반 메모리 캐시.

    같은 경로의 파일이 바뀌지 않았으면 이전에 파싱한 값을 그대로 돌려주고,
    수정 시각이나 크기가 바뀌었으면 loader로 다시 읽습니다.
    파일이 없는 상태도 하나의 시그니처로 취급하므로,
    나중에 파일이 생기면 그때 다시 읽습니다.
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._stats = CacheStats()

    async def get_or_load(
        self,
        path: Path,
        loader: Callable[[Path], Awaitable[Any]],
    ) -> Any:
        """
        캐시에서 값을 조회하고, 없거나 파일이 바뀌었으면 loader로 읽습니다.

        Args:
            path: 원본 파일 경로
            loader: 경로를 받아 파싱된 값을 돌려주는 비동기 함수

        Returns:
            파싱된 값. loader가 예외를 던지면 캐시를 갱신하지 않고 그대로 전파합니다.
        """
        key = str(path)
        mtime_ns, size = file_signature(path)

        entry = self._entries.get(key)
        if entry is not None and entry.mtime_ns == mtime_ns and entry.size == size:
            entry.hit_count += 1
            self._stats.hits += 1
            logger.debug(f"[DefinitionCache] 캐시 히트: {path.name}")
            return entry.value

        self._stats.misses += 1
        if entry is not None:
            self._stats.reloads += 1
            logger.info(f"[DefinitionCache] 파일 변경 감지, 다시 읽습니다: {path.name}")

        value = await loader(path)
        self._entries[key] = CacheEntry(
            value=value,
            mtime_ns=mtime_ns,
            size=size,
            loaded_at=time.time(),
        )
        return value

    def invalidate(self, path: Path) -> bool:
        """특정 파일의 캐시를 삭제합니다."""
        return self._entries.pop(str(path), None) is not None

    def clear(self) -> int:
        """
        모든 캐시 삭제.

        Returns:
            삭제된 엔트리 수
        """
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"[DefinitionCache] 캐시 초기화: {count}개 삭제")
        return count

    @property
    def stats(self) -> CacheStats:
        """캐시 통계 반환."""
        return self._stats

    def describe_entries(self) -> list[dict[str, Any]]:
        """엔트리별 파일명, 로딩 시각, 히트 수 (상세 헬스 체크용)."""
        return [
            {
                "file": Path(key).name,
                "loaded_at": datetime.fromtimestamp(entry.loaded_at).isoformat(timespec="seconds"),
                "hit_count": entry.hit_count,
            }
            for key, entry in self._entries.items()
        ]


# 싱글톤 인스턴스
_definition_cache: Optional[DefinitionCache] = None


def get_definition_cache() -> DefinitionCache:
    """DefinitionCache 싱글톤 인스턴스 반환."""
    global _definition_cache
    if _definition_cache is None:
        _definition_cache = DefinitionCache()
    return _definition_cache
