"""
용도지역 기준(base_rules.json) 서비스입니다.

base_rules.json은 작성 시기에 따라 모양이 다릅니다:

┌──────────────────────┬──────────────────────────────────────────────┐
│ 형태                 │ 예시                                          │
├──────────────────────┼──────────────────────────────────────────────┤
│ rules (현행)         │ {"rules": [{"zoning": "...", "bcr_max": 60}]} │
│ zoning_rules (구버전)│ {"zoning_rules": [{"zoning": "..."}]}         │
│ list                 │ {"list": ["...", {"zoning": "..."}]}          │
│ 사전                 │ {"제1종일반주거지역": {"bcr_max": 60}}         │
└──────────────────────┴──────────────────────────────────────────────┘

이 모듈의 함수는 모두 이미 읽어온 문서를 받아 계산만 하며, 파일을 직접 읽지 않습니다.
"""

import logging
import re
from typing import Any, Iterable, Optional

from app.models import (
    JudgeStatus,
    UseCheckResult,
    UseEntry,
    ZoningMatch,
    ZoningRule,
    normalize_status,
    to_number,
)

logger = logging.getLogger(__name__)


# base_rules.json이 없을 때 보여주는 용도지역 목록
ZONING_FALLBACK = [
    "제1종일반주거지역",
    "제2종일반주거지역",
    "제3종일반주거지역",
    "일반상업지역",
    "준공업지역",
]

# 기준을 찾지 못했을 때의 간이 건폐율/용적률(%)
DEFAULT_BCR_MAX = 60.0
DEFAULT_FAR_MAX = 200.0

USES_FALLBACK = [
    UseEntry(code="RES_HOUSE", label="단독/다가구(주거)"),
    UseEntry(code="RES_MULTI", label="공동주택(간이)"),
    UseEntry(code="NEIGHBOR_1", label="제1종근린생활시설(간이)"),
    UseEntry(code="NEIGHBOR_2", label="제2종근린생활시설(간이)"),
    UseEntry(code="OFFICE", label="업무시설(간이)"),
]

USE_MESSAGES = {
    JudgeStatus.ALLOW: "✅ 가능(1차 통과)",
    JudgeStatus.CONDITIONAL: "⚠️ 조건부 가능(추가 검토 필요)",
    JudgeStatus.DENY: "❌ 불가/제한 가능성 큼(추가 검토 필요)",
    JudgeStatus.NEED_INPUT: "❓ 입력이 필요합니다(추가 정보 필요)",
    JudgeStatus.UNKNOWN: "❓ 정보가 부족해요(간이 판정)",
}
ZONING_NOT_FOUND_MESSAGE = "❓ 해당 용도지역 룰이 없습니다(간이 판정 불가)"

# 사전 형태 문서에서 용도지역이 아닌 최상위 키
_RESERVED_KEYS = {"uses_catalog", "version", "meta", "updated_at"}


# =============================================================
# 용도지역 기준
# =============================================================

def _build_rule(raw: Any, zoning: Optional[str] = None) -> Optional[ZoningRule]:
    """원본 항목 하나를 ZoningRule로 변환합니다. 용도지역명이 없으면 None."""
    if isinstance(raw, str):
        name = raw.strip()
        return ZoningRule(zoning=name) if name else None
    if not isinstance(raw, dict):
        return None

    name = str(zoning if zoning is not None else raw.get("zoning") or "").strip()
    if not name:
        return None

    bcr = raw.get("bcr_max") if raw.get("bcr_max") is not None else raw.get("bcr")
    far = raw.get("far_max") if raw.get("far_max") is not None else raw.get("far")
    uses = raw.get("uses") if isinstance(raw.get("uses"), dict) else {}

    extra = {k: v for k, v in raw.items() if k not in {"zoning", "bcr", "far", "bcr_max", "far_max", "uses", "source"}}
    return ZoningRule(
        **extra,
        zoning=name,
        bcr_max=to_number(bcr),
        far_max=to_number(far),
        uses={str(code).strip(): str(status or "") for code, status in uses.items()},
    )


def zoning_rules(document: Any) -> list[ZoningRule]:
    """문서에서 용도지역 기준 목록을 꺼냅니다. 모양을 알 수 없으면 빈 목록."""
    if not isinstance(document, dict):
        return []

    for key in ("rules", "zoning_rules", "list"):
        if isinstance(document.get(key), list):
            rules = (_build_rule(raw) for raw in document[key])
            return [rule for rule in rules if rule is not None]

    # 사전 형태: {용도지역명: {...}}
    rules = []
    for name, raw in document.items():
        if name in _RESERVED_KEYS or not isinstance(raw, dict):
            continue
        rule = _build_rule(raw, zoning=name)
        if rule is not None:
            rules.append(rule)
    return rules


def list_zonings(document: Any) -> tuple[list[str], str]:
    """
    용도지역명 목록을 반환합니다.

    Returns:
        (중복 제거된 목록, 출처 "base_rules" | "fallback")
    """
    names: dict[str, None] = {}
    for rule in zoning_rules(document):
        names.setdefault(rule.zoning, None)
    if names:
        return list(names), "base_rules"
    return list(ZONING_FALLBACK), "fallback"


def find_zoning_rule(document: Any, zoning: str) -> Optional[ZoningRule]:
    """용도지역명이 정확히 일치하는 기준을 찾습니다."""
    name = str(zoning or "").strip()
    if not name:
        return None
    return next((rule for rule in zoning_rules(document) if rule.zoning == name), None)


def apply_zoning(document: Any, zoning: str) -> ZoningRule:
    """
    용도지역의 건폐율/용적률 기준을 반환합니다.

    기준을 찾지 못하면 간이 기준(60% / 200%)을 fallback 출처로 반환합니다.
    """
    rule = find_zoning_rule(document, zoning)
    if rule is None:
        logger.info(f"[Zoning] 기준 없음, 간이 기준 사용: {zoning}")
        return ZoningRule(
            zoning=str(zoning).strip(),
            bcr_max=DEFAULT_BCR_MAX,
            far_max=DEFAULT_FAR_MAX,
            source="fallback",
        )
    return rule


# =============================================================
# 용도
# =============================================================

def uses_catalog(document: Any) -> tuple[list[UseEntry], str]:
    """
    건축물 용도 카탈로그를 반환합니다.

    Returns:
        (용도 목록, 출처 "base_rules.uses_catalog" | "fallback")
    """
    raw = document.get("uses_catalog") if isinstance(document, dict) else None
    entries = []
    if isinstance(raw, list):
        for item in raw:
            if not isinstance(item, dict):
                continue
            code = str(item.get("code") or "").strip()
            if code:
                entries.append(UseEntry(code=code, label=str(item.get("label") or "").strip()))
    if entries:
        return entries, "base_rules.uses_catalog"
    return list(USES_FALLBACK), "fallback"


def use_message(status: Any) -> str:
    """판정 상태별 용도 안내 문구."""
    return USE_MESSAGES[normalize_status(status)]


def check_use(document: Any, zoning: str, use: str) -> UseCheckResult:
    """
    용도지역 안에서 해당 용도가 가능한지 간이 판정합니다.

    기준의 uses 사전에 없는 용도는 unknown입니다.
    """
    zoning = str(zoning or "").strip()
    use = str(use or "").strip()

    rule = find_zoning_rule(document, zoning)
    if rule is None:
        return UseCheckResult(
            zoning=zoning,
            use=use,
            status=JudgeStatus.UNKNOWN,
            message=ZONING_NOT_FOUND_MESSAGE,
            source="base_rules_not_found",
        )

    status = normalize_status(rule.uses.get(use) or "unknown")
    return UseCheckResult(
        zoning=zoning,
        use=use,
        status=status,
        message=use_message(status),
        source="base_rules.rules[].uses",
    )


# =============================================================
# 용도지역명 대응
# =============================================================

_PAREN_PATTERN = re.compile(r"\([^)]*\)")
_SPACE_PATTERN = re.compile(r"\s+")


def normalize_zoning_key(name: Any) -> str:
    """괄호 안 내용, 공백, 가운뎃점을 지우고 소문자로 맞춘 비교용 키."""
    text = _PAREN_PATTERN.sub("", str(name or "")).strip()
    text = _SPACE_PATTERN.sub("", text)
    return text.replace("·", "").replace("ㆍ", "").lower()


def resolve_zoning_name(raw_name: Any, known: Iterable[str]) -> ZoningMatch:
    """
    GIS에서 받은 용도지역 명칭을 알려진 용도지역명 중 하나로 대응시킵니다.

    1. 정확히 일치
    2. 정규화 키 일치
    3. 정규화 키끼리 한쪽이 다른 쪽을 포함하는 후보가 정확히 하나

    후보가 없거나 여럿이면 matched=False이며 후보 목록을 함께 돌려줍니다.
    """
    raw = str(raw_name or "").strip()
    if not raw:
        return ZoningMatch()

    names = [str(k).strip() for k in known if str(k or "").strip()]
    normalized = normalize_zoning_key(raw)

    if raw in names:
        return ZoningMatch(matched=True, zoning=raw, raw_name=raw, normalized=normalized)

    for name in names:
        if normalize_zoning_key(name) == normalized:
            return ZoningMatch(matched=True, zoning=name, raw_name=raw, normalized=normalized)

    candidates: dict[str, None] = {}
    for name in names:
        key = normalize_zoning_key(name)
        if key and normalized and (key in normalized or normalized in key):
            candidates.setdefault(name, None)

    found = list(candidates)
    if len(found) == 1:
        return ZoningMatch(
            matched=True, zoning=found[0], raw_name=raw, normalized=normalized, candidates=found
        )
    return ZoningMatch(matched=False, raw_name=raw, normalized=normalized, candidates=found)
