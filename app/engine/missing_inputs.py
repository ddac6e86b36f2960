"""필수 입력 중 값이 비어 있는 항목을 찾습니다."""

from typing import Any, Mapping

from app.models import MergedItem, MissingInput, is_missing_value


def compute_missing_inputs(merged: MergedItem, values: Mapping[str, Any]) -> list[MissingInput]:
    """
    누락된 필수 입력 목록을 선언 순서대로 반환합니다.

    - 문자열로만 선언된 입력은 안내용이므로 건너뜁니다.
    - optional_inputs에 있는 키는 검사하지 않습니다.
    - 비어 있음 판단은 missing 조건과 같은 기준입니다.
    """
    values = values or {}
    missing: list[MissingInput] = []
    for inp in merged.item.structured_inputs:
        if not inp.key or inp.key in merged.optional_inputs:
            continue
        if is_missing_value(values.get(inp.key)):
            missing.append(MissingInput(key=inp.key, label=inp.label or inp.key))
    return missing
