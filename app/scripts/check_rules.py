#!/usr/bin/env python3
"""Rule data checker script.

룰 데이터(JSON)를 배포하기 전에 작성 오류를 점검합니다.

Usage:
    python -m app.scripts.check_rules
    python -m app.scripts.check_rules --rules-dir path/to/rules
    python -m app.scripts.check_rules --quiet
"""

import asyncio
import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from app.exceptions import CheckerError
from app.models import ChecklistItemDefinition, RuleEngineDefinition
from app.services.definition_store import (
    CHECKLIST_ENVELOPE_KEYS,
    RULE_ENGINE_ENVELOPE_KEYS,
    extract_entries,
    parse_entries,
    read_json_file,
)
from app.services.law_store import LawStore


@dataclass
class RuleCheckReport:
    """점검 결과. errors가 하나라도 있으면 배포하면 안 됩니다."""

    checklist_count: int = 0
    rule_count: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


async def check_rules(
    rules_dir: Path,
    checklists_file: str = "checklists.json",
    rule_engine_file: str = "rule_engine.json",
    laws_file: str = "laws.json",
) -> RuleCheckReport:
    """
    룰 데이터를 점검합니다.

    오류(errors):
    - JSON 형식 오류
    - 검증에 실패해 건너뛰게 될 항목
    - 잘못 작성된 조건 (항상 거짓으로 평가됨)
    - 중복 id

    경고(warnings):
    - 판정 로직이 없는 체크리스트 항목 (기본 판정으로 동작)
    - 체크리스트에 없는 판정 로직
    - laws.json에 없는 refs
    """
    report = RuleCheckReport()

    try:
        checklist_doc = await read_json_file(rules_dir / checklists_file)
        rule_doc = await read_json_file(rules_dir / rule_engine_file)
    except CheckerError as e:
        report.errors.append(f"{e.message} {e.details or ''}".strip())
        return report

    items, skipped_items = parse_entries(
        extract_entries(checklist_doc, CHECKLIST_ENVELOPE_KEYS, checklists_file),
        ChecklistItemDefinition,
        checklists_file,
    )
    rules, skipped_rules = parse_entries(
        extract_entries(rule_doc, RULE_ENGINE_ENVELOPE_KEYS, rule_engine_file),
        RuleEngineDefinition,
        rule_engine_file,
    )
    report.checklist_count = len(items)
    report.rule_count = len(rules)
    report.errors.extend(f"건너뛴 항목: {reason}" for reason in skipped_items + skipped_rules)

    for label, ids in (("체크리스트", [i.id for i in items]), ("판정 로직", [r.id for r in rules])):
        seen: set[str] = set()
        for item_id in ids:
            if item_id in seen:
                report.errors.append(f"{label} id 중복: {item_id}")
            seen.add(item_id)

    for rule_def in rules:
        for rule_id, cond in rule_def.malformed_conditions():
            report.errors.append(
                f"잘못된 조건: item={rule_def.id}, rule={rule_id or '-'}, 사유={cond.reason}, 원본={cond.raw!r}"
            )

    item_ids = {i.id for i in items}
    rule_ids = {r.id for r in rules}
    for item_id in sorted(item_ids - rule_ids):
        report.warnings.append(f"판정 로직 없음(기본 판정 사용): {item_id}")
    for rule_id in sorted(rule_ids - item_ids):
        report.warnings.append(f"체크리스트에 없는 판정 로직: {rule_id}")

    try:
        lookup = await LawStore(rules_dir / laws_file).lookup_laws_by_codes(
            code for item in items for code in item.refs
        )
    except CheckerError as e:
        report.errors.append(f"{e.message} {e.details or ''}".strip())
    else:
        report.warnings.extend(f"laws.json 미등록 ref: {code}" for code in lookup.missing)

    return report


async def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="체크리스트/판정 로직 룰 데이터 점검"
    )
    parser.add_argument(
        "--rules-dir",
        type=str,
        default=None,
        help="룰 데이터 디렉토리 (기본: 설정의 rules_dir)"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="경고 숨기기"
    )

    args = parser.parse_args(argv)

    from app.config import get_settings

    settings = get_settings()
    rules_dir = Path(args.rules_dir) if args.rules_dir else settings.rules_dir

    report = await check_rules(
        rules_dir,
        checklists_file=settings.checklists_file,
        rule_engine_file=settings.rule_engine_file,
        laws_file=settings.laws_file,
    )

    print('=' * 70)
    print(f'룰 데이터 점검: {rules_dir}')
    print(f'  체크리스트 {report.checklist_count}개, 판정 로직 {report.rule_count}개')
    print('=' * 70)

    for message in report.errors:
        print(f'  [오류] {message}')
    if not args.quiet:
        for message in report.warnings:
            print(f'  [경고] {message}')

    print(f'\n오류 {len(report.errors)}건, 경고 {len(report.warnings)}건')

    # 종료 코드: 오류가 있으면 1
    return 0 if report.ok else 1


def run_check_rules():
    """CLI 진입점."""
    exit_code = asyncio.run(main())
    sys.exit(exit_code)


if __name__ == "__main__":
    run_check_rules()
