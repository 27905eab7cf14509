"""
PII 스캐너

패턴 테이블을 텍스트 전체에 적용하고 겹치는 매칭을 정리하여
시작 위치 오름차순의 겹침 없는 PIIFinding 목록을 반환합니다.

겹침 처리 (단일 패스):
- 마지막으로 채택한 항목과 겹치면, 후보의 span이 더 길 때만 교체합니다.
- 길이가 같으면 먼저 채택된 항목을 유지합니다.
"""

import logging
from collections.abc import Iterable
from typing import Any

from .models import PIIFinding, PIIType
from .patterns import PII_PATTERNS, PatternRule

logger = logging.getLogger(__name__)


def normalize_types(types: Any) -> frozenset[str] | None:
    """
    유형 필터 정규화 (대소문자 무시)

    - None → None (전체 유형)
    - 문자열 → 단일 유형
    - 반복 가능 객체 → 대문자 유형명 집합 (빈 목록이면 아무 유형도 선택하지 않음)
    """
    if types is None:
        return None
    if isinstance(types, str):
        return frozenset({types.upper()})
    if isinstance(types, PIIType):
        return frozenset({types.value})
    if isinstance(types, Iterable):
        return frozenset(
            t.value if isinstance(t, PIIType) else str(t).upper() for t in types
        )
    return frozenset({str(types).upper()})


def select_rules(types: Any = None) -> list[PatternRule]:
    """
    활성 규칙 선택

    Examples:
        >>> [r.pii_type.value for r in select_rules(["email", "Ssn"])]
        ['EMAIL', 'SSN']
    """
    allowed = normalize_types(types)
    if allowed is None:
        return list(PII_PATTERNS)
    return [rule for rule in PII_PATTERNS if rule.pii_type.value in allowed]


def resolve_overlaps(findings: list[PIIFinding]) -> list[PIIFinding]:
    """
    정렬된 매칭 목록에서 겹침 제거

    Args:
        findings: 시작 위치 오름차순으로 정렬된 매칭 목록

    Returns:
        겹침 없는 매칭 목록
    """
    accepted: list[PIIFinding] = []
    for candidate in findings:
        if accepted and candidate.overlaps(accepted[-1]):
            if candidate.length > accepted[-1].length:
                accepted[-1] = candidate
            continue
        accepted.append(candidate)
    return accepted


def scan_for_pii(text: str, types: Any = None) -> list[PIIFinding]:
    """
    텍스트에서 PII 탐지

    Args:
        text: 검사 대상 텍스트
        types: 유형 필터 (None이면 전체, 대소문자 무시)

    Returns:
        시작 위치 오름차순의 겹침 없는 PIIFinding 목록

    Examples:
        >>> [f.pii_type.value for f in scan_for_pii("mail me: a@b.com")]
        ['EMAIL']
    """
    candidates: list[PIIFinding] = []

    for rule in select_rules(types):
        for match in rule.pattern.finditer(text):
            value = match.group(0)
            if not rule.accepts(value):
                continue
            candidates.append(
                PIIFinding(
                    pii_type=rule.pii_type,
                    value=value,
                    start=match.start(),
                    end=match.end(),
                )
            )

    # 안정 정렬: 같은 시작 위치는 규칙 순서 유지
    candidates.sort(key=lambda f: f.start)
    findings = resolve_overlaps(candidates)

    if findings:
        logger.debug(f"PII 탐지 완료: 후보 {len(candidates)}개 → {len(findings)}개")

    return findings
