"""
PII 탐지 결과 뷰 (detect / redact / report)

동일한 텍스트와 유형 필터에 대해 scan_for_pii() 결과를 세 가지 형태로 제공합니다.
모든 함수는 예외 대신 SkillResponse를 반환합니다.

보안 주의: 탐지된 PII 값은 로그에 남기지 않습니다 (건수와 유형만 기록).
"""

import logging
from typing import Any

from ..skills.interfaces import SkillResponse
from .models import HIGH_SENSITIVITY_TYPES, PIIFinding, PIIReport, PIIType, RiskLevel
from .scanner import scan_for_pii

logger = logging.getLogger(__name__)

# 권고 문구 (출력 순서 고정)
RECOMMENDATION_SAFE = "No PII detected. Text appears safe for sharing."
RECOMMENDATION_GENERAL = "Redact all PII before sharing or storing this text."
RECOMMENDATION_SSN = "CRITICAL: SSN detected. Ensure compliance with data protection regulations."
RECOMMENDATION_CREDIT_CARD = "CRITICAL: Credit card number detected. Ensure PCI-DSS compliance."
RECOMMENDATION_EMAIL = (
    "Consider whether email addresses need to be retained or can be anonymized."
)
RECOMMENDATION_PHONE = "Phone numbers should be removed or masked in public-facing documents."
RECOMMENDATION_HIGH_RISK = (
    "HIGH RISK: This text contains highly sensitive PII. Handle with extreme care."
)

TYPE_RECOMMENDATIONS: tuple[tuple[PIIType, str], ...] = (
    (PIIType.SSN, RECOMMENDATION_SSN),
    (PIIType.CREDIT_CARD, RECOMMENDATION_CREDIT_CARD),
    (PIIType.EMAIL, RECOMMENDATION_EMAIL),
    (PIIType.PHONE, RECOMMENDATION_PHONE),
)

# 개수 기준 위험도 임계값
HIGH_RISK_COUNT = 5
MEDIUM_RISK_COUNT = 2

EMPTY_TEXT_MESSAGE = 'Error: The "text" parameter is required and must be a non-empty string.'


def check_text(text: Any) -> SkillResponse | None:
    """비어 있거나 문자열이 아닌 입력이면 EMPTY_TEXT 실패 응답, 정상이면 None"""
    if isinstance(text, str) and text.strip():
        return None
    return SkillResponse.failure(EMPTY_TEXT_MESSAGE, "EMPTY_TEXT")


def placeholder_for(pii_type: PIIType) -> str:
    """기본 치환 문자열 (예: [REDACTED_EMAIL])"""
    return f"[REDACTED_{pii_type.value}]"


def count_by_type(findings: list[PIIFinding]) -> dict[str, int]:
    """유형별 탐지 수 (처음 등장한 순서)"""
    counts: dict[str, int] = {}
    for finding in findings:
        key = finding.pii_type.value
        counts[key] = counts.get(key, 0) + 1
    return counts


def assess_risk(findings: list[PIIFinding]) -> RiskLevel:
    """
    위험도 산정

    - 탐지 없음: NONE
    - SSN/CREDIT_CARD 존재 또는 5개 이상: HIGH
    - 2개 이상: MEDIUM
    - 그 외: LOW
    """
    total = len(findings)
    if total == 0:
        return RiskLevel.NONE
    if any(f.pii_type in HIGH_SENSITIVITY_TYPES for f in findings) or total >= HIGH_RISK_COUNT:
        return RiskLevel.HIGH
    if total >= MEDIUM_RISK_COUNT:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def build_recommendations(counts: dict[str, int], risk_level: RiskLevel) -> list[str]:
    """유형 존재 여부와 위험도에 따른 권고 문구 목록"""
    if not counts:
        return [RECOMMENDATION_SAFE]

    recommendations = [RECOMMENDATION_GENERAL]
    for pii_type, message in TYPE_RECOMMENDATIONS:
        if counts.get(pii_type.value):
            recommendations.append(message)
    if risk_level is RiskLevel.HIGH:
        recommendations.append(RECOMMENDATION_HIGH_RISK)
    return recommendations


def build_report(findings: list[PIIFinding]) -> PIIReport:
    """탐지 결과 집계"""
    counts = count_by_type(findings)
    risk_level = assess_risk(findings)
    return PIIReport(
        total_count=len(findings),
        counts_by_type=counts,
        risk_level=risk_level,
        recommendations=tuple(build_recommendations(counts, risk_level)),
    )


def redact_text(text: str, findings: list[PIIFinding], replacement: str | None = None) -> str:
    """
    탐지 span을 치환 문자열로 교체

    뒤쪽 항목부터 치환하여 앞쪽 항목의 위치가 변하지 않도록 합니다.
    탐지 결과가 없으면 원본 객체를 그대로 반환합니다.

    Args:
        text: 원본 텍스트
        findings: scan_for_pii() 결과
        replacement: 모든 유형에 사용할 치환 문자열 (없으면 [REDACTED_<TYPE>])
    """
    if not findings:
        return text

    redacted = text
    for finding in sorted(findings, key=lambda f: f.start, reverse=True):
        placeholder = replacement or placeholder_for(finding.pii_type)
        redacted = redacted[: finding.start] + placeholder + redacted[finding.end :]
    return redacted


def format_report(report: PIIReport) -> str:
    """리포트 텍스트 생성"""
    lines = [
        "=== PII Analysis Report ===",
        "",
        f"Total PII items found: {report.total_count}",
        f"Risk level: {report.risk_level.value}",
        "",
        "--- Breakdown by Type ---",
    ]

    if report.total_count == 0:
        lines.append("  (none)")
    else:
        lines.extend(f"  {pii_type}: {count}" for pii_type, count in report.counts_by_type.items())

    lines.append("")
    lines.append("--- Recommendations ---")
    lines.extend(f"  {i}. {rec}" for i, rec in enumerate(report.recommendations, start=1))

    return "\n".join(lines)


def detect_pii(text: Any, types: Any = None) -> SkillResponse:
    """
    탐지 결과 목록 반환 (텍스트 변경 없음)

    Example:
        >>> detect_pii("mail: a@b.com").metadata["count"]
        1
    """
    invalid = check_text(text)
    if invalid is not None:
        return invalid

    findings = scan_for_pii(text, types)

    if not findings:
        return SkillResponse.ok(
            "No PII detected in the provided text.",
            action="detect",
            pii_found=False,
            count=0,
            findings=[],
        )

    formatted = [
        f'{i}. [{f.pii_type.value}] "{f.value}" (position: {f.start}-{f.end})'
        for i, f in enumerate(findings, start=1)
    ]
    logger.info(f"PII detect: {len(findings)}개 탐지 ({sorted(count_by_type(findings))})")

    return SkillResponse.ok(
        f"Detected {len(findings)} PII item(s):\n\n" + "\n".join(formatted),
        action="detect",
        pii_found=True,
        count=len(findings),
        findings=[f.to_dict() for f in findings],
    )


def redact_pii(text: Any, types: Any = None, replacement: str | None = None) -> SkillResponse:
    """
    탐지 span을 치환한 텍스트 반환

    Example:
        >>> redact_pii("mail: a@b.com").result
        'mail: [REDACTED_EMAIL]'
    """
    invalid = check_text(text)
    if invalid is not None:
        return invalid

    findings = scan_for_pii(text, types)

    if not findings:
        return SkillResponse.ok(
            text,
            action="redact",
            pii_found=False,
            redacted_count=0,
        )

    types_redacted = list(count_by_type(findings))
    logger.info(f"PII redact: {len(findings)}개 치환 ({types_redacted})")

    return SkillResponse.ok(
        redact_text(text, findings, replacement),
        action="redact",
        pii_found=True,
        redacted_count=len(findings),
        types_redacted=types_redacted,
    )


def report_pii(text: Any, types: Any = None) -> SkillResponse:
    """
    유형별 건수, 위험도, 권고 문구 리포트 반환

    Example:
        >>> report_pii("SSN 123-45-6789").metadata["risk_level"]
        'HIGH'
    """
    invalid = check_text(text)
    if invalid is not None:
        return invalid

    report = build_report(scan_for_pii(text, types))
    logger.info(f"PII report: {report.total_count}개, 위험도 {report.risk_level.value}")

    return SkillResponse.ok(format_report(report), action="report", **report.to_dict())
