"""
개인정보 보호 모듈 (PII 탐지/마스킹/리포트)

정규식 + 검증 함수 기반의 PII 엔진:
- scan_for_pii: 유형 필터 적용, 검증, 겹침 제거된 탐지 목록
- detect_pii / redact_pii / report_pii: 탐지 결과의 세 가지 뷰

탐지 대상:
- EMAIL, PHONE, SSN, CREDIT_CARD (Luhn), IP_ADDRESS, DATE_OF_BIRTH

사용 예시:
    >>> from skillhub.modules.core.privacy import redact_pii
    >>> redact_pii("Call 555-123-4567 or mail a@b.com").result
    'Call [REDACTED_PHONE] or mail [REDACTED_EMAIL]'
"""

from .models import HIGH_SENSITIVITY_TYPES, PIIFinding, PIIReport, PIIType, RiskLevel
from .patterns import (
    PII_PATTERNS,
    PatternRule,
    get_rule,
    is_plausible_date,
    is_valid_ip_address,
    is_valid_phone,
    is_valid_ssn,
    luhn_check,
)
from .scanner import normalize_types, resolve_overlaps, scan_for_pii, select_rules
from .views import (
    EMPTY_TEXT_MESSAGE,
    assess_risk,
    build_recommendations,
    build_report,
    check_text,
    detect_pii,
    format_report,
    redact_pii,
    redact_text,
    report_pii,
)

__all__ = [
    # models
    "PIIType",
    "RiskLevel",
    "PIIFinding",
    "PIIReport",
    "HIGH_SENSITIVITY_TYPES",
    # patterns
    "PatternRule",
    "PII_PATTERNS",
    "get_rule",
    "luhn_check",
    "is_valid_phone",
    "is_valid_ssn",
    "is_valid_ip_address",
    "is_plausible_date",
    # scanner
    "scan_for_pii",
    "select_rules",
    "normalize_types",
    "resolve_overlaps",
    # views
    "EMPTY_TEXT_MESSAGE",
    "check_text",
    "detect_pii",
    "redact_pii",
    "report_pii",
    "redact_text",
    "build_report",
    "format_report",
    "assess_risk",
    "build_recommendations",
]
