"""
출력 문자열의 자격 증명 마스킹 유틸리티

스킬 핸들러가 반환하는 결과 텍스트와 에러 메시지에서
API 키, 토큰, 비밀번호 등 운영자 자격 증명을 제거합니다.
사용자 PII 처리는 privacy 모듈이 담당하며 이 모듈과 목적이 다릅니다.
"""

import re
from typing import Any

REDACTION_MARKER = "[REDACTED]"

# 자격 증명 패턴: 키워드 + ':' 또는 '=' + 공백이 아닌 값
SENSITIVE_PATTERNS = [
    r"(?:api[_-]?key|token|secret|password|authorization|bearer)\s*[:=]\s*\S+",
]

COMPILED_SENSITIVE_PATTERNS = [
    re.compile(pattern, re.IGNORECASE) for pattern in SENSITIVE_PATTERNS
]


def redact_sensitive(text: Any) -> Any:
    """
    문자열에서 자격 증명 값을 REDACTION_MARKER로 치환

    문자열이 아닌 값은 그대로 반환합니다.

    Example:
        >>> redact_sensitive("failed: api_key=abc123 rejected")
        "failed: [REDACTED] rejected"
    """
    if not isinstance(text, str):
        return text

    cleaned = text
    for pattern in COMPILED_SENSITIVE_PATTERNS:
        cleaned = pattern.sub(REDACTION_MARKER, cleaned)
    return cleaned
