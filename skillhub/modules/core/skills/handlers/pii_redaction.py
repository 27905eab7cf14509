"""
pii-redaction 스킬

PII 엔진(detect / redact / report)의 envelope 래퍼.
검증 실패와 처리 오류를 예외 대신 실패 envelope로 반환합니다.

보안 주의: 탐지된 PII 값은 로그에 남기지 않습니다.
"""

from typing import Any

from .....lib.logger import get_logger
from ...privacy import detect_pii, redact_pii, report_pii
from ..interfaces import SkillContext, SkillResponse

logger = get_logger(__name__)

VALID_ACTIONS = ("detect", "redact", "report")


async def execute(params: dict[str, Any], context: SkillContext | None = None) -> SkillResponse:
    """
    pii-redaction 진입점

    Args:
        params:
            action: "detect" | "redact" | "report"
            text: 검사할 텍스트
            types: 유형 필터 (대소문자 무시, 없으면 전체)
            replacement: redact 치환 문자열 (없으면 [REDACTED_<TYPE>])
    """
    action = params.get("action")
    text = params.get("text")

    # 액션 검증이 먼저, 텍스트(EMPTY_TEXT) 검증은 각 뷰에서 수행
    if not action or action not in VALID_ACTIONS:
        return SkillResponse.failure(
            f'Error: Invalid action "{action}". Must be one of: {", ".join(VALID_ACTIONS)}',
            "INVALID_ACTION",
        )

    types = params.get("types") or None
    if isinstance(params.get("types"), list):
        # 빈 목록은 "유형 없음"으로 취급 (탐지 결과 없음)
        types = params["types"]

    try:
        if action == "detect":
            return detect_pii(text, types)
        if action == "redact":
            return redact_pii(text, types, params.get("replacement") or None)
        return report_pii(text, types)
    except Exception as e:
        logger.error("PII 처리 실패", action=action, error_type=type(e).__name__)
        return SkillResponse.failure(
            f"Error during {action} operation: {e}",
            "OPERATION_FAILED",
            detail=str(e),
        )
