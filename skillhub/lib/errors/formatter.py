"""에러 메시지 렌더링.

메시지 언어는 인자 > ERROR_LANGUAGE 환경 변수 > "en" 순으로 결정됩니다.
"""

import os
from typing import Any

from skillhub.lib.errors.codes import ErrorCode, get_envelope_code
from skillhub.lib.errors.messages import (
    ERROR_MESSAGES,
    get_message_template,
    get_solutions_list,
)

SUPPORTED_LANGUAGES = ("en", "ko")
FALLBACK_LANGUAGE = "en"


def get_default_language() -> str:
    """ERROR_LANGUAGE 값 (지원하지 않는 값이면 en)"""
    lang = os.getenv("ERROR_LANGUAGE", FALLBACK_LANGUAGE).strip().lower()
    return lang if lang in SUPPORTED_LANGUAGES else FALLBACK_LANGUAGE


def _resolve(error_code: str | ErrorCode, lang: str | None) -> tuple[str, str]:
    code = error_code.value if isinstance(error_code, ErrorCode) else error_code
    return code, lang or get_default_language()


def render_template(template: str, context: dict[str, Any]) -> str:
    """템플릿 치환. 누락된 키는 메시지 끝에 표시하고 예외를 던지지 않음"""
    if not context:
        return template
    try:
        return template.format_map(context)
    except KeyError as e:
        return f"{template} (formatting error: {e.args[0]} missing)"


def get_error_message(error_code: str | ErrorCode, lang: str | None = None, **kwargs: Any) -> str:
    """에러 메시지.

    Example:
        >>> get_error_message("CSV-001", file_path="/tmp/a.csv")
        'File not found: /tmp/a.csv'
    """
    code, lang = _resolve(error_code, lang)
    return render_template(get_message_template(code, lang), kwargs)


def get_error_solutions(error_code: str | ErrorCode, lang: str | None = None) -> list[str]:
    code, lang = _resolve(error_code, lang)
    return get_solutions_list(code, lang)


def format_error_response(
    error_code: str | ErrorCode,
    lang: str | None = None,
    include_solutions: bool = True,
    **context: Any,
) -> dict[str, Any]:
    """
    {error_code, error, message[, solutions]} 딕셔너리

    error에는 응답 envelope 코드(INVALID_INPUT 등)가 들어갑니다.
    """
    code, lang = _resolve(error_code, lang)
    response: dict[str, Any] = {
        "error_code": code,
        "error": get_envelope_code(code),
        "message": get_error_message(code, lang, **context),
    }
    if include_solutions:
        response["solutions"] = get_error_solutions(code, lang)
    return response


def get_all_error_codes() -> list[str]:
    return sorted(ERROR_MESSAGES)


def get_error_codes_by_domain(domain: str) -> list[str]:
    """도메인 prefix(CSV, MEMORY 등)에 속한 코드 목록"""
    return [code for code in get_all_error_codes() if code.split("-", 1)[0] == domain]
