"""에러 코드, ko/en 메시지, 예외 계층.

    >>> from skillhub.lib.errors import ErrorCode, TabularError
    >>> raise TabularError(ErrorCode.CSV_001, file_path="/tmp/data.csv")

메시지 언어는 ERROR_LANGUAGE (기본 en).
"""

from skillhub.lib.errors.codes import (
    DEFAULT_ENVELOPE_CODE,
    ENVELOPE_CODES,
    ErrorCode,
    get_envelope_code,
)
from skillhub.lib.errors.exceptions import (
    ConfigError,
    GeneralError,
    MemoryStoreError,
    ProviderError,
    SkillError,
    SkillHubException,
    TabularError,
    get_exception_class,
    wrap_exception,
)
from skillhub.lib.errors.formatter import (
    format_error_response,
    get_all_error_codes,
    get_default_language,
    get_error_codes_by_domain,
    get_error_message,
    get_error_solutions,
    render_template,
)

__all__ = [
    "ErrorCode",
    "ENVELOPE_CODES",
    "DEFAULT_ENVELOPE_CODE",
    "get_envelope_code",
    "SkillHubException",
    "SkillError",
    "TabularError",
    "MemoryStoreError",
    "ProviderError",
    "ConfigError",
    "GeneralError",
    "get_exception_class",
    "wrap_exception",
    "get_error_message",
    "get_error_solutions",
    "format_error_response",
    "get_default_language",
    "render_template",
    "get_all_error_codes",
    "get_error_codes_by_domain",
]
