"""skillhub 예외 계층.

모든 예외는 에러 코드와 메시지 포맷팅 컨텍스트를 가지며,
러너는 envelope_code와 message로 실패 응답을 만듭니다.
도메인 예외는 코드 prefix(domain)로 구분됩니다.
"""

from typing import Any, ClassVar

from skillhub.lib.errors.codes import ErrorCode, get_envelope_code
from skillhub.lib.errors.formatter import format_error_response, get_error_message


class SkillHubException(Exception):
    """기본 예외.

    Attributes:
        error_code: "CSV-001" 형식 코드
        context: 메시지 포맷팅 인자
    """

    domain: ClassVar[str | None] = None

    def __init__(self, error_code: str | ErrorCode, **context: Any) -> None:
        self.error_code = error_code.value if isinstance(error_code, ErrorCode) else error_code
        self.context = context
        super().__init__(get_error_message(self.error_code, **context))

    @property
    def message(self) -> str:
        return str(self)

    @property
    def envelope_code(self) -> str:
        return get_envelope_code(self.error_code)

    def to_dict(self, lang: str | None = None, include_solutions: bool = True) -> dict[str, Any]:
        """다른 언어로 다시 렌더링한 응답 딕셔너리"""
        return format_error_response(
            self.error_code, lang=lang, include_solutions=include_solutions, **self.context
        )


class SkillError(SkillHubException):
    """스킬 등록/디스패치"""

    domain = "SKILL"


class TabularError(SkillHubException):
    """CSV 입출력"""

    domain = "CSV"


class MemoryStoreError(SkillHubException):
    """메모리 저장소"""

    domain = "MEMORY"


class ProviderError(SkillHubException):
    """외부 제공자 호출"""

    domain = "PROVIDER"


class ConfigError(SkillHubException):
    domain = "CONFIG"


class GeneralError(SkillHubException):
    domain = "GENERAL"


def get_exception_class(error_code: str | ErrorCode) -> type[SkillHubException]:
    """코드 prefix에 해당하는 예외 클래스 (없으면 SkillHubException)"""
    code = error_code.value if isinstance(error_code, ErrorCode) else error_code
    prefix = code.split("-", 1)[0]
    for subclass in SkillHubException.__subclasses__():
        if subclass.domain == prefix:
            return subclass
    return SkillHubException


def wrap_exception(
    error: Exception,
    default_code: str | ErrorCode = ErrorCode.GENERAL_001,
    **context: Any,
) -> SkillHubException:
    """
    임의의 예외를 코드가 있는 예외로 변환 (이미 SkillHubException이면 그대로)

    원래 예외 타입/메시지는 context에 남깁니다.
    """
    if isinstance(error, SkillHubException):
        return error

    context.setdefault("original_error_type", type(error).__name__)
    context.setdefault("original_error_message", str(error))
    return get_exception_class(default_code)(default_code, **context)
