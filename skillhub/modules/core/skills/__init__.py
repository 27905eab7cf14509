"""
스킬 모듈 - 액션 디스패치 핸들러와 실행기

구성:
- interfaces: SkillResponse envelope, SkillContext, 설정 타입
- factory: SUPPORTED_SKILLS 레지스트리와 SkillFactory
- runner: SkillRunner (지연 로딩, 타임아웃, 예외 변환, 통계)
- transport: 제공자 클라이언트 프로토콜, 타임아웃 요청, httpx 구현
- handlers: excel-handler, pii-redaction, memory-manager, weather-api
"""

from .factory import SUPPORTED_SKILLS, SkillFactory
from .interfaces import (
    SkillConfig,
    SkillContext,
    SkillFunction,
    SkillResponse,
    SkillRunnerConfig,
)
from .runner import SkillRunner
from .transport import (
    HttpProviderClient,
    ProviderClient,
    request_with_timeout,
    resolve_timeout_ms,
)

__all__ = [
    "SkillResponse",
    "SkillContext",
    "SkillConfig",
    "SkillRunnerConfig",
    "SkillFunction",
    "SkillFactory",
    "SUPPORTED_SKILLS",
    "SkillRunner",
    "ProviderClient",
    "HttpProviderClient",
    "resolve_timeout_ms",
    "request_with_timeout",
]
