"""
스킬 인터페이스 및 타입 정의

모든 스킬 핸들러는 동일한 시그니처를 따릅니다:
    async def execute(params: dict, context: SkillContext) -> SkillResponse

응답 envelope:
    {"result": str, "metadata": {"success": bool, "error": str | dict, ...}}
"""

from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any


@dataclass
class SkillResponse:
    """
    스킬 실행 결과 envelope

    Attributes:
        result: 사람이 읽을 수 있는 결과 텍스트
        metadata: 구조화된 메타데이터 (success, error, 액션별 필드)
    """

    result: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        """성공 여부"""
        return bool(self.metadata.get("success", False))

    @property
    def error(self) -> Any:
        """실패 시 에러 코드 (문자열 또는 {code, message, retriable} 객체)"""
        return self.metadata.get("error")

    @classmethod
    def ok(cls, result: str, **metadata: Any) -> "SkillResponse":
        """성공 응답 생성"""
        return cls(result=result, metadata={"success": True, **metadata})

    @classmethod
    def failure(cls, result: str, error: Any, **metadata: Any) -> "SkillResponse":
        """실패 응답 생성"""
        return cls(result=result, metadata={"success": False, "error": error, **metadata})

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (직렬화용)"""
        return {"result": self.result, "metadata": dict(self.metadata)}


@dataclass
class SkillContext:
    """
    스킬 실행 컨텍스트

    Attributes:
        provider_client: 외부 API 호출 클라이언트 (우선 사용)
        gateway_client: 플랫폼 게이트웨이 클라이언트 (provider_client 없을 때 사용)
        config: 스킬별 설정 (예: timeout_ms)
        memory_store: memory-manager 스킬이 사용할 저장소
    """

    provider_client: Any = None
    gateway_client: Any = None
    config: dict[str, Any] = field(default_factory=dict)
    memory_store: Any = None

    def resolve_client(self) -> tuple[Any, str] | None:
        """
        사용할 클라이언트 반환

        Returns:
            (클라이언트, "provider" | "gateway"), 둘 다 없으면 None
        """
        if self.provider_client is not None:
            return self.provider_client, "provider"
        if self.gateway_client is not None:
            return self.gateway_client, "gateway"
        return None


@dataclass
class SkillConfig:
    """
    스킬 설정

    YAML의 skills.tools.<이름> 섹션에서 로드되어 스킬별 동작을 제어합니다.

    Attributes:
        name: 스킬 이름 (예: "pii-redaction")
        description: 스킬 설명
        enabled: 활성화 여부
        timeout: 러너 실행 타임아웃 (초)
        parameters: 핸들러 컨텍스트에 전달할 설정
    """

    name: str
    description: str
    enabled: bool = True
    timeout: float = 30.0
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class SkillRunnerConfig:
    """
    스킬 러너 전체 설정

    Attributes:
        enabled: 러너 활성화 여부
        default_timeout: 기본 타임아웃 (초)
        skills: 등록된 스킬 설정 (스킬명 → SkillConfig)
    """

    enabled: bool = True
    default_timeout: float = 30.0
    skills: dict[str, SkillConfig] = field(default_factory=dict)


# 스킬 함수 타입 힌트
# async def execute(params: dict, context: SkillContext) -> SkillResponse
SkillFunction = Callable[..., Coroutine[Any, Any, SkillResponse]]
