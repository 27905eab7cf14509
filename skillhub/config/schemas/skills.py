"""
스킬/제공자/메모리 설정 스키마

skills, providers, memory, logging 섹션을 검증합니다.
"""

from typing import Any, Literal

from pydantic import Field, field_validator

from .base import BaseConfig


class SkillEntryConfig(BaseConfig):
    """개별 스킬 설정 (skills.tools.<이름>)"""

    enabled: bool = Field(default=True, description="스킬 활성화 여부")
    timeout: float | None = Field(
        default=None,
        gt=0,
        le=600,
        description="러너 실행 타임아웃 (초). None이면 default_timeout 사용",
    )
    description: str | None = Field(default=None, description="스킬 설명 (레지스트리 기본값 덮어쓰기)")
    parameters: dict[str, Any] = Field(default_factory=dict, description="핸들러 컨텍스트 설정")


class SkillsConfig(BaseConfig):
    """스킬 러너 설정 (skills 섹션)"""

    enabled: bool = Field(default=True, description="스킬 러너 전체 활성화 여부")
    default_timeout: float = Field(default=30.0, gt=0, le=600, description="기본 타임아웃 (초)")
    tools: dict[str, SkillEntryConfig] = Field(default_factory=dict, description="스킬별 설정")


class ProviderConfig(BaseConfig):
    """외부 제공자 HTTP 설정 (providers.<이름>)"""

    base_url: str = Field(..., description="기본 URL")
    route_base_urls: dict[str, str] = Field(
        default_factory=dict,
        description="경로 prefix별 기본 URL (예: /v1/archive → archive 호스트)",
    )
    timeout_ms: int = Field(default=30000, gt=0, le=120000, description="요청 타임아웃 (ms)")
    headers: dict[str, str] = Field(default_factory=dict, description="추가 요청 헤더")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """http/https URL만 허용"""
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {value!r}")
        return value.rstrip("/")


class MemoryConfig(BaseConfig):
    """메모리 저장소 설정 (memory 섹션)"""

    file_path: str = Field(default="data/memory.json", min_length=1, description="JSON 저장 파일 경로")


class LoggingConfig(BaseConfig):
    """로깅 설정 (logging 섹션)"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        """소문자 로그 레벨 허용"""
        if isinstance(value, str):
            return value.upper()
        return value
