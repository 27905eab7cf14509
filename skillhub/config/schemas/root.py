"""
최상위 설정 스키마와 검증 함수
"""

from typing import Any

from pydantic import Field, ValidationError

from ...lib.logger import get_logger
from .base import BaseConfig
from .skills import LoggingConfig, MemoryConfig, ProviderConfig, SkillsConfig

logger = get_logger(__name__)


class RootConfig(BaseConfig):
    """
    skills / providers / memory / logging 섹션만 타입 검증하고
    그 밖의 최상위 키(app 등)는 그대로 통과시킵니다.
    """

    skills: SkillsConfig = Field(default_factory=SkillsConfig)
    providers: dict[str, ProviderConfig] = Field(default_factory=dict)
    memory: MemoryConfig = Field(default_factory=MemoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _describe(error: dict[str, Any]) -> str:
    location = " → ".join(str(part) for part in error["loc"])
    return f"[{location}] {error['msg']} (type: {error['type']})"


def validate_config(config_dict: dict[str, Any]) -> tuple[RootConfig | None, list[str]]:
    """
    Returns:
        (검증된 RootConfig 또는 None, 오류 메시지 목록)

    Examples:
        >>> validated, errors = validate_config({"memory": {"file_path": "/tmp/m.json"}})
        >>> validated.memory.file_path
        '/tmp/m.json'
    """
    try:
        return RootConfig.model_validate(config_dict), []
    except ValidationError as e:
        return None, [_describe(error) for error in e.errors()]


def validate_config_safe(
    config_dict: dict[str, Any],
    *,
    raise_on_error: bool = False,
) -> RootConfig | dict[str, Any]:
    """
    검증 실패 시 경고 로그 후 원본 dict 반환 (raise_on_error=True면 ValueError)
    """
    validated, errors = validate_config(config_dict)
    if validated is not None:
        return validated

    logger.warning("config_validation_failed", errors=errors)
    if raise_on_error:
        raise ValueError("Configuration validation failed:\n" + "\n".join(errors))
    return config_dict


__all__ = ["RootConfig", "validate_config", "validate_config_safe"]
