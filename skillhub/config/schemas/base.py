"""
설정 스키마 공통 부모 클래스와 ${VAR:-default} 치환
"""

import os
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# ${NAME} 또는 ${NAME:-default}
ENV_PLACEHOLDER_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def expand_env_placeholders(value: Any) -> Any:
    """
    문자열/리스트/딕셔너리 안의 환경 변수 자리표시자를 재귀적으로 치환합니다.

    기본값 없이 정의되지 않은 변수는 자리표시자를 그대로 둡니다.
    """
    if isinstance(value, str):

        def _replace(match: re.Match[str]) -> str:
            name, default = match.group(1), match.group(2)
            resolved = os.getenv(name)
            if resolved is not None:
                return resolved
            return default if default is not None else match.group(0)

        return ENV_PLACEHOLDER_PATTERN.sub(_replace, value)
    if isinstance(value, dict):
        return {key: expand_env_placeholders(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_placeholders(item) for item in value]
    return value


class BaseConfig(BaseModel):
    """
    모든 설정 섹션의 기본 클래스

    알 수 없는 키는 보존하고(extra="allow"), 모든 필드 값은 검증 전에
    환경 변수 치환을 거칩니다.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _expand_placeholders(cls, value: Any) -> Any:
        return expand_env_placeholders(value)
