"""
설정 스키마 패키지

Pydantic 스키마와, yaml.safe_load가 조용히 덮어쓰는 최상위 중복 키 검사를 제공합니다.
"""

import yaml

from .base import BaseConfig, expand_env_placeholders
from .root import RootConfig, validate_config, validate_config_safe
from .skills import (
    LoggingConfig,
    MemoryConfig,
    ProviderConfig,
    SkillEntryConfig,
    SkillsConfig,
)


def detect_duplicate_keys_in_yaml(yaml_path: str) -> list[str]:
    """
    최상위 중복 키 목록

    Returns:
        ["skills (first: line 1, duplicate: line 5)"] 형식 (없으면 빈 리스트)

    Raises:
        yaml.YAMLError: YAML 문법 오류
    """
    with open(yaml_path, encoding="utf-8") as f:
        root = yaml.compose(f, Loader=yaml.SafeLoader)

    if not isinstance(root, yaml.MappingNode):
        return []

    first_seen: dict[str, int] = {}
    duplicates: list[str] = []
    for key_node, _ in root.value:
        line = key_node.start_mark.line + 1
        key = str(key_node.value)
        if key in first_seen:
            duplicates.append(f"{key} (first: line {first_seen[key]}, duplicate: line {line})")
        else:
            first_seen[key] = line
    return duplicates


__all__ = [
    "BaseConfig",
    "expand_env_placeholders",
    "RootConfig",
    "SkillsConfig",
    "SkillEntryConfig",
    "ProviderConfig",
    "MemoryConfig",
    "LoggingConfig",
    "validate_config",
    "validate_config_safe",
    "detect_duplicate_keys_in_yaml",
]
