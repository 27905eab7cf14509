"""
계층형 YAML 설정 로더

적용 순서 (뒤가 앞을 덮어씀):
    1. base.yaml (imports 키로 나열된 파일 포함)
    2. environments/<environment>.yaml
    3. ${VAR:-default} 치환
    4. ENV_OVERRIDES에 등록된 환경 변수

검증(Pydantic)에 실패해도 기본적으로 원본 dict를 돌려줘 러너가 기동할 수 있게 합니다.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from ..config.schemas import (
    detect_duplicate_keys_in_yaml,
    expand_env_placeholders,
    validate_config_safe,
)
from .environment import get_environment_name
from .errors import ConfigError, ErrorCode
from .logger import get_logger

logger = get_logger(__name__)

PACKAGE_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

# 환경 변수 → 설정 키 경로
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FORMAT": ("logging", "format"),
    "MEMORY_FILE_PATH": ("memory", "file_path"),
    "SKILL_DEFAULT_TIMEOUT": ("skills", "default_timeout"),
    "WEATHER_API_BASE_URL": ("providers", "weather-api", "base_url"),
    "WEATHER_API_TIMEOUT_MS": ("providers", "weather-api", "timeout_ms"),
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """딕셔너리는 재귀 병합, 그 외 값은 override가 우선"""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def coerce_env_value(raw: str) -> Any:
    """환경 변수 문자열을 bool/int/float로 변환 (변환 불가 시 문자열 그대로)"""
    lowered = raw.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


class ConfigLoader:
    """
    설정 로더

    Args:
        base_path: base.yaml이 있는 디렉토리 (기본: 패키지 config/)
        environment: 환경 이름 (기본: ENVIRONMENT/NODE_ENV 감지)
    """

    def __init__(self, base_path: Path | None = None, environment: str | None = None) -> None:
        # 작업 디렉토리의 .env (이미 설정된 환경 변수는 유지)
        load_dotenv(override=False)

        self.base_path = Path(base_path) if base_path is not None else PACKAGE_CONFIG_DIR
        self.environment = environment or get_environment_name()

    @property
    def base_file(self) -> Path:
        return self.base_path / "base.yaml"

    @property
    def environment_file(self) -> Path:
        return self.base_path / "environments" / f"{self.environment}.yaml"

    def load_config(
        self,
        validate: bool = True,
        raise_on_validation_error: bool = False,
    ) -> dict[str, Any]:
        """
        설정 로드

        Args:
            validate: Pydantic 검증 수행 여부
            raise_on_validation_error: True면 검증 실패 시 CONFIG-003

        Raises:
            ConfigError: CONFIG-001 (base.yaml 없음), CONFIG-002 (중복 키),
                CONFIG-003 (엄격 검증 실패), CONFIG-004 (그 외 로드 실패)
        """
        if not self.base_file.exists():
            raise ConfigError(
                ErrorCode.CONFIG_001,
                searched_paths=[str(self.base_file)],
                environment=self.environment,
            )

        try:
            config = self._read_layers()
        except ConfigError:
            raise
        except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
            raise ConfigError(
                ErrorCode.CONFIG_004,
                config_path=str(self.base_path),
                environment=self.environment,
                original_error=str(e),
            ) from e

        logger.debug("config_loaded", environment=self.environment, sections=sorted(config))

        if not validate:
            return config

        try:
            result = validate_config_safe(config, raise_on_error=raise_on_validation_error)
        except ValueError as e:
            raise ConfigError(
                ErrorCode.CONFIG_003,
                validation_errors=str(e),
                environment=self.environment,
            ) from e

        if isinstance(result, dict):
            return result
        return result.model_dump(by_alias=True)

    def _read_layers(self) -> dict[str, Any]:
        config = self._read_file(self.base_file)
        if self.environment_file.exists():
            config = deep_merge(config, self._read_file(self.environment_file))

        config = expand_env_placeholders(config)
        self._apply_env_overrides(config)
        return config

    def _read_file(self, path: Path) -> dict[str, Any]:
        """YAML 한 파일 로드. imports는 현재 파일 기준 상대 경로"""
        duplicates = detect_duplicate_keys_in_yaml(str(path))
        if duplicates:
            raise ConfigError(ErrorCode.CONFIG_002, config_file=str(path), duplicate_keys=duplicates)

        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise TypeError(f"{path.name}: top-level YAML must be a mapping")

        imports = loaded.pop("imports", None) or []
        for entry in imports:
            target = Path(entry)
            if not target.is_absolute():
                target = path.parent / target
            if not target.exists():
                logger.warning("config_import_missing", path=str(target))
                continue
            loaded = deep_merge(loaded, self._read_file(target))
        return loaded

    def _apply_env_overrides(self, config: dict[str, Any]) -> None:
        for variable, key_path in ENV_OVERRIDES.items():
            raw = os.getenv(variable)
            if raw is None:
                continue

            section = config
            for key in key_path[:-1]:
                if not isinstance(section.get(key), dict):
                    section[key] = {}
                section = section[key]
            section[key_path[-1]] = coerce_env_value(raw)


def load_config(validate: bool = True, raise_on_validation_error: bool = False) -> dict[str, Any]:
    """패키지 기본 설정 디렉토리와 감지된 환경으로 설정 로드"""
    return ConfigLoader().load_config(
        validate=validate, raise_on_validation_error=raise_on_validation_error
    )
