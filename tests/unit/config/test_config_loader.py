"""
설정 로더 및 스키마 테스트

테스트 시나리오:
1. base.yaml + 환경별 설정 병합
2. ${VAR:-default} 치환과 환경 변수 오버라이드
3. 파일 없음 / 중복 키 / 검증 실패 / 로드 실패 에러 코드
4. Pydantic 스키마 검증
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from skillhub.config.schemas import (
    LoggingConfig,
    ProviderConfig,
    SkillEntryConfig,
    detect_duplicate_keys_in_yaml,
    validate_config,
    validate_config_safe,
)
from skillhub.lib.config_loader import ConfigLoader, coerce_env_value, deep_merge
from skillhub.lib.errors import ConfigError
from skillhub.modules.core.skills import SkillFactory


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "LOG_LEVEL",
        "LOG_FORMAT",
        "MEMORY_FILE_PATH",
        "SKILL_DEFAULT_TIMEOUT",
        "WEATHER_API_BASE_URL",
        "WEATHER_API_TIMEOUT_MS",
    ):
        monkeypatch.delenv(key, raising=False)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.usefixtures("clean_env")
class TestConfigLoader:
    """ConfigLoader 테스트"""

    def test_packaged_config_for_test_environment(self) -> None:
        """패키지 기본 설정 + test 환경 병합"""
        config = ConfigLoader(environment="test").load_config()

        assert config["logging"]["level"] == "WARNING"
        assert config["skills"]["default_timeout"] == 5.0
        assert config["skills"]["tools"]["weather-api"]["parameters"] == {"timeout_ms": 30000}
        assert config["memory"]["file_path"] == ".pytest_data/memory.json"
        assert config["providers"]["weather-api"]["route_base_urls"]["/v1/archive"] == (
            "https://archive-api.open-meteo.com"
        )

    def test_loaded_config_builds_runner(self) -> None:
        """로드된 설정으로 러너 생성"""
        config = ConfigLoader(environment="test").load_config()

        runner = SkillFactory.create(config)

        assert runner.get_enabled_skills() == [
            "excel-handler",
            "pii-redaction",
            "memory-manager",
            "weather-api",
        ]
        assert runner.get_skill_config("pii-redaction").timeout == 10.0

    def test_env_substitution_and_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """환경 변수 치환 및 오버라이드 (타입 변환 포함)"""
        monkeypatch.setenv("WEATHER_API_BASE_URL", "https://weather.example.com")
        monkeypatch.setenv("WEATHER_API_TIMEOUT_MS", "15000")
        monkeypatch.setenv("MEMORY_FILE_PATH", "/var/data/memory.json")

        config = ConfigLoader(environment="development").load_config()

        provider = config["providers"]["weather-api"]
        assert provider["base_url"] == "https://weather.example.com"
        assert provider["timeout_ms"] == 15000
        assert config["memory"]["file_path"] == "/var/data/memory.json"
        assert config["logging"]["level"] == "DEBUG"

    def test_imports_are_merged(self, tmp_path: Path) -> None:
        """imports 키로 다른 YAML 병합"""
        _write(tmp_path / "base.yaml", "imports:\n  - extra.yaml\nmemory:\n  file_path: a.json\n")
        _write(tmp_path / "extra.yaml", "app:\n  name: demo\n")

        config = ConfigLoader(base_path=tmp_path, environment="test").load_config(validate=False)

        assert config == {"memory": {"file_path": "a.json"}, "app": {"name": "demo"}}

    def test_missing_base_file(self, tmp_path: Path) -> None:
        """base.yaml 없음 → CONFIG-001"""
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(base_path=tmp_path, environment="test").load_config()

        assert exc_info.value.error_code == "CONFIG-001"

    def test_duplicate_top_level_keys(self, tmp_path: Path) -> None:
        """최상위 중복 키 → CONFIG-002"""
        _write(tmp_path / "base.yaml", "memory:\n  file_path: a\nmemory:\n  file_path: b\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(base_path=tmp_path, environment="test").load_config()

        assert exc_info.value.error_code == "CONFIG-002"

    def test_duplicate_keys_in_environment_file(self, tmp_path: Path) -> None:
        """환경별 파일의 중복 키도 CONFIG-002"""
        _write(tmp_path / "base.yaml", "memory:\n  file_path: a\n")
        _write(tmp_path / "environments" / "test.yaml", "logging: {}\nlogging: {}\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(base_path=tmp_path, environment="test").load_config()

        assert exc_info.value.error_code == "CONFIG-002"

    def test_missing_import_is_skipped(self, tmp_path: Path) -> None:
        """존재하지 않는 import 파일은 건너뜀"""
        _write(tmp_path / "base.yaml", "imports:\n  - nope.yaml\nmemory:\n  file_path: a.json\n")

        config = ConfigLoader(base_path=tmp_path, environment="test").load_config(validate=False)

        assert config == {"memory": {"file_path": "a.json"}}

    def test_unresolved_placeholder_is_kept(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """기본값 없는 미정의 변수는 자리표시자 유지, 문자열 중간 치환 지원"""
        monkeypatch.delenv("SKILLHUB_UNSET", raising=False)
        monkeypatch.setenv("SKILLHUB_DIR", "/srv")
        _write(
            tmp_path / "base.yaml",
            "memory:\n  file_path: ${SKILLHUB_DIR}/memory.json\napp:\n  token: ${SKILLHUB_UNSET}\n",
        )

        config = ConfigLoader(base_path=tmp_path, environment="test").load_config(validate=False)

        assert config["memory"]["file_path"] == "/srv/memory.json"
        assert config["app"]["token"] == "${SKILLHUB_UNSET}"

    def test_strict_validation_failure(self, tmp_path: Path) -> None:
        """엄격 모드 검증 실패 → CONFIG-003, 기본 모드는 원본 dict"""
        _write(tmp_path / "base.yaml", "skills:\n  default_timeout: -1\n")
        loader = ConfigLoader(base_path=tmp_path, environment="test")

        with pytest.raises(ConfigError) as exc_info:
            loader.load_config(raise_on_validation_error=True)

        assert exc_info.value.error_code == "CONFIG-003"
        assert loader.load_config() == {"skills": {"default_timeout": -1}}

    def test_broken_yaml(self, tmp_path: Path) -> None:
        """YAML 문법 오류 → CONFIG-004"""
        _write(tmp_path / "base.yaml", "memory: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(base_path=tmp_path, environment="test").load_config()

        assert exc_info.value.error_code == "CONFIG-004"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("False", False), ("42", 42), ("1.5", 1.5), ("text", "text")],
    )
    def test_coerce_env_value(self, raw: str, expected: object) -> None:
        """환경 변수 값 타입 변환"""
        assert coerce_env_value(raw) == expected

    def test_deep_merge(self) -> None:
        """중첩 딕셔너리는 병합, 나머지는 덮어쓰기"""
        base = {"skills": {"tools": {"a": {"enabled": True}}, "default_timeout": 30}, "x": [1]}
        override = {"skills": {"tools": {"a": {"timeout": 5}}}, "x": [2]}

        assert deep_merge(base, override) == {
            "skills": {"tools": {"a": {"enabled": True, "timeout": 5}}, "default_timeout": 30},
            "x": [2],
        }
        assert base["skills"]["tools"]["a"] == {"enabled": True}


class TestSchemas:
    """Pydantic 스키마 테스트"""

    def test_provider_base_url(self) -> None:
        """http/https만 허용, 끝 슬래시 제거"""
        assert ProviderConfig(base_url="https://api.example.com/").base_url == "https://api.example.com"
        with pytest.raises(ValidationError):
            ProviderConfig(base_url="ftp://example.com")

    def test_provider_timeout_range(self) -> None:
        """timeout_ms는 0 초과 120000 이하"""
        with pytest.raises(ValidationError):
            ProviderConfig(base_url="https://a.io", timeout_ms=120001)

    def test_logging_level_is_normalized(self) -> None:
        """소문자 로그 레벨 허용"""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_skill_entry_defaults(self) -> None:
        """스킬 설정 기본값"""
        entry = SkillEntryConfig()

        assert entry.enabled is True
        assert entry.timeout is None
        assert entry.parameters == {}

    def test_env_placeholder_in_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """필드 값의 ${VAR:-default} 치환"""
        monkeypatch.delenv("SKILLHUB_TEST_PATH", raising=False)
        validated, errors = validate_config({"memory": {"file_path": "${SKILLHUB_TEST_PATH:-m.json}"}})

        assert errors == []
        assert validated.memory.file_path == "m.json"

    def test_validation_errors_are_reported(self) -> None:
        """검증 오류 메시지에 위치 포함"""
        validated, errors = validate_config({"skills": {"tools": {"x": {"timeout": 0}}}})

        assert validated is None
        assert "skills → tools → x → timeout" in errors[0]

    def test_validate_config_safe_raises_when_strict(self) -> None:
        """엄격 모드 ValueError"""
        with pytest.raises(ValueError):
            validate_config_safe({"memory": {"file_path": ""}}, raise_on_error=True)

    def test_detect_duplicate_keys(self, tmp_path: Path) -> None:
        """최상위 중복 키 탐지"""
        path = _write(tmp_path / "dup.yaml", "a: 1\nb:\n  a: 2\na: 3\n")

        assert detect_duplicate_keys_in_yaml(str(path)) == ["a (first: line 1, duplicate: line 4)"]
