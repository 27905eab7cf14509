"""
로깅 설정 테스트
"""

import logging

import pytest

from skillhub.lib.logger import configure_logging, get_logger
from skillhub.modules.core.skills import SkillFactory


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


class TestConfigureLogging:
    """configure_logging 테스트"""

    def test_level_is_applied_case_insensitively(self) -> None:
        configure_logging(level="debug", log_format="json")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging(level="chatty", log_format="console")

        assert logging.getLogger().level == logging.INFO

    def test_env_level_used_when_not_given(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """인자 없으면 LOG_LEVEL 사용"""
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        configure_logging()

        assert logging.getLogger().level == logging.ERROR

    def test_noisy_libraries_are_quieted(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_factory_applies_logging_section(self) -> None:
        """설정의 logging 섹션이 러너 생성 시 적용됨"""
        SkillFactory.create({"logging": {"level": "WARNING", "format": "console"}})

        assert logging.getLogger().level == logging.WARNING

    def test_get_logger_logs_without_error(self) -> None:
        configure_logging(level="INFO", log_format="json")

        get_logger("skillhub.test").info("logged", key="value")
