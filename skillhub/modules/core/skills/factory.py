"""
SkillFactory - 설정 기반 스킬 러너 팩토리

YAML 설정(skills 섹션)에 따라 스킬을 활성화/비활성화하고
SkillRunner를 생성합니다.

사용 예시:
    from skillhub.modules.core.skills import SkillFactory

    runner = SkillFactory.create(config)
    await runner.initialize()
    response = await runner.execute_skill("pii-redaction", {"action": "detect", "text": "..."})

    SkillFactory.get_supported_skills()
    SkillFactory.list_skills_by_category("data")
"""

from typing import TYPE_CHECKING, Any

from ....lib.logger import configure_logging, get_logger
from .interfaces import SkillConfig, SkillRunnerConfig

if TYPE_CHECKING:
    from .runner import SkillRunner

logger = get_logger(__name__)


# ========================================
# 지원 스킬 레지스트리
# ========================================
# 새 스킬 추가 시 여기에 등록하거나 register_skill() 사용

SUPPORTED_SKILLS: dict[str, dict[str, Any]] = {
    "excel-handler": {
        "category": "data",
        "description": "CSV 파일을 읽고, 쓰고, 숫자 컬럼 통계를 분석합니다",
        "module": "skillhub.modules.core.skills.handlers.excel_handler",
        "function": "execute",
        "default_config": {
            "timeout": 30,
        },
    },
    "pii-redaction": {
        "category": "privacy",
        "description": "텍스트에서 개인정보(PII)를 탐지, 마스킹, 리포트합니다",
        "module": "skillhub.modules.core.skills.handlers.pii_redaction",
        "function": "execute",
        "default_config": {
            "timeout": 10,
        },
    },
    "memory-manager": {
        "category": "memory",
        "description": "JSON 파일 기반 키-값 메모리를 저장, 조회, 검색합니다",
        "module": "skillhub.modules.core.skills.handlers.memory_manager",
        "function": "execute",
        "default_config": {
            "timeout": 10,
        },
    },
    "weather-api": {
        "category": "network",
        "description": "주입된 제공자 클라이언트로 Open-Meteo 날씨 데이터를 조회합니다",
        "module": "skillhub.modules.core.skills.handlers.weather_api",
        "function": "execute",
        "default_config": {
            "timeout": 130,
            "timeout_ms": 30000,
        },
    },
}


class SkillFactory:
    """
    스킬 팩토리

    설정 딕셔너리를 기반으로 SkillRunner를 생성하고
    활성화된 스킬들을 등록합니다.
    """

    @staticmethod
    def create(config: dict[str, Any]) -> "SkillRunner":
        """
        설정 기반 스킬 러너 생성

        Args:
            config: 전체 설정 딕셔너리 (skills 섹션 포함)

        Returns:
            SkillRunner 인스턴스

        Raises:
            ValueError: 스킬 러너가 비활성화된 경우
        """
        logging_config = config.get("logging")
        if logging_config:
            configure_logging(
                level=logging_config.get("level"), log_format=logging_config.get("format")
            )

        skills_config = config.get("skills", {})

        if not skills_config.get("enabled", True):
            raise ValueError("스킬 러너가 비활성화되어 있습니다 (skills.enabled=false)")

        default_timeout = float(skills_config.get("default_timeout", 30.0))
        runner_config = SkillRunnerConfig(enabled=True, default_timeout=default_timeout)

        tools_config = skills_config.get("tools") or {}
        enabled_skills: dict[str, SkillConfig] = {}

        for skill_name, skill_info in SUPPORTED_SKILLS.items():
            skill_yaml = tools_config.get(skill_name) or {}

            # YAML에서 enabled 확인 (기본값: True)
            if not skill_yaml.get("enabled", True):
                logger.debug(f"스킬 비활성화: {skill_name}")
                continue

            # 설정 병합 (YAML > 기본값), timeout은 러너 전용
            default_config = dict(skill_info.get("default_config", {}))
            default_skill_timeout = default_config.pop("timeout", default_timeout)
            merged_params = {**default_config, **(skill_yaml.get("parameters") or {})}

            timeout = skill_yaml.get("timeout") or default_skill_timeout

            enabled_skills[skill_name] = SkillConfig(
                name=skill_name,
                description=skill_yaml.get("description") or skill_info["description"],
                enabled=True,
                timeout=float(timeout),
                parameters=merged_params,
            )
            logger.debug(f"스킬 활성화: {skill_name}")

        runner_config.skills = enabled_skills

        logger.info(
            f"🔧 SkillFactory: {len(enabled_skills)}개 스킬 활성화 "
            f"({list(enabled_skills.keys())})"
        )

        from .runner import SkillRunner

        return SkillRunner(config=runner_config, global_config=config)

    @staticmethod
    def get_supported_skills() -> list[str]:
        """지원하는 모든 스킬 이름 반환"""
        return list(SUPPORTED_SKILLS.keys())

    @staticmethod
    def get_skill_info(skill_name: str) -> dict[str, Any] | None:
        """특정 스킬의 상세 정보 반환"""
        return SUPPORTED_SKILLS.get(skill_name)

    @staticmethod
    def list_skills_by_category(category: str) -> list[str]:
        """
        카테고리별 스킬 목록 반환

        Args:
            category: 스킬 카테고리 (data, privacy, memory, network)
        """
        return [
            name for name, info in SUPPORTED_SKILLS.items() if info.get("category") == category
        ]

    @staticmethod
    def register_skill(
        skill_name: str,
        category: str,
        description: str,
        module: str,
        function: str = "execute",
        default_config: dict[str, Any] | None = None,
    ) -> None:
        """
        새 스킬 동적 등록 (플러그인 방식)

        Args:
            skill_name: 스킬 이름
            category: 카테고리
            description: 설명
            module: 모듈 경로
            function: 함수 이름
            default_config: 기본 설정 (timeout 키는 러너 타임아웃)
        """
        SUPPORTED_SKILLS[skill_name] = {
            "category": category,
            "description": description,
            "module": module,
            "function": function,
            "default_config": default_config or {},
        }
        logger.info(f"📦 스킬 등록: {skill_name} ({category})")
