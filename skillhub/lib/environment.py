"""
실행 환경 판별

ENVIRONMENT가 설정되어 있으면 그 값을, 없으면 NODE_ENV를 따릅니다.
설정 로더는 get_environment_name() 결과로 environments/<name>.yaml을 선택합니다.
"""

import os

from .logger import get_logger

logger = get_logger(__name__)

KNOWN_ENVIRONMENTS = ("development", "test", "production")

# 별칭 → 정규 환경 이름
_ALIASES = {
    "prod": "production",
    "production": "production",
    "dev": "development",
    "local": "development",
    "development": "development",
    "test": "test",
}


def _raw_environment() -> tuple[str, str] | None:
    """(변수 이름, 소문자 값) 반환. ENVIRONMENT가 비어 있지 않으면 NODE_ENV는 보지 않음"""
    for variable in ("ENVIRONMENT", "NODE_ENV"):
        value = os.getenv(variable, "").strip().lower()
        if value:
            return variable, value
    return None


def is_production_environment() -> bool:
    """운영 환경 여부"""
    raw = _raw_environment()
    if raw is None:
        return False

    variable, value = raw
    if _ALIASES.get(value) == "production":
        logger.debug("production_environment_detected", source=variable)
        return True
    return False


def get_environment_name() -> str:
    """
    설정 파일 선택용 환경 이름

    알 수 없는 값(staging 등)은 development로 간주합니다.

    Returns:
        "development", "test", "production" 중 하나
    """
    raw = _raw_environment()
    if raw is None:
        return "development"
    return _ALIASES.get(raw[1], "development")
