"""
구조화된 로깅 (structlog + 표준 logging)

모듈 import 시 환경 변수(LOG_LEVEL, LOG_FORMAT, LOG_DIR) 기준으로 한 번 설정되고,
설정 파일의 logging 섹션이 로드되면 configure_logging()으로 다시 적용됩니다.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, cast

import structlog

SERVICE_NAME = "skillhub"
_QUIET_LIBRARIES = ("httpx", "httpcore", "chardet")


def _current_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("NODE_ENV") or "development").lower()


def _service_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """서비스/환경/프로세스 정보를 모든 이벤트에 추가"""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", _current_environment())
    event_dict.setdefault("pid", os.getpid())
    return event_dict


def _build_handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    # 파일 로그는 LOG_DIR이 지정된 비운영 환경에서만
    log_dir = os.getenv("LOG_DIR")
    if log_dir and _current_environment() not in ("production", "prod"):
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path / f"{SERVICE_NAME}.log", encoding="utf-8"))
    return handlers


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    로깅 설정 적용

    Args:
        level: 로그 레벨 이름 (None이면 LOG_LEVEL, 운영 환경 기본 WARNING)
        log_format: "console" 또는 "json" (None이면 LOG_FORMAT)
    """
    if level is None:
        is_production = _current_environment() in ("production", "prod")
        level = os.getenv("LOG_LEVEL", "WARNING" if is_production else "INFO")
    if log_format is None:
        log_format = os.getenv("LOG_FORMAT", "console")

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(message)s", handlers=_build_handlers())
    root.setLevel(numeric_level)

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if log_format.lower() == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _service_context,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # 설정 재적용 시 기존 모듈 로거도 새 렌더러를 사용
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """구조화된 로거 반환"""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name or SERVICE_NAME))


configure_logging()
