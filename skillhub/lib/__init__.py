"""
Library package initialization

공통 인프라: 로거, 에러 코드/예외, 설정 로더, 환경 감지, 출력 자격 증명 마스킹.
설정 로더는 config.schemas와의 순환 import를 피하기 위해
skillhub.lib.config_loader에서 직접 import합니다.
"""

from .logger import configure_logging, get_logger
from .secret_redactor import redact_sensitive

__all__ = [
    "configure_logging",
    "get_logger",
    "redact_sensitive",
]
