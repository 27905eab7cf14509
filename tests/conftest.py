"""
테스트 공통 설정 및 픽스처

pytest conftest.py - 모든 테스트에서 공유되는 설정과 픽스처 정의.
"""

import os
import sys
from pathlib import Path

import pytest

# 프로젝트 루트 경로를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def pytest_configure(config: pytest.Config) -> None:
    """
    pytest 설정 훅

    테스트 환경임을 명시하고 에러 메시지 언어를 고정합니다.
    """
    os.environ["ENVIRONMENT"] = "test"
    os.environ.pop("ERROR_LANGUAGE", None)


@pytest.fixture(scope="session")
def project_root_path() -> Path:
    """프로젝트 루트 경로"""
    return project_root
