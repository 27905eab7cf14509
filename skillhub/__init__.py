"""
skillhub - 액션 기반 스킬 핸들러 모음

각 스킬은 {action, ...} 요청을 검증하고 로컬 연산 또는 단일 외부 호출을 수행한 뒤
{result, metadata} envelope을 반환합니다.

핵심 엔진:
- modules.core.tabular: CSV 파서/라이터
- modules.core.privacy: PII 탐지/마스킹/리포트
"""

__version__ = "1.0.0"
