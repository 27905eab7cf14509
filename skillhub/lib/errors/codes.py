"""에러 코드 정의 모듈.

모든 skillhub 에러 코드를 Enum으로 정의합니다.
도메인별로 그룹화되어 있어 에러 분류 및 추적이 용이합니다.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """skillhub 에러 코드 Enum.

    형식: {DOMAIN}-{NUMBER}
    - SKILL: 스킬 등록/디스패치
    - CSV: CSV 읽기/쓰기/분석
    - MEMORY: 키-값 메모리 저장소
    - PROVIDER: 외부 제공자 호출
    - CONFIG: 설정 관리
    - GENERAL: 일반 오류
    """

    # SKILL (스킬 디스패치) - 6개
    SKILL_001 = "SKILL-001"  # 등록되지 않은 스킬
    SKILL_002 = "SKILL-002"  # 비활성화된 스킬
    SKILL_003 = "SKILL-003"  # 필수 파라미터 누락
    SKILL_004 = "SKILL-004"  # 지원하지 않는 액션
    SKILL_005 = "SKILL-005"  # 핸들러 모듈 로딩 실패
    SKILL_006 = "SKILL-006"  # 스킬 실행 타임아웃

    # CSV (CSV 처리) - 5개
    CSV_001 = "CSV-001"  # 파일 없음
    CSV_002 = "CSV-002"  # write 액션 data 누락
    CSV_003 = "CSV-003"  # data JSON 파싱 실패
    CSV_004 = "CSV-004"  # data가 비어있지 않은 객체 배열이 아님
    CSV_005 = "CSV-005"  # 파일 읽기 실패

    # MEMORY (메모리 저장소) - 4개
    MEMORY_001 = "MEMORY-001"  # key 누락
    MEMORY_002 = "MEMORY-002"  # value 누락
    MEMORY_003 = "MEMORY-003"  # query 누락
    MEMORY_004 = "MEMORY-004"  # 메모리 파일 로드 실패

    # PROVIDER (외부 제공자) - 4개
    PROVIDER_001 = "PROVIDER-001"  # 제공자 클라이언트 미설정
    PROVIDER_002 = "PROVIDER-002"  # 요청 타임아웃
    PROVIDER_003 = "PROVIDER-003"  # 업스트림 오류
    PROVIDER_004 = "PROVIDER-004"  # 안전하지 않은 URL 차단

    # CONFIG (설정 관리) - 4개
    CONFIG_001 = "CONFIG-001"  # 설정 파일 없음
    CONFIG_002 = "CONFIG-002"  # YAML 중복 키
    CONFIG_003 = "CONFIG-003"  # 설정 검증 실패
    CONFIG_004 = "CONFIG-004"  # 설정 로드 실패

    # GENERAL (일반) - 2개
    GENERAL_001 = "GENERAL-001"  # 예상치 못한 오류
    GENERAL_002 = "GENERAL-002"  # 잘못된 입력


# 에러 코드 → 응답 envelope 에러 코드 매핑
# 매핑되지 않은 코드는 OPERATION_FAILED로 보고
ENVELOPE_CODES: dict[str, str] = {
    "SKILL-001": "SKILL_NOT_FOUND",
    "SKILL-002": "SKILL_DISABLED",
    "SKILL-003": "INVALID_INPUT",
    "SKILL-004": "INVALID_ACTION",
    "SKILL-006": "TIMEOUT",
    "CSV-002": "INVALID_INPUT",
    "CSV-003": "INVALID_INPUT",
    "CSV-004": "INVALID_INPUT",
    "MEMORY-001": "INVALID_INPUT",
    "MEMORY-002": "INVALID_INPUT",
    "MEMORY-003": "INVALID_INPUT",
    "PROVIDER-001": "PROVIDER_NOT_CONFIGURED",
    "PROVIDER-002": "TIMEOUT",
    "PROVIDER-003": "UPSTREAM_ERROR",
    "PROVIDER-004": "UPSTREAM_ERROR",
    "GENERAL-002": "INVALID_INPUT",
}

DEFAULT_ENVELOPE_CODE = "OPERATION_FAILED"


def get_envelope_code(error_code: str | ErrorCode) -> str:
    """에러 코드에 해당하는 envelope 에러 코드 반환"""
    code_str = error_code.value if isinstance(error_code, ErrorCode) else error_code
    return ENVELOPE_CODES.get(code_str, DEFAULT_ENVELOPE_CODE)
