"""에러 코드별 ko/en 메시지 템플릿과 해결 방법."""

from typing import Any

# 에러 메시지 저장소: {error_code: {"ko": "한국어 메시지", "en": "English message"}}
ERROR_MESSAGES: dict[str, dict[str, str]] = {
    # SKILL (스킬 디스패치)
    "SKILL-001": {
        "ko": "등록되지 않은 스킬입니다: {skill_name}",
        "en": "Unknown skill: {skill_name}",
    },
    "SKILL-002": {
        "ko": "비활성화된 스킬입니다: {skill_name}",
        "en": "Skill is disabled: {skill_name}",
    },
    "SKILL-003": {
        "ko": "{parameters} 파라미터가 필요합니다",
        "en": "Parameters {parameters} are required",
    },
    "SKILL-004": {
        "ko": "지원하지 않는 액션입니다: {action}. 지원 액션: {supported}",
        "en": "Unknown action: {action}. Supported actions: {supported}",
    },
    "SKILL-005": {
        "ko": "스킬 핸들러를 로드할 수 없습니다: {skill_name}",
        "en": "Skill handler could not be loaded: {skill_name}",
    },
    "SKILL-006": {
        "ko": "스킬 실행 타임아웃: {skill_name} ({timeout}초 초과)",
        "en": "Skill execution timed out: {skill_name} (exceeded {timeout}s)",
    },
    # CSV (CSV 처리)
    "CSV-001": {
        "ko": "파일을 찾을 수 없습니다: {file_path}",
        "en": "File not found: {file_path}",
    },
    "CSV-002": {
        "ko": "write 액션에는 'data' 파라미터가 필요합니다",
        "en": "The 'data' parameter is required for the write action",
    },
    "CSV-003": {
        "ko": "JSON 데이터 파싱 실패: {reason}",
        "en": "Failed to parse JSON data: {reason}",
    },
    "CSV-004": {
        "ko": "data는 비어있지 않은 JSON 객체 배열이어야 합니다",
        "en": "Data must be a non-empty JSON array of objects",
    },
    "CSV-005": {
        "ko": "파일 읽기 실패: {file_path} ({reason})",
        "en": "Failed to read file: {file_path} ({reason})",
    },
    # MEMORY (메모리 저장소)
    "MEMORY-001": {
        "ko": "{action} 액션에는 key가 필요합니다.",
        "en": "A key is required for the {action} action.",
    },
    "MEMORY-002": {
        "ko": "store 액션에는 value가 필요합니다.",
        "en": "A value is required for the store action.",
    },
    "MEMORY-003": {
        "ko": "search 액션에는 query가 필요합니다.",
        "en": "A query is required for the search action.",
    },
    "MEMORY-004": {
        "ko": "메모리 파일 로드 실패: {reason}",
        "en": "Failed to load memory file: {reason}",
    },
    # PROVIDER (외부 제공자)
    "PROVIDER-001": {
        "ko": "{service} 접근에는 제공자 클라이언트가 필요합니다. API 키 또는 플랫폼 어댑터를 설정하세요.",
        "en": "Provider client required for {service} access. Configure an API key or platform adapter.",
    },
    "PROVIDER-002": {
        "ko": "요청 시간이 초과되었습니다 ({timeout_ms}ms).",
        "en": "Request timed out after {timeout_ms}ms.",
    },
    "PROVIDER-003": {
        "ko": "{reason}",
        "en": "{reason}",
    },
    "PROVIDER-004": {
        "ko": "보안상의 이유로 차단된 URL: {reason}",
        "en": "Blocked unsafe URL: {reason}",
    },
    # CONFIG (설정 관리)
    "CONFIG-001": {
        "ko": "설정 파일을 찾을 수 없습니다",
        "en": "Configuration file not found",
    },
    "CONFIG-002": {
        "ko": "YAML 설정에 중복 키가 있습니다",
        "en": "Duplicate keys found in YAML configuration",
    },
    "CONFIG-003": {
        "ko": "설정 검증 실패: {validation_errors}",
        "en": "Configuration validation failed: {validation_errors}",
    },
    "CONFIG-004": {
        "ko": "설정 로드 실패: {original_error}",
        "en": "Failed to load configuration: {original_error}",
    },
    # GENERAL (일반)
    "GENERAL-001": {
        "ko": "예상치 못한 오류가 발생했습니다",
        "en": "An unexpected error occurred",
    },
    "GENERAL-002": {
        "ko": "잘못된 입력입니다: {reason}",
        "en": "Invalid input: {reason}",
    },
}

# 에러 해결 방법 저장소: {error_code: {"ko": [...], "en": [...]}}
ERROR_SOLUTIONS: dict[str, dict[str, list[str]]] = {
    "SKILL-001": {
        "ko": ["SkillFactory.get_supported_skills()로 등록된 스킬을 확인하세요"],
        "en": ["Check registered skills with SkillFactory.get_supported_skills()"],
    },
    "SKILL-002": {
        "ko": ["설정 파일의 skills.<이름>.enabled 값을 확인하세요"],
        "en": ["Check skills.<name>.enabled in the configuration file"],
    },
    "SKILL-003": {
        "ko": ["요청 파라미터에 필수 항목을 포함하세요"],
        "en": ["Include the required fields in the request parameters"],
    },
    "SKILL-004": {
        "ko": ["지원 액션 목록을 확인하세요"],
        "en": ["Check the list of supported actions"],
    },
    "SKILL-005": {
        "ko": ["SUPPORTED_SKILLS의 module/function 경로를 확인하세요"],
        "en": ["Verify the module/function path in SUPPORTED_SKILLS"],
    },
    "SKILL-006": {
        "ko": ["skills.<이름>.timeout 값을 늘리거나 입력 크기를 줄이세요"],
        "en": ["Increase skills.<name>.timeout or reduce the input size"],
    },
    "CSV-001": {
        "ko": ["파일 경로가 올바른지 확인하세요", "상대 경로는 현재 작업 디렉토리 기준입니다"],
        "en": ["Verify the file path", "Relative paths are resolved against the working directory"],
    },
    "CSV-002": {
        "ko": ["data 파라미터에 객체 배열을 전달하세요"],
        "en": ["Pass an array of objects in the data parameter"],
    },
    "CSV-003": {
        "ko": ["data 문자열이 올바른 JSON인지 확인하세요"],
        "en": ["Verify that the data string is valid JSON"],
    },
    "CSV-004": {
        "ko": ["최소 1개 이상의 객체를 포함한 배열을 전달하세요"],
        "en": ["Pass an array containing at least one object"],
    },
    "CSV-005": {
        "ko": ["파일 권한과 인코딩을 확인하세요"],
        "en": ["Check file permissions and encoding"],
    },
    "MEMORY-001": {
        "ko": ["비어있지 않은 key를 전달하세요"],
        "en": ["Pass a non-empty key"],
    },
    "MEMORY-002": {
        "ko": ["저장할 value를 전달하세요"],
        "en": ["Pass the value to store"],
    },
    "MEMORY-003": {
        "ko": ["비어있지 않은 query를 전달하세요"],
        "en": ["Pass a non-empty query"],
    },
    "MEMORY-004": {
        "ko": ["메모리 파일이 올바른 JSON인지 확인하세요", "memory.file_path 설정을 확인하세요"],
        "en": ["Verify that the memory file is valid JSON", "Check the memory.file_path setting"],
    },
    "PROVIDER-001": {
        "ko": ["컨텍스트에 provider_client 또는 gateway_client를 주입하세요"],
        "en": ["Inject provider_client or gateway_client into the context"],
    },
    "PROVIDER-002": {
        "ko": ["config.timeout_ms 값을 늘리세요", "업스트림 서비스 상태를 확인하세요"],
        "en": ["Increase config.timeout_ms", "Check the upstream service status"],
    },
    "PROVIDER-003": {
        "ko": ["업스트림 서비스 상태를 확인하세요"],
        "en": ["Check the upstream service status"],
    },
    "PROVIDER-004": {
        "ko": ["http/https 공개 호스트만 허용됩니다"],
        "en": ["Only public http/https hosts are allowed"],
    },
    "CONFIG-001": {
        "ko": ["skillhub/config/base.yaml 파일이 존재하는지 확인하세요"],
        "en": ["Verify that skillhub/config/base.yaml exists"],
    },
    "CONFIG-002": {
        "ko": ["YAML 파일에서 중복된 최상위 키를 제거하세요"],
        "en": ["Remove duplicate top-level keys from the YAML file"],
    },
    "CONFIG-003": {
        "ko": ["설정 값의 타입과 범위를 확인하세요"],
        "en": ["Check the types and ranges of configuration values"],
    },
    "CONFIG-004": {
        "ko": ["YAML 문법 오류를 확인하세요"],
        "en": ["Check for YAML syntax errors"],
    },
    "GENERAL-001": {
        "ko": ["로그를 확인하고 문제가 지속되면 관리자에게 문의하세요"],
        "en": ["Check the logs and contact the maintainer if the problem persists"],
    },
    "GENERAL-002": {
        "ko": ["입력 값을 확인하세요"],
        "en": ["Check the input values"],
    },
}


def _lookup(table: dict[str, dict[str, Any]], error_code: str, lang: str) -> Any:
    entry = table.get(error_code)
    if entry is None:
        raise KeyError(f"Unknown error code: {error_code}")
    if lang not in entry:
        raise ValueError(f"Unsupported language: {lang}")
    return entry[lang]


def get_message_template(error_code: str, lang: str = "en") -> str:
    """
    메시지 템플릿 ({file_path} 등 포맷 인자 포함)

    Raises:
        KeyError: 등록되지 않은 코드
        ValueError: ko/en 이외의 언어
    """
    return _lookup(ERROR_MESSAGES, error_code, lang)


def get_solutions_list(error_code: str, lang: str = "en") -> list[str]:
    return list(_lookup(ERROR_SOLUTIONS, error_code, lang))
