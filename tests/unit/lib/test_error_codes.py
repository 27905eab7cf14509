"""
에러 코드 / 메시지 / 예외 테스트
"""

import pytest

from skillhub.lib.errors import (
    ENVELOPE_CODES,
    ErrorCode,
    MemoryStoreError,
    ProviderError,
    SkillHubException,
    TabularError,
    format_error_response,
    get_all_error_codes,
    get_envelope_code,
    get_error_codes_by_domain,
    get_error_message,
    get_exception_class,
    wrap_exception,
)
from skillhub.lib.errors.messages import ERROR_MESSAGES, ERROR_SOLUTIONS


class TestErrorCatalog:
    """에러 메시지 저장소 테스트"""

    def test_every_code_has_messages_and_solutions(self) -> None:
        """모든 ErrorCode에 양언어 메시지와 해결 방법 존재"""
        for code in ErrorCode:
            assert set(ERROR_MESSAGES[code.value]) == {"ko", "en"}
            assert ERROR_SOLUTIONS[code.value]["en"]

    def test_envelope_codes_reference_known_codes(self) -> None:
        """envelope 매핑 키는 모두 정의된 코드"""
        assert set(ENVELOPE_CODES) <= set(get_all_error_codes())

    def test_codes_by_domain(self) -> None:
        """도메인별 코드 조회"""
        assert get_error_codes_by_domain("MEMORY") == [
            "MEMORY-001",
            "MEMORY-002",
            "MEMORY-003",
            "MEMORY-004",
        ]

    @pytest.mark.parametrize(
        ("code", "envelope"),
        [
            ("SKILL-001", "SKILL_NOT_FOUND"),
            ("SKILL-004", "INVALID_ACTION"),
            ("PROVIDER-002", "TIMEOUT"),
            ("CSV-001", "OPERATION_FAILED"),
            (ErrorCode.MEMORY_004, "OPERATION_FAILED"),
        ],
    )
    def test_envelope_mapping(self, code: str, envelope: str) -> None:
        """envelope 코드 매핑 (미매핑은 OPERATION_FAILED)"""
        assert get_envelope_code(code) == envelope


class TestMessages:
    """메시지 포맷팅 테스트"""

    def test_language_selection(self) -> None:
        """언어별 메시지"""
        assert get_error_message("CSV-001", lang="en", file_path="a.csv") == "File not found: a.csv"
        assert get_error_message("CSV-001", lang="ko", file_path="a.csv") == (
            "파일을 찾을 수 없습니다: a.csv"
        )

    def test_default_language_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """ERROR_LANGUAGE 환경 변수 (잘못된 값은 en)"""
        monkeypatch.setenv("ERROR_LANGUAGE", "ko")
        assert get_error_message("GENERAL-001") == "예상치 못한 오류가 발생했습니다"

        monkeypatch.setenv("ERROR_LANGUAGE", "fr")
        assert get_error_message("GENERAL-001") == "An unexpected error occurred"

    def test_missing_format_key(self) -> None:
        """포맷 인자 누락 시 템플릿 + 안내"""
        message = get_error_message("CSV-005", lang="en", file_path="x")

        assert "formatting error: reason missing" in message

    def test_format_error_response(self) -> None:
        """응답 딕셔너리"""
        response = format_error_response("MEMORY-003", lang="en")

        assert response == {
            "error_code": "MEMORY-003",
            "error": "INVALID_INPUT",
            "message": "A query is required for the search action.",
            "solutions": ["Pass a non-empty query"],
        }


class TestExceptions:
    """예외 클래스 테스트"""

    def test_exception_attributes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """error_code / message / envelope_code"""
        monkeypatch.delenv("ERROR_LANGUAGE", raising=False)

        exc = MemoryStoreError(ErrorCode.MEMORY_001, action="retrieve")

        assert isinstance(exc, SkillHubException)
        assert exc.error_code == "MEMORY-001"
        assert exc.message == "A key is required for the retrieve action."
        assert exc.envelope_code == "INVALID_INPUT"
        assert exc.to_dict(lang="ko")["message"] == "retrieve 액션에는 key가 필요합니다."

    def test_exception_class_by_domain(self) -> None:
        """도메인 prefix → 예외 클래스"""
        assert get_exception_class("CSV-002") is TabularError
        assert get_exception_class("PROVIDER-001") is ProviderError
        assert get_exception_class("UNKNOWN-001") is SkillHubException

    def test_wrap_exception(self) -> None:
        """일반 예외 래핑 (SkillHubException은 그대로)"""
        wrapped = wrap_exception(ValueError("bad"), "GENERAL-002", reason="bad")
        existing = TabularError(ErrorCode.CSV_002)

        assert wrapped.error_code == "GENERAL-002"
        assert wrapped.context["original_error_type"] == "ValueError"
        assert wrap_exception(existing) is existing
