"""
PII 패턴 테이블

(유형, 컴파일된 정규식, 선택적 검증 함수) 튜플 목록으로 정의된 데이터 기반 규칙.
검증 함수는 정규식 매칭 결과를 다시 검사하여 오탐을 제거합니다.

정규식은 re.ASCII로 컴파일하여 \\d, \\b, \\s가 ASCII 문자만 대상으로 하도록 합니다.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from .models import PIIType

NON_DIGIT_PATTERN = re.compile(r"\D", re.ASCII)
DATE_SEPARATOR_PATTERN = re.compile(r"[/\-.]")


def _digits(value: str) -> str:
    return NON_DIGIT_PATTERN.sub("", value)


def luhn_check(card_string: str) -> bool:
    """
    Luhn 체크섬 검증

    숫자 외 문자를 제거한 뒤 13~19자리만 허용하고,
    오른쪽부터 두 번째 자리마다 2배(9 초과 시 -9)하여 합이 10의 배수인지 확인합니다.

    Examples:
        >>> luhn_check("4111 1111 1111 1111")
        True
        >>> luhn_check("1234 5678 9012 3456")
        False
    """
    digits = _digits(card_string)
    if len(digits) < 13 or len(digits) > 19:
        return False

    total = 0
    alternate = False
    for char in reversed(digits):
        n = int(char)
        if alternate:
            n *= 2
            if n > 9:
                n -= 9
        total += n
        alternate = not alternate

    return total % 10 == 0


def is_valid_phone(match: str) -> bool:
    """숫자 7~15자리"""
    return 7 <= len(_digits(match)) <= 15


def is_valid_ssn(match: str) -> bool:
    """
    SSN 규칙 검증

    area(앞 3자리)는 000, 666, 900 이상 불가. group(2자리)은 00 불가. serial(4자리)은 0000 불가.
    """
    digits = _digits(match)
    if len(digits) != 9:
        return False
    area = int(digits[0:3])
    if area == 0 or area == 666 or area >= 900:
        return False
    if int(digits[3:5]) == 0:
        return False
    if int(digits[5:9]) == 0:
        return False
    return True


def is_valid_ip_address(match: str) -> bool:
    """각 옥텟 0~255"""
    return all(0 <= int(octet) <= 255 for octet in match.split("."))


def is_plausible_date(match: str) -> bool:
    """
    날짜 형식 느슨한 검증

    세 부분이 모두 0 이상의 숫자면 허용합니다.
    하위 리포트 동작이 이 넓은 매칭에 의존하므로 범위 검사를 추가하지 않습니다.
    """
    parts = DATE_SEPARATOR_PATTERN.split(match)
    if len(parts) != 3:
        return False
    return all(part.isdigit() and int(part) >= 0 for part in parts)


@dataclass(frozen=True)
class PatternRule:
    """
    PII 탐지 규칙

    Attributes:
        pii_type: 탐지 유형
        pattern: 컴파일된 정규식
        validator: 매칭 재검증 함수 (None이면 검증 생략)
    """

    pii_type: PIIType
    pattern: re.Pattern[str]
    validator: Callable[[str], bool] | None = None

    def accepts(self, match: str) -> bool:
        """검증 함수 통과 여부"""
        return self.validator is None or self.validator(match)


# 규칙 순서는 동일 길이 겹침 시 먼저 수집된 항목이 남는 순서와 같습니다.
PII_PATTERNS: tuple[PatternRule, ...] = (
    PatternRule(
        PIIType.EMAIL,
        re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", re.ASCII),
    ),
    PatternRule(
        PIIType.PHONE,
        re.compile(r"(\+?1[-.\s]?)?(\(?\d{3}\)?[-.\s]?)?\d{3}[-.\s]?\d{4}", re.ASCII),
        is_valid_phone,
    ),
    PatternRule(
        PIIType.SSN,
        re.compile(r"\b\d{3}-?\d{2}-?\d{4}\b", re.ASCII),
        is_valid_ssn,
    ),
    PatternRule(
        PIIType.CREDIT_CARD,
        re.compile(r"\b(?:\d{4}[-\s]?){3}\d{4}\b", re.ASCII),
        luhn_check,
    ),
    PatternRule(
        PIIType.IP_ADDRESS,
        re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b", re.ASCII),
        is_valid_ip_address,
    ),
    PatternRule(
        PIIType.DATE_OF_BIRTH,
        re.compile(
            r"\b(?:\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}|\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2})\b",
            re.ASCII,
        ),
        is_plausible_date,
    ),
)


def get_rule(pii_type: PIIType) -> PatternRule:
    """유형에 해당하는 규칙 반환"""
    for rule in PII_PATTERNS:
        if rule.pii_type is pii_type:
            return rule
    raise KeyError(pii_type.value)
