"""
PII 엔진 데이터 모델

탐지 결과(PIIFinding)와 리포트(PIIReport)를 위한 불변 데이터 클래스 정의.
모든 모델은 호출 단위로 생성/폐기되며 호출 간 상태를 공유하지 않습니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PIIType(Enum):
    """
    탐지 대상 PII 유형

    - EMAIL: 이메일 주소
    - PHONE: 미국식 전화번호 (국가번호/괄호/구분자 허용)
    - SSN: 미국 사회보장번호
    - CREDIT_CARD: 신용카드 번호 (Luhn 검증)
    - IP_ADDRESS: IPv4 주소
    - DATE_OF_BIRTH: 날짜 형식 문자열 (넓게 매칭)
    """

    EMAIL = "EMAIL"
    PHONE = "PHONE"
    SSN = "SSN"
    CREDIT_CARD = "CREDIT_CARD"
    IP_ADDRESS = "IP_ADDRESS"
    DATE_OF_BIRTH = "DATE_OF_BIRTH"


class RiskLevel(Enum):
    """PII 노출 위험도"""

    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# 존재만으로 HIGH 위험도가 되는 유형
HIGH_SENSITIVITY_TYPES = frozenset({PIIType.SSN, PIIType.CREDIT_CARD})


@dataclass(frozen=True)
class PIIFinding:
    """
    탐지된 PII 항목

    Attributes:
        pii_type: PII 유형
        value: 매칭된 원본 문자열 (text[start:end])
        start: 시작 위치 (0부터, 포함)
        end: 끝 위치 (미포함)
    """

    pii_type: PIIType
    value: str
    start: int
    end: int

    def __post_init__(self) -> None:
        """유효성 검증"""
        if self.start < 0:
            raise ValueError(f"start must be non-negative, got {self.start}")
        if self.end <= self.start:
            raise ValueError(f"end ({self.end}) must be > start ({self.start})")
        if len(self.value) != self.end - self.start:
            raise ValueError(
                f"value length ({len(self.value)}) must equal end - start ({self.end - self.start})"
            )

    @property
    def length(self) -> int:
        """span 길이"""
        return self.end - self.start

    def overlaps(self, other: "PIIFinding") -> bool:
        """정렬된 순서에서 other(앞선 항목)와 겹치는지 여부"""
        return self.start < other.end

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (직렬화용)"""
        return {
            "type": self.pii_type.value,
            "value": self.value,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class PIIReport:
    """
    PII 분석 리포트

    Attributes:
        total_count: 전체 탐지 수
        counts_by_type: 유형명 → 탐지 수 (처음 등장한 순서)
        risk_level: 위험도
        recommendations: 권고 문구 (고정 순서)
    """

    total_count: int
    counts_by_type: dict[str, int] = field(default_factory=dict)
    risk_level: RiskLevel = RiskLevel.NONE
    recommendations: tuple[str, ...] = ()

    @property
    def pii_found(self) -> bool:
        """PII 존재 여부"""
        return self.total_count > 0

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (직렬화용)"""
        return {
            "pii_found": self.pii_found,
            "total_count": self.total_count,
            "counts_by_type": dict(self.counts_by_type),
            "risk_level": self.risk_level.value,
            "recommendations": list(self.recommendations),
        }
