"""
메모리 퍼지 검색 랭킹

점수 규칙:
- key == query: +100, key에 query 포함: +60
- value에 query 포함: +40
- 공백 분리 토큰(2자 이상)마다 key 포함 +15, value 포함 +10
- query 20자 이하이고 key와의 Levenshtein 유사도 > 0.4: +round(유사도 * 30)

모든 비교는 소문자 기준입니다.
"""

import json
import math
import re
from dataclasses import dataclass
from typing import Any

from .store import MemoryEntry

TOKEN_SPLIT_PATTERN = re.compile(r"\s+")

MAX_RESULTS = 10
SIMILARITY_QUERY_MAX_LENGTH = 20
SIMILARITY_THRESHOLD = 0.4


@dataclass(frozen=True)
class SearchMatch:
    """검색 결과 항목"""

    key: str
    entry: MemoryEntry
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "score": self.score, "value": self.entry.value}


def levenshtein(a: str, b: str) -> int:
    """
    Levenshtein 편집 거리

    Examples:
        >>> levenshtein("kitten", "sitting")
        3
    """
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost)
        previous = current

    return previous[len(b)]


def similarity(a: str, b: str) -> float:
    """편집 거리 기반 유사도 (0.0 ~ 1.0)"""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1 - levenshtein(a, b) / max(len(a), len(b))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def to_text(value: Any) -> str:
    """검색/미리보기용 문자열 변환"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def score_entry(key: str, value: Any, query: str) -> int:
    """
    단일 항목 관련도 점수

    Examples:
        >>> score_entry("project-alpha", "launch plan", "project-alpha")
        145
    """
    key_lower = key.lower()
    value_lower = to_text(value).lower()
    query_lower = query.lower()

    score = 0
    if key_lower == query_lower:
        score += 100
    elif query_lower in key_lower:
        score += 60

    if query_lower in value_lower:
        score += 40

    for token in TOKEN_SPLIT_PATTERN.split(query_lower):
        if len(token) < 2:
            continue
        if token in key_lower:
            score += 15
        if token in value_lower:
            score += 10

    if len(query_lower) <= SIMILARITY_QUERY_MAX_LENGTH:
        key_similarity = similarity(key_lower, query_lower)
        if key_similarity > SIMILARITY_THRESHOLD:
            score += _round_half_up(key_similarity * 30)

    return score


def rank_entries(entries: dict[str, MemoryEntry], query: str) -> list[SearchMatch]:
    """
    점수가 0보다 큰 항목을 점수 내림차순으로 정렬 (동점은 저장 순서 유지)

    Returns:
        전체 매칭 목록 (상위 N개 자르기는 호출자 책임)
    """
    matches = [
        SearchMatch(key=key, entry=entry, score=score)
        for key, entry in entries.items()
        if (score := score_entry(key, entry.value, query)) > 0
    ]
    matches.sort(key=lambda m: m.score, reverse=True)
    return matches
