"""
메모리 모듈 - JSON 파일 키-값 저장소 및 퍼지 검색

사용 예시:
    >>> from skillhub.modules.core.memory import MemoryStore, rank_entries
    >>> store = MemoryStore("data/memory.json")
    >>> matches = rank_entries(store.load(), "project")
"""

from .search import (
    MAX_RESULTS,
    SearchMatch,
    levenshtein,
    rank_entries,
    score_entry,
    similarity,
    to_text,
)
from .store import MemoryEntry, MemoryStore, utc_timestamp

__all__ = [
    "MemoryEntry",
    "MemoryStore",
    "utc_timestamp",
    "SearchMatch",
    "MAX_RESULTS",
    "levenshtein",
    "similarity",
    "score_entry",
    "rank_entries",
    "to_text",
]
