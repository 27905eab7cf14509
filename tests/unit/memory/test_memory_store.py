"""
메모리 저장소 및 검색 랭킹 단위 테스트
"""

import json
from pathlib import Path

import pytest

from skillhub.lib.errors import MemoryStoreError
from skillhub.modules.core.memory import (
    MemoryEntry,
    MemoryStore,
    levenshtein,
    rank_entries,
    score_entry,
    similarity,
)


def _entry(value: object) -> MemoryEntry:
    return MemoryEntry(value=value, created_at="2025-01-01T00:00:00.000Z", updated_at="2025-01-01T00:00:00.000Z")


class TestMemoryStore:
    """MemoryStore 테스트"""

    def test_load_creates_missing_file(self, tmp_path: Path) -> None:
        """파일과 상위 디렉터리가 없으면 생성"""
        path = tmp_path / "nested" / "memory.json"
        store = MemoryStore(path)

        assert store.load() == {}
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_save_and_load(self, tmp_path: Path) -> None:
        """저장 후 다시 로드"""
        store = MemoryStore(tmp_path / "memory.json")
        store.save({"k": _entry("v")})

        loaded = store.load()

        assert loaded["k"].value == "v"
        assert loaded["k"].created_at == "2025-01-01T00:00:00.000Z"

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        """JSON이 아닌 파일은 MEMORY-004"""
        path = tmp_path / "memory.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(MemoryStoreError) as exc_info:
            MemoryStore(path).load()

        assert exc_info.value.error_code == "MEMORY-004"

    def test_camel_case_timestamps_are_accepted(self, tmp_path: Path) -> None:
        """camelCase 타임스탬프 키도 읽음"""
        path = tmp_path / "memory.json"
        path.write_text(
            json.dumps({"k": {"value": 1, "createdAt": "c", "updatedAt": "u"}}), encoding="utf-8"
        )

        entry = MemoryStore(path).load()["k"]

        assert (entry.value, entry.created_at, entry.updated_at) == (1, "c", "u")


class TestSimilarity:
    """편집 거리 테스트"""

    def test_levenshtein(self) -> None:
        """기본 편집 거리"""
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("", "abc") == 3
        assert levenshtein("same", "same") == 0

    def test_similarity_bounds(self) -> None:
        """유사도 0~1"""
        assert similarity("abc", "abc") == 1.0
        assert similarity("", "abc") == 0.0
        assert similarity("abcd", "abcx") == pytest.approx(0.75)


class TestScoring:
    """검색 점수 테스트"""

    def test_exact_key_match(self) -> None:
        """정확한 키 일치: 100 + 토큰 15 + 유사도 30"""
        assert score_entry("alpha", "nothing", "alpha") == 145

    def test_key_contains_query(self) -> None:
        """키 포함: 60 + 토큰 15"""
        # similarity("project-alpha", "alpha") = 1 - 8/13 ≈ 0.385 → 유사도 점수 없음
        assert score_entry("project-alpha", "x", "alpha") == 75

    def test_value_contains_query(self) -> None:
        """값 포함: 40 + 토큰 10"""
        assert score_entry("zz", "the blue house", "blue") == 50

    def test_half_similarity_rounds_up(self) -> None:
        """유사도 점수는 0.5를 올림"""
        # similarity("abcdefgh", "abcdwxyz") = 0.5 → 15
        assert score_entry("abcdefgh", "", "abcdwxyz") == 15

    def test_single_char_tokens_are_ignored(self) -> None:
        """1자 토큰은 점수 없음"""
        assert score_entry("zzzz", "a b c", "q") == 0

    def test_rank_entries_order_and_stability(self) -> None:
        """점수 내림차순, 동점은 저장 순서 유지"""
        entries = {
            "first-note": _entry("coffee beans"),
            "second-note": _entry("coffee grinder"),
            "coffee": _entry("drink"),
            "unrelated": _entry("tea"),
        }

        matches = rank_entries(entries, "coffee")

        assert [m.key for m in matches] == ["coffee", "first-note", "second-note"]
        assert matches[1].score == matches[2].score
        assert all(m.score > 0 for m in matches)
