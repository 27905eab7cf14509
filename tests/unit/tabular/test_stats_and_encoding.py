"""
CSV 컬럼 통계 및 인코딩 감지 테스트
"""

from pathlib import Path

import pytest

from skillhub.modules.core.tabular import (
    compute_numeric_stats,
    detect_encoding,
    parse_csv,
    read_text_file,
)


class TestComputeNumericStats:
    """compute_numeric_stats 테스트"""

    def test_numeric_column_stats(self) -> None:
        """모집단 표준편차 포함 기본 통계"""
        table = parse_csv("name,age\nA,30\nB,40\nC,50\n")

        stats = compute_numeric_stats(table)

        assert list(stats) == ["age"]
        age = stats["age"]
        assert age.count == 3
        assert age.sum == 120
        assert age.mean == pytest.approx(40.0)
        assert age.min == 30
        assert age.max == 50
        assert age.std_dev == pytest.approx(8.164965809)

    def test_majority_rule(self) -> None:
        """숫자 값이 행의 과반이어야 숫자 컬럼"""
        half = parse_csv("v\n1\nx\n")
        majority = parse_csv("v\n1\n2\nx\n")

        assert compute_numeric_stats(half) == {}
        assert compute_numeric_stats(majority)["v"].count == 2

    def test_stats_are_python_numbers(self) -> None:
        """numpy 스칼라가 아닌 파이썬 숫자로 반환"""
        stats = compute_numeric_stats(parse_csv("x\n1.5\n2.5\n"))["x"]

        assert type(stats.sum) is int
        assert stats.sum == 4
        assert type(stats.min) is float
        assert stats.to_dict()["std_dev"] == pytest.approx(0.5)

    def test_empty_table(self) -> None:
        """빈 테이블은 통계 없음"""
        assert compute_numeric_stats(parse_csv("")) == {}


class TestEncoding:
    """인코딩 감지 테스트"""

    def test_utf8_with_bom(self, tmp_path: Path) -> None:
        """UTF-8 BOM 제거"""
        path = tmp_path / "bom.csv"
        path.write_bytes(b"\xef\xbb\xbf" + "name\n김철수\n".encode())

        assert read_text_file(path) == "name\n김철수\n"

    def test_non_utf8_file_is_decoded(self, tmp_path: Path) -> None:
        """UTF-8이 아닌 파일도 예외 없이 디코딩"""
        path = tmp_path / "latin.csv"
        path.write_bytes("city\nMünchen\nZürich\n".encode("latin-1"))

        text = read_text_file(path)

        assert text.startswith("city\n")
        assert len(text.splitlines()) == 3

    def test_detect_encoding_fallback(self) -> None:
        """감지 실패 시 utf-8"""
        assert detect_encoding(b"") == "utf-8"
