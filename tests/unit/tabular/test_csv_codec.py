"""
CSV 코덱 단위 테스트

parse_csv / write_csv 동작 검증.

테스트 케이스:
1. 따옴표 토크나이저 (이스케이프, 쉼표 포함 필드)
2. 숫자 변환 규칙
3. 짧은/긴 행 처리, 빈 입력
4. 헤더 합집합 순서와 필드 이스케이프
5. 쓰기 → 읽기 왕복
"""

import pytest

from skillhub.modules.core.tabular import (
    CsvTable,
    collect_headers,
    escape_csv_field,
    parse_csv,
    parse_csv_line,
    stringify_value,
    to_number,
    write_csv,
)


class TestParseCsvLine:
    """한 줄 토크나이저 테스트"""

    def test_plain_fields_are_trimmed(self) -> None:
        """따옴표 없는 필드는 앞뒤 공백 제거"""
        assert parse_csv_line(" a , b ,c ") == ["a", "b", "c"]

    def test_quoted_field_keeps_comma(self) -> None:
        """따옴표 안의 쉼표는 필드 구분자가 아님"""
        assert parse_csv_line('x,"a, b",y') == ["x", "a, b", "y"]

    def test_escaped_quote(self) -> None:
        """따옴표 안의 연속 따옴표 두 개는 리터럴 따옴표 하나"""
        assert parse_csv_line('"She said ""hi"""') == ['She said "hi"']

    def test_empty_quoted_field(self) -> None:
        """빈 따옴표 필드는 빈 문자열"""
        assert parse_csv_line('"",a') == ["", "a"]

    def test_six_quotes_yield_two_quote_chars(self) -> None:
        """따옴표 6개는 이스케이프된 따옴표 두 개를 담은 필드"""
        assert parse_csv_line('""""""') == ['""']

    def test_trailing_comma_yields_empty_field(self) -> None:
        """마지막 쉼표 뒤에도 빈 필드가 생김"""
        assert parse_csv_line("a,b,") == ["a", "b", ""]

    def test_quote_opened_mid_field(self) -> None:
        """필드 중간에서 열린 따옴표 안의 쉼표는 구분자가 아님"""
        assert parse_csv_line('ab"c,d"e') == ["abc,de"]
        assert parse_csv_line('ab"c,d"e,f') == ["abc,de", "f"]


class TestToNumber:
    """숫자 변환 규칙 테스트"""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", 42),
            ("-7", -7),
            ("+3", 3),
            ("3.5", 3.5),
            (".5", 0.5),
            ("5.", 5),
            ("1e2", 100),
            ("0x1F", 31),
            ("0b101", 5),
            ("0o17", 15),
            (" 12 ", 12),
        ],
    )
    def test_numeric_strings(self, text: str, expected: float) -> None:
        """숫자 리터럴 변환"""
        result = to_number(text)
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize("text", ["", "abc", "Infinity", "NaN", "inf", "1_000", "1,000", "12abc"])
    def test_non_numeric_strings(self, text: str) -> None:
        """숫자가 아니면 None"""
        assert to_number(text) is None

    @pytest.mark.parametrize("text", ["\u0661\u0662\u0663", "\uff11\uff12", "\u0e51", "0x\uff11"])
    def test_non_ascii_digits_are_not_numbers(self, text: str) -> None:
        """ASCII 이외의 숫자(아랍-인도, 전각 등)는 숫자로 보지 않음"""
        assert to_number(text) is None

    def test_integer_beyond_digit_limit(self) -> None:
        """정수 변환 자릿수 제한을 넘는 값은 예외 없이 None"""
        assert to_number("1" * 5000) is None
        assert to_number("-" + "9" * 5000) is None


class TestParseCsv:
    """parse_csv 테스트"""

    def test_basic_table_with_coercion(self) -> None:
        """헤더 + 레코드, 숫자 자동 변환"""
        table = parse_csv("name,age,score\nAlice,30,9.5\nBob,25,8\n")

        assert table.headers == ["name", "age", "score"]
        assert table.records == [
            {"name": "Alice", "age": 30, "score": 9.5},
            {"name": "Bob", "age": 25, "score": 8},
        ]
        assert table.row_count == 2

    def test_empty_input(self) -> None:
        """빈 입력은 빈 테이블"""
        assert parse_csv("") == CsvTable(headers=[], records=[])
        assert parse_csv("\n  \r\n\n").to_dict() == {"headers": [], "records": []}

    def test_header_only(self) -> None:
        """헤더만 있으면 레코드 없음"""
        table = parse_csv("a,b\n")
        assert table.headers == ["a", "b"]
        assert table.records == []

    def test_crlf_and_blank_lines(self) -> None:
        """CRLF 줄바꿈과 빈 줄 무시"""
        table = parse_csv("a,b\r\n\r\n1,2\r\n   \r\n3,4")
        assert table.records == [{"a": 1, "b": 2}, {"a": 3, "b": 4}]

    def test_short_row_fills_empty_strings(self) -> None:
        """부족한 필드는 빈 문자열"""
        table = parse_csv("a,b,c\n1\n")
        assert table.records == [{"a": 1, "b": "", "c": ""}]

    def test_long_row_drops_extras(self) -> None:
        """초과 필드는 버림"""
        table = parse_csv("a,b\n1,2,3,4\n")
        assert table.records == [{"a": 1, "b": 2}]

    def test_empty_field_is_not_coerced(self) -> None:
        """빈 값은 0으로 변환되지 않음"""
        table = parse_csv('a,b\n"",x\n')
        assert table.records[0]["a"] == ""

    def test_non_ascii_digits_stay_strings(self) -> None:
        """ASCII 이외의 숫자 필드는 문자열 유지"""
        table = parse_csv("a,b\n\u0661\u0662\u0663,\uff11\uff12\n")

        assert table.records == [{"a": "\u0661\u0662\u0663", "b": "\uff11\uff12"}]

    def test_huge_integer_field_stays_string(self) -> None:
        """아주 긴 정수 필드는 예외 없이 문자열 유지"""
        digits = "1" * 5000

        table = parse_csv(f"a,b\n{digits},2\n")

        assert table.records == [{"a": digits, "b": 2}]

    def test_records_keep_header_order(self) -> None:
        """레코드 키 순서 = 헤더 순서"""
        table = parse_csv("z,a,m\n1,2,3\n")
        assert list(table.records[0]) == ["z", "a", "m"]


class TestWriteCsv:
    """write_csv 테스트"""

    def test_header_union_in_first_seen_order(self) -> None:
        """헤더는 처음 등장한 순서의 합집합"""
        records = [{"a": 1, "b": 2}, {"b": 3, "c": 4}, {"d": 5, "a": 6}]

        assert collect_headers(records) == ["a", "b", "c", "d"]
        assert write_csv(records) == "a,b,c,d\n1,2,,\n,3,4,\n6,,,5\n"

    def test_single_trailing_newline(self) -> None:
        """출력은 줄바꿈 하나로 끝남"""
        output = write_csv([{"x": 1}])
        assert output.endswith("\n")
        assert not output.endswith("\n\n")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain", "plain"),
            ("a,b", '"a,b"'),
            ('say "hi"', '"say ""hi"""'),
            ("line1\nline2", '"line1\nline2"'),
            (None, ""),
            (True, "true"),
            (False, "false"),
            (3.0, "3"),
            (2.5, "2.5"),
        ],
    )
    def test_escape_csv_field(self, value: object, expected: str) -> None:
        """따옴표 처리와 값 문자열 변환"""
        assert escape_csv_field(value) == expected

    def test_nested_values_are_json(self) -> None:
        """dict/list는 압축 JSON (쉼표 포함 시 따옴표)"""
        assert stringify_value({"k": 1}) == '{"k":1}'
        assert escape_csv_field([1, 2]) == '"[1,2]"'

    def test_round_trip(self) -> None:
        """쓰기 → 읽기 왕복 시 값 보존"""
        records = [
            {"name": "Kim, Minsu", "note": 'He said "ok"', "age": 41},
            {"name": "Lee", "note": "", "age": 29.5},
        ]

        table = parse_csv(write_csv(records))

        assert table.headers == ["name", "note", "age"]
        assert table.records == records

    def test_comma_safety(self) -> None:
        """쉼표가 포함된 값도 열 수가 유지됨"""
        output = write_csv([{"a": "1,2,3", "b": "x"}])
        table = parse_csv(output)

        assert table.records == [{"a": "1,2,3", "b": "x"}]
