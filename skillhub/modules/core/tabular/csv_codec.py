"""
CSV 파서/라이터

따옴표 인식 필드 토크나이저와 레코드 직렬화를 제공합니다.
I/O가 없는 순수 함수로만 구성되어 동시 호출에 안전합니다.

파싱 규칙:
- 줄은 \\r?\\n 기준으로 분리하고, trim 후 빈 줄은 버립니다.
- 첫 줄은 헤더, 나머지 줄은 레코드입니다.
- 필드는 앞뒤 공백을 제거하며, 숫자로 해석 가능한 값은 숫자로 변환합니다.
- 헤더보다 짧은 행은 빈 문자열로 채우고, 긴 행의 초과 값은 버립니다.

직렬화 규칙:
- 헤더는 모든 레코드 키의 합집합 (처음 등장한 순서)
- ',' '"' '\\n' 을 포함한 필드만 따옴표로 감싸고 '"'는 '""'로 이스케이프
- 출력은 '\\n'으로 연결하고 마지막에 '\\n' 하나를 붙입니다.
"""

import json
import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

LINE_SPLIT_PATTERN = re.compile(r"\r?\n")

# 10진수 리터럴: 부호, 정수부/소수부, 지수 ("1e2", ".5", "5." 허용). ASCII 숫자만
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# 부호 없는 16/8/2진 정수 리터럴
PREFIXED_INT_PATTERN = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)

# 따옴표가 필요한 문자
QUOTE_TRIGGERS = (",", '"', "\n")


@dataclass
class CsvTable:
    """
    CSV 파싱 결과

    Attributes:
        headers: 헤더 목록 (첫 번째 비어있지 않은 줄)
        records: 헤더 → 값 매핑 목록 (모든 레코드가 헤더와 같은 키 집합)
    """

    headers: list[str] = field(default_factory=list)
    records: list[dict[str, Any]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        """레코드 수"""
        return len(self.records)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (직렬화용)"""
        return {"headers": list(self.headers), "records": [dict(r) for r in self.records]}


def parse_csv_line(line: str) -> list[str]:
    '''
    한 줄을 필드 목록으로 토큰화

    따옴표 밖: '"'는 따옴표 상태 진입, ','는 필드 종료, 나머지는 버퍼에 추가.
    따옴표 안: '""'는 '"' 하나로, 단독 '"'는 따옴표 상태 종료, 나머지는 그대로 추가.

    Examples:
        >>> parse_csv_line('a, "b, c" ,"He said ""hi"""')
        ['a', 'b, c', 'He said "hi"']
        >>> parse_csv_line('""""""')
        ['""']
    '''
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]

        if in_quotes:
            if char == '"':
                if i + 1 < length and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

        i += 1

    fields.append("".join(current).strip())
    return fields


def to_number(value: str) -> int | float | None:
    """
    문자열을 숫자로 변환 (변환 불가 시 None)

    10진수 리터럴(부호/소수/지수)과 부호 없는 0x/0o/0b 정수를 허용합니다.
    정수 값은 int, 그 외는 float로 반환하며 무한대/NaN은 허용하지 않습니다.

    Examples:
        >>> to_number("1e2")
        100
        >>> to_number("0.5")
        0.5
        >>> to_number("0x1F")
        31
        >>> to_number("Infinity") is None
        True
    """
    text = value.strip()
    if not text:
        return None

    if PREFIXED_INT_PATTERN.fullmatch(text):
        return int(text, 0)

    if not DECIMAL_PATTERN.fullmatch(text):
        return None

    if "." not in text and "e" not in text and "E" not in text:
        try:
            return int(text)
        except ValueError:
            # 정수 문자열 자릿수 제한 초과: float로 해석 (무한대 → None)
            pass

    number = float(text)
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) < 2**53:
        return int(number)
    return number


def coerce_field(value: str) -> Any:
    """비어있지 않고 숫자로 해석 가능한 값은 숫자로, 그 외는 원본 문자열 유지"""
    if value == "":
        return value
    number = to_number(value)
    return value if number is None else number


def parse_csv(text: str) -> CsvTable:
    """
    CSV 텍스트를 CsvTable로 변환

    잘못된 입력에 대해서도 예외를 발생시키지 않습니다.

    Examples:
        >>> table = parse_csv("a,b,c\\n1\\n")
        >>> table.records
        [{'a': 1, 'b': '', 'c': ''}]
        >>> parse_csv("").headers
        []
    """
    lines = [line for line in LINE_SPLIT_PATTERN.split(text) if line.strip() != ""]

    if not lines:
        return CsvTable(headers=[], records=[])

    headers = parse_csv_line(lines[0])
    records: list[dict[str, Any]] = []

    for line in lines[1:]:
        values = parse_csv_line(line)
        record: dict[str, Any] = {}
        for j, header in enumerate(headers):
            raw = values[j] if j < len(values) else ""
            record[header] = coerce_field(raw)
        records.append(record)

    return CsvTable(headers=headers, records=records)


def stringify_value(value: Any) -> str:
    """
    필드 값을 CSV 텍스트로 변환

    - None → ""
    - bool → "true" / "false"
    - 정수 값을 가진 float → 소수점 없이 ("3.0" → "3")
    - dict/list → 압축 JSON 문자열
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def escape_csv_field(value: Any) -> str:
    '''
    필드 값을 CSV 셀 텍스트로 이스케이프

    Examples:
        >>> escape_csv_field('She said "hi"')
        '"She said ""hi"""'
        >>> escape_csv_field("plain")
        'plain'
    '''
    text = stringify_value(value)
    if any(trigger in text for trigger in QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def collect_headers(records: Iterable[Mapping[str, Any]]) -> list[str]:
    """모든 레코드 키의 합집합 (처음 등장한 순서 유지)"""
    headers: dict[str, None] = {}
    for record in records:
        for key in record.keys():
            headers.setdefault(key, None)
    return list(headers)


def write_csv(records: list[Mapping[str, Any]]) -> str:
    """
    레코드 목록을 CSV 텍스트로 직렬화

    입력 검증은 호출자 책임입니다 (excel 핸들러에서 수행).

    Examples:
        >>> write_csv([{"a": 1, "b": 2}, {"b": 3, "c": 4}])
        'a,b,c\\n1,2,\\n,3,4\\n'
    """
    headers = collect_headers(records)
    lines = [",".join(escape_csv_field(h) for h in headers)]

    for record in records:
        lines.append(",".join(escape_csv_field(record.get(h)) for h in headers))

    return "\n".join(lines) + "\n"
