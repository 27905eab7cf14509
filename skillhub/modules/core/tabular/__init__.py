"""
Tabular 모듈 - CSV 파서/라이터 및 컬럼 통계

사용 예시:
    >>> from skillhub.modules.core.tabular import parse_csv, write_csv
    >>> table = parse_csv("name,age\\nAlice,30\\n")
    >>> table.records
    [{'name': 'Alice', 'age': 30}]
    >>> write_csv(table.records)
    'name,age\\nAlice,30\\n'
"""

from .csv_codec import (
    CsvTable,
    coerce_field,
    collect_headers,
    escape_csv_field,
    parse_csv,
    parse_csv_line,
    stringify_value,
    to_number,
    write_csv,
)
from .encoding import detect_encoding, read_text_file
from .stats import ColumnStats, compute_numeric_stats

__all__ = [
    "CsvTable",
    "parse_csv",
    "parse_csv_line",
    "coerce_field",
    "to_number",
    "write_csv",
    "escape_csv_field",
    "stringify_value",
    "collect_headers",
    "ColumnStats",
    "compute_numeric_stats",
    "detect_encoding",
    "read_text_file",
]
