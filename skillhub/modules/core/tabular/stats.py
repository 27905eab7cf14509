"""
CSV 컬럼 통계

파싱된 레코드에서 숫자 컬럼을 찾아 기술 통계를 계산합니다.
행의 과반이 숫자인 컬럼만 숫자 컬럼으로 취급합니다.
"""

import logging
import numbers
from dataclasses import asdict, dataclass
from typing import Any

import pandas as pd

from .csv_codec import CsvTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnStats:
    """
    숫자 컬럼 통계

    Attributes:
        count: 숫자 값 개수
        sum: 합계
        mean: 평균
        min: 최솟값
        max: 최댓값
        std_dev: 모표준편차 (ddof=0)
    """

    count: int
    sum: int | float
    mean: float
    min: int | float
    max: int | float
    std_dev: float

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환 (직렬화용)"""
        return asdict(self)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and value == value


def _to_python(value: Any) -> int | float:
    """numpy 스칼라를 파이썬 숫자로 변환"""
    if hasattr(value, "item"):
        value = value.item()
    if isinstance(value, float) and value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value


def compute_numeric_stats(table: CsvTable) -> dict[str, ColumnStats]:
    """
    숫자 컬럼별 통계 계산

    Args:
        table: parse_csv() 결과

    Returns:
        컬럼명 → ColumnStats (헤더 순서 유지)

    Example:
        >>> table = parse_csv("name,age\\nA,30\\nB,40\\n")
        >>> compute_numeric_stats(table)["age"].mean
        35.0
    """
    stats: dict[str, ColumnStats] = {}
    row_count = len(table.records)

    for header in table.headers:
        values = [r.get(header) for r in table.records]
        numeric_values = [v for v in values if _is_number(v)]

        if not numeric_values or len(numeric_values) <= row_count * 0.5:
            continue

        series = pd.Series(numeric_values)
        stats[header] = ColumnStats(
            count=int(series.count()),
            sum=_to_python(series.sum()),
            mean=float(series.mean()),
            min=_to_python(series.min()),
            max=_to_python(series.max()),
            std_dev=float(series.std(ddof=0)),
        )

    logger.debug(f"숫자 컬럼 통계 계산 완료: {len(stats)}/{len(table.headers)}개 컬럼")
    return stats
