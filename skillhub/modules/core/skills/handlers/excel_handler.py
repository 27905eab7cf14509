"""
excel-handler 스킬

CSV 파일 읽기(read), 쓰기(write), 숫자 컬럼 분석(analyze).

파라미터:
    action: "read" | "write" | "analyze"
    file_path (별칭 filePath): 대상 파일 경로 (작업 디렉터리 기준으로 해석)
    data: write 전용. 객체 배열 또는 그 JSON 문자열

입력 오류는 SkillHubException으로 발생하며 SkillRunner가 실패 envelope로 변환합니다.
"""

import json
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .....lib.errors import ErrorCode, GeneralError, SkillError, TabularError
from .....lib.logger import get_logger
from ...tabular import (
    CsvTable,
    collect_headers,
    compute_numeric_stats,
    parse_csv,
    read_text_file,
    stringify_value,
    write_csv,
)
from ..interfaces import SkillContext, SkillResponse

logger = get_logger(__name__)

SUPPORTED_ACTIONS = ("read", "write", "analyze")


class _FileParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file_path: str = Field(alias="filePath", min_length=1)

    @property
    def resolved_path(self) -> Path:
        """작업 디렉터리 기준 절대 경로"""
        return Path(self.file_path).expanduser().resolve()


class ReadParams(_FileParams):
    action: Literal["read"]


class WriteParams(_FileParams):
    action: Literal["write"]
    data: Any = None


class AnalyzeParams(_FileParams):
    action: Literal["analyze"]


ExcelParams = Annotated[ReadParams | WriteParams | AnalyzeParams, Field(discriminator="action")]

_params_adapter: TypeAdapter[ReadParams | WriteParams | AnalyzeParams] = TypeAdapter(ExcelParams)


def parse_params(params: dict[str, Any]) -> ReadParams | WriteParams | AnalyzeParams:
    """
    액션별 파라미터 검증

    Raises:
        SkillError: action/file_path 누락 (SKILL-003), 지원하지 않는 액션 (SKILL-004)
        GeneralError: 그 외 타입 오류 (GENERAL-002)
    """
    action = params.get("action")
    file_path = params.get("file_path") or params.get("filePath")

    if not action or not file_path:
        raise SkillError(ErrorCode.SKILL_003, parameters="'action' and 'filePath'")

    if action not in SUPPORTED_ACTIONS:
        raise SkillError(
            ErrorCode.SKILL_004, action=action, supported=", ".join(SUPPORTED_ACTIONS)
        )

    try:
        return _params_adapter.validate_python(
            {"action": action, "file_path": file_path, "data": params.get("data")}
        )
    except ValidationError as e:
        raise GeneralError(ErrorCode.GENERAL_002, reason=e.errors()[0]["msg"]) from e


def _load_table(path: Path) -> CsvTable:
    if not path.exists():
        raise TabularError(ErrorCode.CSV_001, file_path=str(path))

    try:
        text = read_text_file(path)
    except OSError as e:
        raise TabularError(ErrorCode.CSV_005, file_path=str(path), reason=str(e)) from e

    return parse_csv(text)


def _coerce_records(data: Any) -> list[dict[str, Any]]:
    """write 입력 검증 (누락 / JSON 파싱 실패 / 비어있지 않은 객체 배열 아님)"""
    if data is None or (not data and not isinstance(data, (list, dict))):
        raise TabularError(ErrorCode.CSV_002)

    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise TabularError(ErrorCode.CSV_003, reason=str(e)) from e

    if not isinstance(data, list) or not data or not all(isinstance(r, dict) for r in data):
        raise TabularError(ErrorCode.CSV_004)

    return data


def read_csv(request: ReadParams) -> SkillResponse:
    """CSV 읽기"""
    path = request.resolved_path
    table = _load_table(path)

    lines = [
        f"CSV Read: {path.name}",
        "==================",
        f"Rows: {table.row_count}",
        f"Columns: {', '.join(table.headers)}",
        "",
        "Data (JSON):",
        json.dumps(table.records, indent=2, ensure_ascii=False),
    ]

    logger.info("CSV 읽기 완료", file=path.name, rows=table.row_count)
    return SkillResponse.ok(
        "\n".join(lines),
        action="read",
        row_count=table.row_count,
        columns=table.headers,
        file_path=str(path),
    )


def write_csv_file(request: WriteParams) -> SkillResponse:
    """CSV 쓰기 (상위 디렉터리 자동 생성)"""
    records = _coerce_records(request.data)
    headers = collect_headers(records)
    content = write_csv(records)

    path = request.resolved_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")

    logger.info("CSV 쓰기 완료", file=path.name, rows=len(records), columns=len(headers))
    return SkillResponse.ok(
        f"CSV written to {path} ({len(records)} rows, {len(headers)} columns)",
        action="write",
        row_count=len(records),
        columns=headers,
        file_path=str(path),
    )


def analyze_csv(request: AnalyzeParams) -> SkillResponse:
    """CSV 분석 (행의 과반이 숫자인 컬럼의 통계)"""
    path = request.resolved_path
    table = _load_table(path)
    numeric_stats = compute_numeric_stats(table)

    lines = [
        f"CSV Analysis: {path.name}",
        "============================",
        f"Total rows: {table.row_count}",
        f"Total columns: {len(table.headers)}",
        f"Column names: {', '.join(table.headers)}",
        "",
    ]

    if numeric_stats:
        lines.append("Numeric Column Statistics:")
        lines.append("--------------------------")
        for column, stats in numeric_stats.items():
            lines.extend(
                [
                    f"  {column}:",
                    f"    Count: {stats.count}",
                    f"    Min: {stringify_value(stats.min)}",
                    f"    Max: {stringify_value(stats.max)}",
                    f"    Mean: {stats.mean:.4f}",
                    f"    Std Dev: {stats.std_dev:.4f}",
                    f"    Sum: {stringify_value(stats.sum)}",
                    "",
                ]
            )
    else:
        lines.append("No numeric columns detected.")

    return SkillResponse.ok(
        "\n".join(lines),
        action="analyze",
        row_count=table.row_count,
        columns=table.headers,
        numeric_columns=list(numeric_stats),
        numeric_stats={column: stats.to_dict() for column, stats in numeric_stats.items()},
        file_path=str(path),
    )


async def execute(params: dict[str, Any], context: SkillContext | None = None) -> SkillResponse:
    """
    excel-handler 진입점

    Example:
        >>> await execute({"action": "read", "filePath": "data/people.csv"}, SkillContext())
    """
    request = parse_params(params)

    if isinstance(request, ReadParams):
        return read_csv(request)
    if isinstance(request, WriteParams):
        return write_csv_file(request)
    return analyze_csv(request)
