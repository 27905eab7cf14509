"""
weather-api 스킬

주입된 provider_client(우선) 또는 gateway_client를 통해 Open-Meteo 형식의
날씨 데이터를 조회합니다. 스킬 코드는 API 키나 호스트를 직접 다루지 않습니다.

액션:
    get_current, get_forecast, get_hourly, get_historical, search_location, list_variables

규칙:
- 요청 타임아웃: 기본 30초, 최대 120초 (context.config["timeout_ms"])
- 액션별 입력 검증 (pydantic), 실패 시 INVALID_INPUT
- 모든 결과 텍스트에서 토큰/키 마스킹 (redact_sensitive)
"""

import math
import re
from datetime import UTC, date, datetime
from typing import Annotated, Any, Literal
from urllib.parse import quote

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from .....lib.errors import ErrorCode, ProviderError, get_error_message
from .....lib.logger import get_logger
from .....lib.secret_redactor import redact_sensitive
from ...tabular import stringify_value, to_number
from ..interfaces import SkillContext, SkillResponse
from ..transport import request_with_timeout, resolve_timeout_ms

logger = get_logger(__name__)

VALID_ACTIONS = (
    "get_current",
    "get_forecast",
    "get_hourly",
    "get_historical",
    "search_location",
    "list_variables",
)

WEATHER_VARIABLES: dict[str, list[str]] = {
    "current": [
        "temperature_2m", "relative_humidity_2m", "apparent_temperature",
        "precipitation", "rain", "snowfall", "cloud_cover",
        "wind_speed_10m", "wind_direction_10m", "wind_gusts_10m",
        "pressure_msl", "surface_pressure", "is_day",
        "weather_code",
    ],
    "hourly": [
        "temperature_2m", "relative_humidity_2m", "apparent_temperature",
        "precipitation_probability", "precipitation", "rain", "snowfall",
        "cloud_cover", "visibility", "wind_speed_10m", "wind_direction_10m",
        "uv_index", "weather_code",
    ],
    "daily": [
        "temperature_2m_max", "temperature_2m_min", "apparent_temperature_max",
        "apparent_temperature_min", "sunrise", "sunset", "precipitation_sum",
        "rain_sum", "snowfall_sum", "precipitation_hours",
        "wind_speed_10m_max", "wind_gusts_10m_max", "wind_direction_10m_dominant",
        "uv_index_max", "weather_code",
    ],
}  # fmt: skip

DEFAULT_TIMEOUT_MS = 30000
MAX_TIMEOUT_MS = 120000

DEFAULT_FORECAST_DAYS = 7
DEFAULT_FORECAST_HOURS = 24
HOURLY_DISPLAY_LIMIT = 24
HISTORICAL_DISPLAY_LIMIT = 10
MAX_LOCATION_NAME_LENGTH = 200

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

_MISSING = object()


# ========================================
# 값 포맷팅
# ========================================


def format_value(value: Any) -> str:
    """
    응답 값 텍스트 변환 (정수 값 float는 소수점 없이)

    Examples:
        >>> format_value(40.0)
        '40'
        >>> format_value(None)
        'null'
    """
    if value is None:
        return "null"
    return stringify_value(value)


def _parse_number(value: Any) -> float | int | None:
    if isinstance(value, str):
        return to_number(value)
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


# ========================================
# 입력 검증
# ========================================


def _validate_coordinate(value: Any, name: str, limit: int) -> int | float:
    if value is None:
        raise ValueError(f'The "{name}" parameter is required.')
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ValueError(f'The "{name}" parameter must be a number.')

    number = _parse_number(value)
    if number is None:
        raise ValueError(f'The "{name}" parameter must be a valid number.')
    if number < -limit or number > limit:
        raise ValueError(
            f'The "{name}" parameter must be between -{limit} and {limit}. '
            f"Got {format_value(number)}."
        )
    return number


def _validate_count(value: Any, name: str, default: int, maximum: int) -> int:
    if value is None:
        return default

    number = None if isinstance(value, bool) else _parse_number(value)
    if not isinstance(number, int | float) or not float(number).is_integer():
        raise ValueError(f'The "{name}" parameter must be an integer.')
    if number < 1 or number > maximum:
        raise ValueError(
            f'The "{name}" parameter must be between 1 and {maximum}. Got {format_value(number)}.'
        )
    return int(number)


def _validate_date(value: Any, name: str) -> str:
    if value is None:
        raise ValueError(f'The "{name}" parameter is required.')
    if not isinstance(value, str):
        raise ValueError(f'The "{name}" parameter must be a string in YYYY-MM-DD format.')

    trimmed = value.strip()
    if not DATE_PATTERN.fullmatch(trimmed):
        raise ValueError(
            f'The "{name}" parameter must be in YYYY-MM-DD format. Got "{trimmed}".'
        )
    try:
        date.fromisoformat(trimmed)
    except ValueError:
        raise ValueError(
            f'The "{name}" parameter is not a valid date. Got "{trimmed}".'
        ) from None
    return trimmed


class _CoordinateParams(BaseModel):
    lat: Any = Field(default=None, validate_default=True)
    lon: Any = Field(default=None, validate_default=True)

    @field_validator("lat", mode="before")
    @classmethod
    def validate_lat(cls, value: Any) -> int | float:
        return _validate_coordinate(value, "lat", 90)

    @field_validator("lon", mode="before")
    @classmethod
    def validate_lon(cls, value: Any) -> int | float:
        return _validate_coordinate(value, "lon", 180)


class CurrentParams(_CoordinateParams):
    action: Literal["get_current"]


class ForecastParams(_CoordinateParams):
    action: Literal["get_forecast"]
    days: Any = Field(default=None, validate_default=True)

    @field_validator("days", mode="before")
    @classmethod
    def validate_days(cls, value: Any) -> int:
        return _validate_count(value, "days", DEFAULT_FORECAST_DAYS, 16)


class HourlyParams(_CoordinateParams):
    action: Literal["get_hourly"]
    hours: Any = Field(default=None, validate_default=True)

    @field_validator("hours", mode="before")
    @classmethod
    def validate_hours(cls, value: Any) -> int:
        return _validate_count(value, "hours", DEFAULT_FORECAST_HOURS, 168)


class HistoricalParams(_CoordinateParams):
    action: Literal["get_historical"]
    start_date: Any = Field(default=None, validate_default=True)
    end_date: Any = Field(default=None, validate_default=True)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validate_dates(cls, value: Any, info: Any) -> str:
        return _validate_date(value, info.field_name)


class SearchLocationParams(BaseModel):
    action: Literal["search_location"]
    name: Any = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        if not value or not isinstance(value, str):
            raise ValueError('The "name" parameter is required and must be a non-empty string.')
        trimmed = value.strip()
        if not trimmed:
            raise ValueError('The "name" parameter must not be empty.')
        if len(trimmed) > MAX_LOCATION_NAME_LENGTH:
            raise ValueError(
                f'The "name" parameter must be at most {MAX_LOCATION_NAME_LENGTH} characters. '
                f"Got {len(trimmed)}."
            )
        return trimmed


class ListVariablesParams(BaseModel):
    action: Literal["list_variables"]


WeatherParams = Annotated[
    CurrentParams
    | ForecastParams
    | HourlyParams
    | HistoricalParams
    | SearchLocationParams
    | ListVariablesParams,
    Field(discriminator="action"),
]

_params_adapter: TypeAdapter[Any] = TypeAdapter(WeatherParams)


def validation_message(error: ValidationError) -> str:
    """첫 번째 검증 오류의 메시지 (필드 정의 순서 기준)"""
    first = error.errors()[0]
    ctx_error = first.get("ctx", {}).get("error")
    return str(ctx_error) if ctx_error is not None else first["msg"]


def validate(params: dict[str, Any] | None) -> tuple[bool, str | None]:
    """
    액션별 파라미터 검증 (요청 없이 검사만)

    Returns:
        (유효 여부, 오류 메시지)
    """
    action = (params or {}).get("action")
    if not action or action not in VALID_ACTIONS:
        return False, f'Invalid action "{action}". Must be one of: {", ".join(VALID_ACTIONS)}'
    try:
        _params_adapter.validate_python(params)
    except ValidationError as e:
        return False, validation_message(e)
    return True, None


# ========================================
# 응답 헬퍼
# ========================================


def _timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def provider_not_configured() -> SkillResponse:
    """PROVIDER_NOT_CONFIGURED 실패 응답"""
    message = get_error_message(ErrorCode.PROVIDER_001.value, lang="en", service="Weather API")
    return SkillResponse.failure(
        f"Error: {message}",
        {"code": "PROVIDER_NOT_CONFIGURED", "message": message, "retriable": False},
    )


def _section(data: Any, key: str) -> dict[str, Any]:
    """data[key] 또는 data 자체 (둘 다 비어있으면 빈 dict)"""
    section = data.get(key) if isinstance(data, dict) else None
    section = section or data or {}
    return section if isinstance(section, dict) else {}


def _at(section: dict[str, Any], name: str, index: int) -> Any:
    values = section.get(name)
    if isinstance(values, list) and index < len(values):
        return values[index]
    return _MISSING


def _daily_line(daily: dict[str, Any], index: int, time_values: list[Any], with_code: bool) -> str:
    parts = [f"{format_value(time_values[index])}:"]
    max_temp = _at(daily, "temperature_2m_max", index)
    min_temp = _at(daily, "temperature_2m_min", index)
    precip = _at(daily, "precipitation_sum", index)

    if max_temp is not _MISSING and min_temp is not _MISSING:
        parts.append(f"{format_value(min_temp)}-{format_value(max_temp)}°C")
    if precip is not _MISSING:
        parts.append(f"precip: {format_value(precip)}mm")
    if with_code:
        code = _at(daily, "weather_code", index)
        if code is not _MISSING:
            parts.append(f"code: {format_value(code)}")
    return " ".join(parts)


# ========================================
# 액션 핸들러
# ========================================


def _location(request: _CoordinateParams) -> str:
    return f"latitude={format_value(request.lat)}&longitude={format_value(request.lon)}"


async def get_current(client: Any, request: CurrentParams, timeout_ms: int) -> SkillResponse:
    """GET /v1/forecast?latitude=..&longitude=..&current=.."""
    current_vars = ",".join(WEATHER_VARIABLES["current"])
    path = f"/v1/forecast?{_location(request)}&current={current_vars}"
    data = await request_with_timeout(client, "GET", path, None, timeout_ms)

    current = _section(data, "current")
    units = (data.get("current_units") if isinstance(data, dict) else None) or {}

    def unit(name: str, default: str) -> str:
        return units.get(name) or default

    fields = [
        ("temperature_2m", lambda v: f"Temperature: {v}{unit('temperature_2m', '°C')}"),
        ("relative_humidity_2m", lambda v: f"Humidity: {v}%"),
        (
            "apparent_temperature",
            lambda v: f"Feels like: {v}{unit('apparent_temperature', '°C')}",
        ),
        ("wind_speed_10m", lambda v: f"Wind: {v} {unit('wind_speed_10m', 'km/h')}"),
        ("wind_direction_10m", lambda v: f"Wind direction: {v}°"),
        ("precipitation", lambda v: f"Precipitation: {v} mm"),
        ("cloud_cover", lambda v: f"Cloud cover: {v}%"),
        ("pressure_msl", lambda v: f"Pressure: {v} hPa"),
        ("weather_code", lambda v: f"Weather code: {v}"),
    ]

    lines = [
        "Current Weather",
        f"Location: {format_value(request.lat)}, {format_value(request.lon)}",
    ]
    lines.extend(render(format_value(current[name])) for name, render in fields if name in current)

    return SkillResponse.ok(
        redact_sensitive("\n".join(lines)),
        action="get_current",
        lat=request.lat,
        lon=request.lon,
        current=current,
        timestamp=_timestamp(),
    )


async def get_forecast(client: Any, request: ForecastParams, timeout_ms: int) -> SkillResponse:
    """GET /v1/forecast?..&daily=..&forecast_days=.."""
    daily_vars = ",".join(WEATHER_VARIABLES["daily"])
    path = f"/v1/forecast?{_location(request)}&daily={daily_vars}&forecast_days={request.days}"
    data = await request_with_timeout(client, "GET", path, None, timeout_ms)

    daily = _section(data, "daily")
    time_values = daily.get("time") or []

    lines = [
        f"Weather Forecast ({request.days} days)",
        f"Location: {format_value(request.lat)}, {format_value(request.lon)}",
        f"Days: {len(time_values)}",
        "",
    ]
    lines.extend(
        _daily_line(daily, i, time_values, with_code=True) for i in range(len(time_values))
    )

    return SkillResponse.ok(
        redact_sensitive("\n".join(lines)),
        action="get_forecast",
        lat=request.lat,
        lon=request.lon,
        days=request.days,
        forecast_count=len(time_values),
        daily=daily,
        timestamp=_timestamp(),
    )


async def get_hourly(client: Any, request: HourlyParams, timeout_ms: int) -> SkillResponse:
    """GET /v1/forecast?..&hourly=..&forecast_hours=.."""
    hourly_vars = ",".join(WEATHER_VARIABLES["hourly"])
    path = f"/v1/forecast?{_location(request)}&hourly={hourly_vars}&forecast_hours={request.hours}"
    data = await request_with_timeout(client, "GET", path, None, timeout_ms)

    hourly = _section(data, "hourly")
    time_values = hourly.get("time") or []
    hour_count = len(time_values)

    lines = [
        f"Hourly Forecast ({request.hours} hours)",
        f"Location: {format_value(request.lat)}, {format_value(request.lon)}",
        f"Hours: {hour_count}",
        "",
    ]

    for i in range(min(hour_count, HOURLY_DISPLAY_LIMIT)):
        parts = [f"{format_value(time_values[i])}:"]
        temp = _at(hourly, "temperature_2m", i)
        precip = _at(hourly, "precipitation", i)
        if temp is not _MISSING:
            parts.append(f"{format_value(temp)}°C")
        if precip is not _MISSING:
            parts.append(f"precip: {format_value(precip)}mm")
        lines.append(" ".join(parts))

    if hour_count > HOURLY_DISPLAY_LIMIT:
        lines.append(f"... and {hour_count - HOURLY_DISPLAY_LIMIT} more hours")

    return SkillResponse.ok(
        redact_sensitive("\n".join(lines)),
        action="get_hourly",
        lat=request.lat,
        lon=request.lon,
        hours=request.hours,
        hour_count=hour_count,
        hourly=hourly,
        timestamp=_timestamp(),
    )


async def get_historical(
    client: Any, request: HistoricalParams, timeout_ms: int
) -> SkillResponse:
    """GET /v1/archive?..&start_date=..&end_date=..&daily=.."""
    daily_vars = ",".join(WEATHER_VARIABLES["daily"])
    path = (
        f"/v1/archive?{_location(request)}&start_date={request.start_date}"
        f"&end_date={request.end_date}&daily={daily_vars}"
    )
    data = await request_with_timeout(client, "GET", path, None, timeout_ms)

    daily = _section(data, "daily")
    time_values = daily.get("time") or []
    day_count = len(time_values)

    lines = [
        "Historical Weather Data",
        f"Location: {format_value(request.lat)}, {format_value(request.lon)}",
        f"Period: {request.start_date} to {request.end_date}",
        f"Days: {day_count}",
        "",
    ]
    lines.extend(
        _daily_line(daily, i, time_values, with_code=False)
        for i in range(min(day_count, HISTORICAL_DISPLAY_LIMIT))
    )
    if day_count > HISTORICAL_DISPLAY_LIMIT:
        lines.append(f"... and {day_count - HISTORICAL_DISPLAY_LIMIT} more days")

    return SkillResponse.ok(
        redact_sensitive("\n".join(lines)),
        action="get_historical",
        lat=request.lat,
        lon=request.lon,
        start_date=request.start_date,
        end_date=request.end_date,
        day_count=day_count,
        daily=daily,
        timestamp=_timestamp(),
    )


async def search_location(
    client: Any, request: SearchLocationParams, timeout_ms: int
) -> SkillResponse:
    """GET /v1/search?name=..&count=10"""
    encoded_name = quote(request.name, safe="-_.!~*'()")
    path = f"/v1/search?name={encoded_name}&count=10"
    data = await request_with_timeout(client, "GET", path, None, timeout_ms)

    results: Any = []
    if isinstance(data, dict):
        results = data.get("results") or data.get("data") or []
    if not isinstance(results, list):
        results = []

    lines = [
        "Location Search Results",
        f'Query: "{request.name}"',
        f"Results: {len(results)}",
        "",
    ]

    for i, location in enumerate(results, start=1):
        location = location if isinstance(location, dict) else {}
        parts = [f"{i}. {location.get('name') or 'Unknown'}"]
        if location.get("admin1"):
            parts.append(str(location["admin1"]))
        if location.get("country"):
            parts.append(str(location["country"]))
        if "latitude" in location and "longitude" in location:
            parts.append(
                f"({format_value(location['latitude'])}, {format_value(location['longitude'])})"
            )
        lines.append(", ".join(parts))

    return SkillResponse.ok(
        redact_sensitive("\n".join(lines)),
        action="search_location",
        query=request.name,
        result_count=len(results),
        results=results,
        timestamp=_timestamp(),
    )


def list_variables() -> SkillResponse:
    """사용 가능한 변수 목록 (API 호출 없음)"""
    lines = ["Available Weather Variables"]
    for section, label in (("current", "Current"), ("hourly", "Hourly"), ("daily", "Daily")):
        variables = WEATHER_VARIABLES[section]
        lines.append("")
        lines.append(f"{label} variables ({len(variables)}):")
        lines.extend(f"  {i}. {v}" for i, v in enumerate(variables, start=1))

    return SkillResponse.ok(
        "\n".join(lines),
        action="list_variables",
        variables={section: list(v) for section, v in WEATHER_VARIABLES.items()},
        current_count=len(WEATHER_VARIABLES["current"]),
        hourly_count=len(WEATHER_VARIABLES["hourly"]),
        daily_count=len(WEATHER_VARIABLES["daily"]),
        timestamp=_timestamp(),
    )


_NETWORK_ACTIONS = {
    "get_current": get_current,
    "get_forecast": get_forecast,
    "get_hourly": get_hourly,
    "get_historical": get_historical,
    "search_location": search_location,
}


async def execute(
    params: dict[str, Any] | None, context: SkillContext | None = None
) -> SkillResponse:
    """
    weather-api 진입점

    검증 → 클라이언트 확인 → 요청 순서로 처리하며, 예외를 발생시키지 않습니다.
    """
    params = params or {}
    action = params.get("action")

    if not action or action not in VALID_ACTIONS:
        return SkillResponse.failure(
            f'Error: Invalid action "{action}". Must be one of: {", ".join(VALID_ACTIONS)}',
            "INVALID_ACTION",
        )

    try:
        request = _params_adapter.validate_python(params)
    except ValidationError as e:
        return SkillResponse.failure(f"Error: {validation_message(e)}", "INVALID_INPUT")

    if isinstance(request, ListVariablesParams):
        return list_variables()

    resolved = context.resolve_client() if context is not None else None
    if resolved is None:
        return provider_not_configured()

    client, client_type = resolved
    timeout_ms = resolve_timeout_ms(context, DEFAULT_TIMEOUT_MS, MAX_TIMEOUT_MS)
    logger.debug("날씨 요청", action=action, client_type=client_type, timeout_ms=timeout_ms)

    try:
        return await _NETWORK_ACTIONS[action](client, request, timeout_ms)
    except ProviderError as e:
        return SkillResponse.failure(redact_sensitive(f"Error: {e.message}"), e.envelope_code)
    except Exception as e:
        logger.error("날씨 응답 처리 실패", action=action, error_type=type(e).__name__)
        return SkillResponse.failure(
            redact_sensitive(f"Error during {action}: {e}"),
            "UPSTREAM_ERROR",
            detail=redact_sensitive(str(e)),
        )
