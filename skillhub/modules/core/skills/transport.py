"""
외부 제공자 요청 전송 계층

스킬 핸들러는 외부 API에 직접 접근하지 않고, 컨텍스트로 주입된
provider_client(우선) 또는 gateway_client를 통해서만 요청합니다.

- ProviderClient: 주입 가능한 클라이언트 프로토콜
- resolve_timeout_ms: 컨텍스트 설정 기반 타임아웃 결정 (상한 적용)
- request_with_timeout: 단일 요청에 타임아웃 적용 + 실패를 ProviderError로 변환
- HttpProviderClient: httpx 기반 기본 구현 (URL 안전성 검증 포함)
"""

import asyncio
import ipaddress
import time
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlparse

import httpx

from ....lib.errors import ErrorCode, ProviderError
from ....lib.logger import get_logger
from .interfaces import SkillContext

logger = get_logger(__name__)

BLOCKED_HOST_PATTERNS = (
    "localhost",
    "127.0.0.1",
    "169.254.169.254",  # AWS metadata
    "metadata.google.internal",  # GCP metadata
    "0.0.0.0",
    "[::1]",
    "[::]",
)


@runtime_checkable
class ProviderClient(Protocol):
    """
    외부 제공자 클라이언트 프로토콜

    request()는 디코딩된 응답 데이터를 반환하고, 실패 시 예외를 발생시킵니다.
    """

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: dict[str, Any] | None = None,
    ) -> Any: ...


def resolve_timeout_ms(context: SkillContext | None, default_ms: int, max_ms: int) -> int:
    """
    요청 타임아웃 결정

    context.config["timeout_ms"]가 양수면 max_ms로 상한을 적용하고,
    그 외(누락, 0 이하, 숫자 아님)는 default_ms를 사용합니다.

    Examples:
        >>> resolve_timeout_ms(SkillContext(config={"timeout_ms": 500000}), 30000, 120000)
        120000
    """
    if context is None:
        return default_ms

    configured = context.config.get("timeout_ms")
    if isinstance(configured, int | float) and not isinstance(configured, bool) and configured > 0:
        return min(configured, max_ms)
    return default_ms


async def request_with_timeout(
    client: Any,
    method: str,
    path: str,
    body: Any,
    timeout_ms: int | float,
) -> Any:
    """
    타임아웃을 적용한 단일 요청

    asyncio.wait_for가 타임아웃 시 요청 코루틴을 취소합니다.

    Raises:
        ProviderError: PROVIDER-002 (타임아웃) 또는 PROVIDER-003 (그 외 실패)
    """
    try:
        return await asyncio.wait_for(
            client.request(method, path, body, {"timeout_ms": timeout_ms}),
            timeout=timeout_ms / 1000.0,
        )
    except TimeoutError as e:
        logger.warning("제공자 요청 타임아웃", method=method, timeout_ms=timeout_ms)
        raise ProviderError(ErrorCode.PROVIDER_002, timeout_ms=timeout_ms) from e
    except ProviderError:
        raise
    except Exception as e:
        logger.warning("제공자 요청 실패", method=method, error_type=type(e).__name__)
        raise ProviderError(
            ErrorCode.PROVIDER_003, reason=str(e) or "Unknown upstream error"
        ) from e


class HttpProviderClient:
    """
    httpx 기반 제공자 클라이언트

    경로 prefix별로 다른 기본 URL을 사용할 수 있습니다
    (예: Open-Meteo의 /v1/archive, /v1/search는 별도 호스트).

    사용 예시:
        async with HttpProviderClient("https://api.open-meteo.com") as client:
            data = await client.request("GET", "/v1/forecast?latitude=1&longitude=2")
    """

    def __init__(
        self,
        base_url: str,
        route_base_urls: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        timeout_ms: int = 30000,
    ):
        self.base_url = base_url.rstrip("/")
        self.route_base_urls = {
            prefix: url.rstrip("/") for prefix, url in (route_base_urls or {}).items()
        }
        self.headers = dict(headers or {})
        self.timeout_ms = timeout_ms
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, provider_config: dict[str, Any]) -> "HttpProviderClient":
        """providers.<이름> 설정 섹션에서 생성"""
        return cls(
            base_url=provider_config["base_url"],
            route_base_urls=provider_config.get("route_base_urls"),
            headers=provider_config.get("headers"),
            timeout_ms=int(provider_config.get("timeout_ms", 30000)),
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_ms / 1000.0),
                follow_redirects=False,
                verify=True,
                headers=self.headers,
            )
        return self._client

    def build_url(self, path: str) -> str:
        """경로에 맞는 기본 URL을 붙여 전체 URL 생성"""
        base_url = self.base_url
        for prefix, route_url in self.route_base_urls.items():
            if path.startswith(prefix):
                base_url = route_url
                break
        return f"{base_url}{path}"

    def _validate_url_safety(self, url: str) -> tuple[bool, str | None]:
        """
        SSRF 방어를 위한 URL 안전성 검증

        Returns:
            (검증 성공 여부, 오류 메시지)
        """
        parsed = urlparse(url)

        if parsed.scheme not in ("http", "https"):
            return False, f"disallowed scheme: {parsed.scheme}"

        hostname = parsed.hostname
        if not hostname:
            return False, "invalid hostname"

        hostname_lower = hostname.lower()
        for pattern in BLOCKED_HOST_PATTERNS:
            if pattern in hostname_lower:
                logger.warning("SSRF 차단: 위험한 호스트 감지", hostname=hostname)
                return False, f"blocked host: {hostname}"

        try:
            ip_obj = ipaddress.ip_address(hostname)
        except ValueError:
            # 도메인 이름은 허용
            return True, None

        if ip_obj.is_private or ip_obj.is_loopback or ip_obj.is_link_local:
            logger.warning("SSRF 차단: Private IP 대역 감지", hostname=hostname)
            return False, f"private address: {hostname}"

        return True, None

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """
        HTTP 요청 후 JSON 응답 반환

        Raises:
            ProviderError: 안전하지 않은 URL (PROVIDER-004)
            httpx.HTTPStatusError: 4xx/5xx 응답
            httpx.RequestError: 네트워크 오류
        """
        url = self.build_url(path)
        is_safe, reason = self._validate_url_safety(url)
        if not is_safe:
            raise ProviderError(ErrorCode.PROVIDER_004, reason=reason)

        options = options or {}
        request_kwargs: dict[str, Any] = {"headers": options.get("headers")}
        if body is not None:
            request_kwargs["json"] = body
        if options.get("timeout_ms"):
            request_kwargs["timeout"] = httpx.Timeout(options["timeout_ms"] / 1000.0)

        start_time = time.time()
        response = await self._get_client().request(method.upper(), url, **request_kwargs)
        response.raise_for_status()

        logger.info(
            "제공자 요청 성공",
            method=method.upper(),
            host=urlparse(url).hostname,
            status_code=response.status_code,
            response_time_ms=round((time.time() - start_time) * 1000),
        )
        return response.json()

    async def close(self) -> None:
        """클라이언트 종료"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpProviderClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
