"""
제공자 전송 계층 단위 테스트

타임아웃 결정, 요청 실패 변환, URL 라우팅, SSRF 차단 검증.
"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from skillhub.lib.errors import ProviderError
from skillhub.modules.core.skills import (
    HttpProviderClient,
    ProviderClient,
    SkillContext,
    request_with_timeout,
    resolve_timeout_ms,
)


class TestResolveTimeout:
    """resolve_timeout_ms 테스트"""

    @pytest.mark.parametrize(
        ("config", "expected"),
        [
            ({}, 30000),
            ({"timeout_ms": 5000}, 5000),
            ({"timeout_ms": 500000}, 120000),
            ({"timeout_ms": 0}, 30000),
            ({"timeout_ms": -1}, 30000),
            ({"timeout_ms": "5000"}, 30000),
            ({"timeout_ms": True}, 30000),
        ],
    )
    def test_resolve(self, config: dict, expected: int) -> None:
        """양수만 사용, 상한 적용"""
        assert resolve_timeout_ms(SkillContext(config=config), 30000, 120000) == expected

    def test_without_context(self) -> None:
        """컨텍스트 없으면 기본값"""
        assert resolve_timeout_ms(None, 30000, 120000) == 30000


class TestRequestWithTimeout:
    """request_with_timeout 테스트"""

    @pytest.mark.asyncio
    async def test_passes_timeout_option(self) -> None:
        """클라이언트에 timeout_ms 옵션 전달"""
        client = AsyncMock()
        client.request.return_value = {"ok": True}

        result = await request_with_timeout(client, "GET", "/v1/x", None, 1000)

        assert result == {"ok": True}
        client.request.assert_awaited_once_with("GET", "/v1/x", None, {"timeout_ms": 1000})

    @pytest.mark.asyncio
    async def test_timeout_raises_provider_002(self) -> None:
        """타임아웃은 PROVIDER-002"""

        async def hang(*args: object) -> None:
            await asyncio.sleep(1)

        client = AsyncMock()
        client.request.side_effect = hang

        with pytest.raises(ProviderError) as exc_info:
            await request_with_timeout(client, "GET", "/", None, 20)

        assert exc_info.value.error_code == "PROVIDER-002"
        assert exc_info.value.envelope_code == "TIMEOUT"

    @pytest.mark.asyncio
    async def test_other_errors_become_provider_003(self) -> None:
        """그 외 실패는 PROVIDER-003 (원본 메시지 유지)"""
        client = AsyncMock()
        client.request.side_effect = ConnectionError("refused")

        with pytest.raises(ProviderError) as exc_info:
            await request_with_timeout(client, "GET", "/", None, 1000)

        assert exc_info.value.error_code == "PROVIDER-003"
        assert exc_info.value.message == "refused"
        assert exc_info.value.envelope_code == "UPSTREAM_ERROR"


class TestHttpProviderClient:
    """HttpProviderClient 테스트"""

    def test_satisfies_protocol(self) -> None:
        """ProviderClient 프로토콜 충족"""
        assert isinstance(HttpProviderClient("https://api.example.com"), ProviderClient)

    def test_route_base_urls(self) -> None:
        """경로 prefix별 기본 URL"""
        client = HttpProviderClient.from_config(
            {
                "base_url": "https://api.open-meteo.com/",
                "route_base_urls": {
                    "/v1/archive": "https://archive-api.open-meteo.com",
                    "/v1/search": "https://geocoding-api.open-meteo.com/",
                },
            }
        )

        assert client.build_url("/v1/forecast?a=1") == "https://api.open-meteo.com/v1/forecast?a=1"
        assert client.build_url("/v1/archive?a=1") == "https://archive-api.open-meteo.com/v1/archive?a=1"
        assert client.build_url("/v1/search?name=x") == "https://geocoding-api.open-meteo.com/v1/search?name=x"

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost:8080/x",
            "http://127.0.0.1/x",
            "http://169.254.169.254/latest/meta-data",
            "http://10.0.0.5/x",
            "http://192.168.1.1/x",
            "file:///etc/passwd",
        ],
    )
    def test_unsafe_urls(self, url: str) -> None:
        """내부/메타데이터/비HTTP 주소 차단"""
        is_safe, reason = HttpProviderClient("https://api.example.com")._validate_url_safety(url)

        assert is_safe is False
        assert reason

    def test_public_url_is_safe(self) -> None:
        """공개 도메인 허용"""
        client = HttpProviderClient("https://api.example.com")

        assert client._validate_url_safety("https://api.open-meteo.com/v1/forecast") == (True, None)

    @pytest.mark.asyncio
    async def test_request_blocks_unsafe_base_url(self) -> None:
        """안전하지 않은 URL은 요청 전에 PROVIDER-004"""
        client = HttpProviderClient("http://127.0.0.1:9000")

        with pytest.raises(ProviderError) as exc_info:
            await client.request("GET", "/v1/forecast")

        assert exc_info.value.error_code == "PROVIDER-004"

    @pytest.mark.asyncio
    async def test_request_returns_json(self) -> None:
        """MockTransport 기반 JSON 응답"""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/forecast"
            return httpx.Response(200, json={"current": {"temperature_2m": 3}})

        async with HttpProviderClient("https://api.open-meteo.com") as client:
            client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

            data = await client.request("GET", "/v1/forecast?latitude=1&longitude=2")

        assert data == {"current": {"temperature_2m": 3}}
        assert client._client is None

    @pytest.mark.asyncio
    async def test_http_error_status_raises(self) -> None:
        """4xx/5xx는 httpx.HTTPStatusError"""
        transport = httpx.MockTransport(lambda request: httpx.Response(503, json={}))
        client = HttpProviderClient("https://api.open-meteo.com")
        client._client = httpx.AsyncClient(transport=transport)

        with pytest.raises(httpx.HTTPStatusError):
            await client.request("GET", "/v1/forecast")

        await client.close()
