from __future__ import annotations

from typing import Any

import aiohttp
import pytest

from pysams._transport import ApiTransport
from pysams.config import SamsConfig
from pysams.exceptions import SamsTransportError


class FakeResponse:
    def __init__(self, status: int, text: str) -> None:
        self.status = status
        self._text = text

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    async def text(self) -> str:
        return self._text


class FakeHttpSession:
    def __init__(self, response: FakeResponse | Exception) -> None:
        self._response = response
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def _transport(response: FakeResponse | Exception) -> tuple[ApiTransport, FakeHttpSession]:
    session = FakeHttpSession(response)
    config = SamsConfig(origin="http://panel.local:8080", request_timeout=3.0)
    return ApiTransport(config, session), session  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_success_envelope() -> None:
    transport, session = _transport(FakeResponse(200, '{"success": true, "message": "ok", "data": {"a": 1}}'))

    response = await transport.request("POST", "/api/config", json_body={"authToken": "t"})

    assert response.success is True
    assert response.data == {"a": 1}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://panel.local:8080/api/config"
    assert call["json"] == {"authToken": "t"}
    assert call["timeout"].total == 3.0


@pytest.mark.asyncio
async def test_rejected_action_still_returns_envelope() -> None:
    transport, _session = _transport(FakeResponse(400, '{"success": false, "message": "already running"}'))

    response = await transport.request("POST", "/api/start")

    assert response.success is False
    assert response.message == "already running"


@pytest.mark.asyncio
async def test_network_error_is_wrapped() -> None:
    transport, _session = _transport(aiohttp.ClientConnectionError("refused"))

    with pytest.raises(SamsTransportError) as exc_info:
        await transport.request("GET", "/api/status")

    assert exc_info.value.endpoint == "/api/status"
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_timeout_is_wrapped() -> None:
    transport, _session = _transport(TimeoutError())

    with pytest.raises(SamsTransportError, match="timed out"):
        await transport.request("GET", "/api/status")


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["<html>Bad Gateway</html>", "[1, 2]", '{"success": "maybe"}'])
async def test_non_envelope_body_raises(body: str) -> None:
    transport, _session = _transport(FakeResponse(502, body))

    with pytest.raises(SamsTransportError) as exc_info:
        await transport.request("GET", "/api/status")

    assert exc_info.value.status_code == 502
