"""HTTP transport for the control server's JSON envelope API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from pysams._redact import redact_for_log
from pysams.config import SamsConfig
from pysams.exceptions import SamsTransportError
from pysams.models.envelope import ApiResponse

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the client and snapshot fetcher.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`ApiTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Mapping[str, Any] | None = None,
    ) -> ApiResponse: ...


class ApiTransport:
    """aiohttp-backed transport returning parsed success/failure envelopes."""

    def __init__(self, config: SamsConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Mapping[str, Any] | None = None,
    ) -> ApiResponse:
        """Send one request and parse the ``{success, message, data}`` envelope.

        A non-2xx status is not an error by itself: the server answers
        rejected actions with ``400`` and a regular failure envelope.
        Only a body that is not such an envelope raises.
        """
        url = self._config.api_url(endpoint)
        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)

        _logger.debug("%s %s body=%s", method, url, redact_for_log(json_body))

        try:
            async with self._http.request(
                method,
                url,
                json=dict(json_body) if json_body is not None else None,
                timeout=timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise SamsTransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc
        except TimeoutError as exc:
            raise SamsTransportError(f"Request to {endpoint} timed out", endpoint=endpoint) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SamsTransportError(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise SamsTransportError(
                f"Response from {endpoint} is not a JSON object",
                status_code=status,
                endpoint=endpoint,
            )

        try:
            response = ApiResponse.model_validate(body)
        except ValidationError as exc:
            raise SamsTransportError(
                f"Malformed envelope from {endpoint}: {exc.error_count()} error(s)",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> %s success=%s", method, url, status, response.success)
        return response
