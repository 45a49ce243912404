"""High-level async client for the sams control server."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import StrEnum
from typing import Any

import aiohttp
from pydantic import ValidationError

from pysams._constants import CONFIG_ENDPOINT, RUNNING_STATUS, START_ENDPOINT, STOP_ENDPOINT
from pysams._redact import redact_for_log
from pysams._transport import ApiTransport, Transport
from pysams.channel import ConnectionState, StatusChannel
from pysams.config import SamsConfig
from pysams.exceptions import SamsApiError, SamsError, SamsSessionError
from pysams.logsink import LogEntry, LogLevel, LogSink
from pysams.models.envelope import ApiResponse, ConfigResult
from pysams.models.status import StatusFragment
from pysams.models.submission import SubmissionConfig
from pysams.snapshot import SnapshotFetcher
from pysams.state.store import CanonicalState, StateReconciler
from pysams.view.projector import ViewCommand
from pysams.view.surface import NullSurface, RenderSurface

_logger = logging.getLogger(__name__)


class Lifecycle(StrEnum):
    INIT = "init"
    ACTIVE = "active"
    DISPOSED = "disposed"


class SamsClient:
    """Dashboard session for one control server.

    Owns the canonical state, the operator log, the status channel and
    its reconnect timer. Nothing is shared at module level; every
    component gets its collaborators from here.

    Usage::

        async with SamsClient(config, surface=surface) as client:
            await client.save_config(SubmissionConfig(auth_token="..."))
            await client.start()
    """

    def __init__(
        self,
        config: SamsConfig | None = None,
        *,
        surface: RenderSurface | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config if config is not None else SamsConfig()
        self._surface: RenderSurface = surface if surface is not None else NullSurface()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        sink_kwargs: dict[str, Any] = {"clock": clock} if clock is not None else {}
        self._log_sink = LogSink(surface=self._surface, capacity=self._config.log_capacity, **sink_kwargs)
        self._reconciler = StateReconciler(log_sink=self._log_sink, surface=self._surface)
        self._channel: StatusChannel | None = None
        self._snapshot: SnapshotFetcher | None = None
        self._lifecycle = Lifecycle.INIT

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SamsClient:
        if self._lifecycle is not Lifecycle.INIT:
            raise SamsSessionError(f"Client cannot be entered from state {self._lifecycle.value!r}")

        needs_http = self._transport is None or self._config.push_enabled
        if needs_http and self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        if self._transport is None:
            assert self._http_session is not None  # noqa: S101
            self._transport = ApiTransport(self._config, self._http_session)

        self._snapshot = SnapshotFetcher(self._transport, self._reconciler)
        if self._config.push_enabled:
            assert self._http_session is not None  # noqa: S101
            self._channel = StatusChannel(
                url=self._config.ws_url,
                http_session=self._http_session,
                reconciler=self._reconciler,
                log_sink=self._log_sink,
                reconnect_delay=self._config.reconnect_delay,
                heartbeat=self._config.ws_heartbeat,
            )

        self._lifecycle = Lifecycle.ACTIVE
        try:
            # Render the initial (default) state before anything arrives.
            self._surface.render(self._reconciler.view())
            if self._channel is not None:
                self._channel.open()
            await self._snapshot.fetch()
        except BaseException:
            await self.aclose()
            raise
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Dispose the session. Safe to call more than once."""
        if self._lifecycle is Lifecycle.DISPOSED:
            return
        self._lifecycle = Lifecycle.DISPOSED
        channel = self._channel
        self._channel = None
        if channel is not None:
            await channel.close()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None
        self._snapshot = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> SamsConfig:
        return self._config

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle

    @property
    def state(self) -> CanonicalState:
        return self._reconciler.state

    @property
    def view(self) -> ViewCommand:
        return self._reconciler.view()

    @property
    def log_entries(self) -> tuple[LogEntry, ...]:
        return self._log_sink.entries

    @property
    def connection_state(self) -> ConnectionState:
        if self._channel is None:
            return ConnectionState.CLOSED
        return self._channel.state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._lifecycle is not Lifecycle.ACTIVE or self._transport is None:
            raise SamsSessionError("Client not active. Use 'async with SamsClient(...) as client:'")
        return self._transport

    async def _post(self, endpoint: str, json_body: dict[str, Any] | None = None) -> ApiResponse:
        transport = self._require_transport()
        response = await transport.request("POST", endpoint, json_body=json_body)
        response.raise_for_failure(endpoint)
        return response

    def _report_failure(self, message: str, *, alert: bool) -> None:
        self._log_sink.append(LogLevel.ERROR, message)
        if alert:
            self._surface.alert(message)

    # ------------------------------------------------------------------
    # Operator actions
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        """Pull a fresh snapshot (fallback when the push channel is down)."""
        self._require_transport()
        assert self._snapshot is not None  # noqa: S101
        return await self._snapshot.fetch()

    async def save_config(self, config: SubmissionConfig) -> ConfigResult | None:
        """Submit the run configuration.

        On success the selected address is applied to the state, which
        enables the start control. Failures are logged and alerted, never
        raised or retried.
        """
        payload = config.to_payload()
        _logger.debug("Saving config %s", redact_for_log(payload))
        try:
            response = await self._post(CONFIG_ENDPOINT, payload)
            result = ConfigResult.model_validate(response.data if isinstance(response.data, dict) else {})
        except SamsApiError as exc:
            self._report_failure(f"Failed to save configuration: {exc}", alert=True)
            return None
        except SamsSessionError:
            raise
        except (SamsError, ValidationError) as exc:
            self._report_failure(f"Request failed: {exc}", alert=True)
            return None

        self._log_sink.append(LogLevel.SUCCESS, "Configuration saved")
        if result.selected_address is not None:
            self._reconciler.apply(StatusFragment(address=result.selected_address))
        if result.address_list:
            _logger.debug("Address list: %s", redact_for_log(result.address_list))
        return result

    async def start(self) -> bool:
        """Ask the server to start the purchase run."""
        try:
            await self._post(START_ENDPOINT)
        except SamsApiError as exc:
            self._report_failure(f"Failed to start: {exc}", alert=True)
            return False
        except SamsSessionError:
            raise
        except SamsError as exc:
            self._report_failure(f"Request failed: {exc}", alert=True)
            return False

        self._reconciler.apply(StatusFragment(status=RUNNING_STATUS))
        self._log_sink.append(LogLevel.SUCCESS, "Purchase run started")
        return True

    async def stop(self) -> bool:
        """Ask the server to stop the purchase run.

        Unlike start, a failed stop is only logged (no alert).
        """
        try:
            await self._post(STOP_ENDPOINT)
        except SamsApiError as exc:
            self._report_failure(f"Failed to stop: {exc}", alert=False)
            return False
        except SamsSessionError:
            raise
        except SamsError as exc:
            self._report_failure(f"Request failed: {exc}", alert=False)
            return False

        self._reconciler.apply(StatusFragment(status="stopped"))
        self._log_sink.append(LogLevel.WARNING, "Stopped")
        return True

    def clear_log(self) -> None:
        """Discard the operator log. Not recoverable."""
        self._log_sink.clear()
