"""One-shot pull of the full remote state."""

from __future__ import annotations

import logging

from pysams._constants import STATUS_ENDPOINT
from pysams._transport import Transport
from pysams.exceptions import SamsError
from pysams.state.store import StateReconciler

_logger = logging.getLogger(__name__)


class SnapshotFetcher:
    """Fetch ``GET /api/status`` and feed it to the reconciler.

    The snapshot goes through the same dispatch path as a pushed message.
    Failures are diagnostics only: they are logged on this module's logger,
    never on the operator log, and leave the canonical state untouched.
    """

    def __init__(self, transport: Transport, reconciler: StateReconciler) -> None:
        self._transport = transport
        self._reconciler = reconciler

    async def fetch(self) -> bool:
        """Return ``True`` when a snapshot was applied."""
        try:
            response = await self._transport.request("GET", STATUS_ENDPOINT)
            response.raise_for_failure(STATUS_ENDPOINT)
        except SamsError as exc:
            _logger.warning("Failed to load status snapshot: %s", exc)
            return False

        if not isinstance(response.data, dict):
            _logger.debug("Status snapshot carried no data")
            return False

        self._reconciler.dispatch(response.data)
        return True
