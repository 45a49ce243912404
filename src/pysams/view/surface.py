"""Rendering surface interface.

The surface is whatever displays the dashboard: a web page, a terminal,
a test recorder. It only receives commands and never reads state back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeAlias

if TYPE_CHECKING:
    from pysams.view.projector import PanelCommand, ViewCommand

RenderCommand: TypeAlias = "ViewCommand | PanelCommand"


class RenderSurface(Protocol):
    """Structural interface for anything that displays dashboard output."""

    def render(self, command: RenderCommand) -> None: ...

    def append_log(self, markup: str) -> None:
        """Append one already-escaped log line."""
        ...

    def clear_log(self) -> None: ...

    def alert(self, message: str) -> None:
        """Show a blocking notice for a failed operator action."""
        ...


class NullSurface:
    """Surface that discards everything (headless use)."""

    def render(self, command: RenderCommand) -> None:
        return None

    def append_log(self, markup: str) -> None:
        return None

    def clear_log(self) -> None:
        return None

    def alert(self, message: str) -> None:
        return None
