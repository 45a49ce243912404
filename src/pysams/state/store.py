"""Canonical client state and the reconciler that owns it.

This is the only component allowed to mutate :class:`CanonicalState`.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pysams._constants import IDLE_STEP, RUNNING_STATUS
from pysams.logsink import LogLevel, LogSink
from pysams.models.status import Address, Goods, LogFragment, Order, StatusFragment, Store, TimeSlot
from pysams.state.events import InboundMessage, Ping, parse_message
from pysams.view.projector import Panel, PanelCommand, ViewCommand, project, project_panel
from pysams.view.surface import NullSurface, RenderSurface

# Fragment fields copied verbatim onto the state. Collections are replaced
# as a whole, never merged element-wise.
_REPLACED_FIELDS: tuple[str, ...] = (
    "address",
    "stores",
    "goods_list",
    "time_slots",
    "delivery_fee",
    "order",
)

# Fragment fields that trigger a panel-specific render, in render order.
_PANEL_TRIGGERS: tuple[tuple[str, Panel], ...] = (
    ("address", Panel.ADDRESS),
    ("goods_list", Panel.GOODS),
    ("delivery_fee", Panel.GOODS),
    ("time_slots", Panel.TIME_SLOTS),
    ("order", Panel.ORDER),
)


class CanonicalState(BaseModel):
    """Client-side view of the remote purchase process.

    Created once with defaults and kept for the whole session, including
    across reconnects.
    """

    model_config = ConfigDict(extra="forbid")

    is_running: bool = False
    current_step: str = IDLE_STEP
    address: Address | None = None
    stores: list[Store] = Field(default_factory=list)
    goods_list: list[Goods] = Field(default_factory=list)
    time_slots: list[TimeSlot] = Field(default_factory=list)
    delivery_fee: str | None = None
    order: Order | None = None


class StateReconciler:
    """Merge status fragments into the canonical state and re-render.

    Fragments are applied strictly in call order. There is no sequence
    numbering, so a late snapshot can overwrite newer pushed values.
    """

    def __init__(
        self,
        *,
        log_sink: LogSink,
        surface: RenderSurface | None = None,
        state: CanonicalState | None = None,
    ) -> None:
        self._log_sink = log_sink
        self._surface: RenderSurface = surface if surface is not None else NullSurface()
        self._state = state if state is not None else CanonicalState()

    @property
    def state(self) -> CanonicalState:
        """A deep copy of the canonical state."""
        return self._state.model_copy(deep=True)

    def view(self) -> ViewCommand:
        return project(self._state)

    def apply(self, fragment: StatusFragment) -> list[ViewCommand | PanelCommand]:
        """Apply *fragment* and emit the resulting render commands.

        Present fields replace their canonical counterpart; absent fields
        are left alone. ``error`` only produces a log entry.
        """
        present = fragment.present_fields()
        state = self._state

        if "step" in present and fragment.step is not None:
            state.current_step = fragment.step
        if "status" in present:
            state.is_running = fragment.status == RUNNING_STATUS
        for name in _REPLACED_FIELDS:
            if name in present:
                setattr(state, name, copy.deepcopy(getattr(fragment, name)))
        if "error" in present and fragment.error is not None:
            self._log_sink.append(LogLevel.ERROR, fragment.error)

        commands: list[ViewCommand | PanelCommand] = []
        rendered: set[Panel] = set()
        for name, panel in _PANEL_TRIGGERS:
            if name in present and panel not in rendered:
                rendered.add(panel)
                commands.append(project_panel(panel, state))
        commands.append(project(state))

        for command in commands:
            self._surface.render(command)
        return commands

    def dispatch(self, payload: Mapping[str, Any]) -> list[InboundMessage]:
        """Route one inbound JSON object.

        Pings are dropped, log lines go to the log sink and status
        fragments are applied. Returns the parsed messages.
        """
        messages = parse_message(payload)
        for message in messages:
            if isinstance(message, Ping):
                continue
            if isinstance(message, LogFragment):
                self._log_sink.append(message.level, message.message)
            elif isinstance(message, StatusFragment):
                self.apply(message)
        return messages
