"""Pure projection from canonical state to render commands.

Nothing here reads or writes anything but its arguments: the same
:class:`~pysams.state.store.CanonicalState` always yields equal commands.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from pysams._constants import ORDER_SUCCESS_STEP
from pysams.models.status import Address, Goods, Order, TimeSlot
from pysams.view.steps import StepDescriptor, descriptor_for

if TYPE_CHECKING:
    from pysams.state.store import CanonicalState


class Indicator(StrEnum):
    RUNNING = "running"
    SUCCESS = "success"
    STOPPED = "stopped"


INDICATOR_TEXT: dict[Indicator, str] = {
    Indicator.RUNNING: "Running",
    Indicator.SUCCESS: "Order placed",
    Indicator.STOPPED: "Not running",
}


class Panel(StrEnum):
    ADDRESS = "address"
    GOODS = "goods"
    TIME_SLOTS = "time_slots"
    ORDER = "order"


@dataclass(frozen=True)
class StepPanelCommand:
    descriptor: StepDescriptor
    active: bool
    success: bool

    def to_html(self) -> str:
        classes = " ".join(["step", *(["active"] if self.active else []), *(["success"] if self.success else [])])
        return (
            f'<div class="{classes}">'
            f'<div class="step-icon">{html.escape(self.descriptor.icon)}</div>'
            '<div class="step-content">'
            f'<div class="step-title">{html.escape(self.descriptor.title)}</div>'
            f'<div class="step-desc">{html.escape(self.descriptor.description)}</div>'
            "</div></div>"
        )


@dataclass(frozen=True)
class ViewCommand:
    """Status indicator, control enablement and step panel."""

    indicator: Indicator
    status_text: str
    start_enabled: bool
    stop_enabled: bool
    step: StepPanelCommand


@dataclass(frozen=True)
class PanelCommand:
    """Show or hide one data panel.

    ``lines`` hold plain text; :meth:`to_html` escapes them.
    """

    panel: Panel
    visible: bool
    lines: tuple[str, ...] = ()

    def to_html(self) -> str:
        if not self.visible:
            return ""
        return "".join(f'<div class="{self.panel.value}-line">{html.escape(line)}</div>' for line in self.lines)


def project(state: CanonicalState) -> ViewCommand:
    """Derive the view for *state*.

    Precedence: a running process wins over a finished order, which wins
    over the idle/stopped case.
    """
    success = state.current_step == ORDER_SUCCESS_STEP
    if state.is_running:
        indicator = Indicator.RUNNING
        start_enabled, stop_enabled = False, True
    elif success:
        # The operator may still want to stop/acknowledge after an order.
        indicator = Indicator.SUCCESS
        start_enabled, stop_enabled = False, True
    else:
        indicator = Indicator.STOPPED
        start_enabled, stop_enabled = state.address is not None, False

    return ViewCommand(
        indicator=indicator,
        status_text=INDICATOR_TEXT[indicator],
        start_enabled=start_enabled,
        stop_enabled=stop_enabled,
        step=StepPanelCommand(
            descriptor=descriptor_for(state.current_step),
            active=state.is_running,
            success=success,
        ),
    )


def _money(cents: int) -> str:
    return f"¥{cents / 100:.2f}"


def project_address(address: Address | None) -> PanelCommand:
    if address is None:
        return PanelCommand(Panel.ADDRESS, visible=False)
    return PanelCommand(
        Panel.ADDRESS,
        visible=True,
        lines=(
            f"Recipient: {address.name}",
            f"Phone: {address.mobile}",
            f"Address: {address.full_address}",
        ),
    )


def project_goods(goods_list: Sequence[Goods], delivery_fee: str | None = None) -> PanelCommand:
    if not goods_list:
        return PanelCommand(Panel.GOODS, visible=False)
    lines = [
        f"{goods.goods_name or 'Unknown item'} | Qty: {goods.quantity}"
        f" | Unit: {_money(goods.price)} | Total: {_money(goods.total_price)}"
        for goods in goods_list
    ]
    if delivery_fee is not None:
        lines.append(f"Delivery fee: {delivery_fee}")
    return PanelCommand(Panel.GOODS, visible=True, lines=tuple(lines))


def project_time_slots(time_slots: Sequence[TimeSlot]) -> PanelCommand:
    if not time_slots:
        return PanelCommand(Panel.TIME_SLOTS, visible=False)
    return PanelCommand(Panel.TIME_SLOTS, visible=True, lines=tuple(slot.arrival_time_str for slot in time_slots))


def _pay_method(channel: str) -> str:
    return "WeChat Pay" if channel == "wechat" else "Alipay"


def project_order(order: Order | None) -> PanelCommand:
    if order is None:
        return PanelCommand(Panel.ORDER, visible=False)
    return PanelCommand(
        Panel.ORDER,
        visible=True,
        lines=(
            "Purchase succeeded!",
            f"Order number: {order.order_no}",
            f"Amount due: ¥{order.pay_amount}",
            f"Payment method: {_pay_method(order.channel)}",
            "Complete the payment in the Sam's Club app.",
        ),
    )


PANEL_PROJECTORS: dict[Panel, Callable[[CanonicalState], PanelCommand]] = {
    Panel.ADDRESS: lambda state: project_address(state.address),
    Panel.GOODS: lambda state: project_goods(state.goods_list, state.delivery_fee),
    Panel.TIME_SLOTS: lambda state: project_time_slots(state.time_slots),
    Panel.ORDER: lambda state: project_order(state.order),
}


def project_panel(panel: Panel, state: CanonicalState) -> PanelCommand:
    return PANEL_PROJECTORS[panel](state)
