from __future__ import annotations

from typing import Any

from pysams.logsink import LogLevel, LogSink
from pysams.models.status import Goods, StatusFragment
from pysams.state.store import CanonicalState, StateReconciler
from pysams.view.projector import Indicator, Panel, PanelCommand, ViewCommand


def _reconciler(surface: Any = None) -> tuple[StateReconciler, LogSink]:
    sink = LogSink(surface=surface)
    return StateReconciler(log_sink=sink, surface=surface), sink


def _fragment(payload: dict[str, Any]) -> StatusFragment:
    return StatusFragment.model_validate(payload)


ADDRESS = {
    "name": "A",
    "mobile": "123",
    "districtName": "Pudong",
    "receiverAddress": "Century Ave",
    "detailAddress": "No. 100",
}


def test_fresh_state_defaults() -> None:
    reconciler, _sink = _reconciler()
    state = reconciler.state

    assert state == CanonicalState()
    assert state.is_running is False
    assert state.current_step == "idle"
    assert state.address is None
    assert state.stores == []
    assert state.goods_list == []
    assert state.time_slots == []
    assert state.order is None


def test_absent_fields_do_not_overwrite() -> None:
    reconciler, _sink = _reconciler()
    reconciler.apply(_fragment({"step": "cart_loaded", "address": ADDRESS, "goodsList": [{"goodsName": "Milk"}]}))

    # Only the step changes; null and empty-string values mean "no change".
    reconciler.apply(_fragment({"step": "checking_goods", "address": None, "order": None, "status": ""}))

    state = reconciler.state
    assert state.current_step == "checking_goods"
    assert state.address is not None and state.address.name == "A"
    assert [goods.goods_name for goods in state.goods_list] == ["Milk"]
    assert state.is_running is False


def test_collections_are_replaced_not_merged() -> None:
    reconciler, _sink = _reconciler()
    reconciler.apply(_fragment({"goodsList": [{"goodsName": "Milk"}, {"goodsName": "Eggs"}]}))
    reconciler.apply(_fragment({"goodsList": [{"goodsName": "Bread"}]}))

    assert [goods.goods_name for goods in reconciler.state.goods_list] == ["Bread"]


def test_empty_collection_is_present_and_clears() -> None:
    reconciler, _sink = _reconciler()
    reconciler.apply(_fragment({"timeSlots": [{"arrivalTimeStr": "09:00-11:00"}]}))
    reconciler.apply(_fragment({"timeSlots": []}))

    assert reconciler.state.time_slots == []


def test_status_drives_is_running() -> None:
    reconciler, _sink = _reconciler()

    reconciler.apply(_fragment({"status": "running"}))
    assert reconciler.state.is_running is True

    reconciler.apply(_fragment({"status": "success"}))
    assert reconciler.state.is_running is False

    reconciler.apply(_fragment({"status": "running", "step": "checking_stores"}))
    reconciler.apply(_fragment({"step": "stores_loaded"}))
    # A step-only fragment leaves the running flag alone.
    assert reconciler.state.is_running is True


def test_error_goes_to_log_only() -> None:
    reconciler, sink = _reconciler()
    reconciler.apply(_fragment({"step": "checking_cart", "status": "running"}))
    before = reconciler.state

    reconciler.apply(_fragment({"error": "timeout"}))

    assert reconciler.state == before
    assert [(entry.level, entry.message) for entry in sink.entries] == [(LogLevel.ERROR, "timeout")]


def test_error_and_goods_in_one_fragment_do_not_mix(surface: Any) -> None:
    reconciler, sink = _reconciler(surface)

    commands = reconciler.apply(_fragment({"error": "timeout", "goodsList": [{"goodsName": "Milk", "quantity": 1}]}))

    assert len(sink.entries) == 1
    assert sink.entries[0].level is LogLevel.ERROR
    assert [goods.goods_name for goods in reconciler.state.goods_list] == ["Milk"]
    panels = [command for command in commands if isinstance(command, PanelCommand)]
    assert [panel.panel for panel in panels] == [Panel.GOODS]
    assert panels[0].visible is True


def test_every_apply_renders_view(surface: Any) -> None:
    reconciler, _sink = _reconciler(surface)

    commands = reconciler.apply(_fragment({"step": "starting"}))

    assert len(commands) == 1
    assert isinstance(commands[0], ViewCommand)
    assert surface.commands == commands


def test_panel_commands_only_for_present_fields(surface: Any) -> None:
    reconciler, _sink = _reconciler(surface)

    commands = reconciler.apply(
        _fragment(
            {
                "address": ADDRESS,
                "timeSlots": [{"arrivalTimeStr": "09:00-11:00"}],
                "order": {"orderNo": "N1", "payAmount": "299.00", "channel": "wechat"},
                "stores": [{"storeId": "s1"}],
            }
        )
    )

    panels = [command.panel for command in commands if isinstance(command, PanelCommand)]
    assert panels == [Panel.ADDRESS, Panel.TIME_SLOTS, Panel.ORDER]
    assert isinstance(commands[-1], ViewCommand)


def test_delivery_fee_rerenders_goods_panel_once() -> None:
    reconciler, _sink = _reconciler()
    reconciler.apply(_fragment({"goodsList": [{"goodsName": "Milk", "price": 1000, "quantity": 1}]}))

    commands = reconciler.apply(_fragment({"goodsList": [{"goodsName": "Milk", "price": 1000, "quantity": 1}], "deliveryFee": "6"}))

    goods_panels = [command for command in commands if isinstance(command, PanelCommand)]
    assert len(goods_panels) == 1
    assert goods_panels[0].lines[-1] == "Delivery fee: 6"
    assert reconciler.state.delivery_fee == "6"


def test_redelivery_is_idempotent() -> None:
    reconciler, _sink = _reconciler()
    payload = {
        "step": "capacity_loaded",
        "status": "running",
        "address": ADDRESS,
        "timeSlots": [{"arrivalTimeStr": "09:00-11:00"}],
    }

    reconciler.apply(_fragment(payload))
    first = reconciler.state
    reconciler.apply(_fragment(payload))

    assert reconciler.state == first


def test_sequence_matches_merged_application() -> None:
    fragments = [
        {"step": "stores_loaded", "status": "running", "stores": [{"storeId": "s1"}]},
        {"goodsList": [{"goodsName": "Milk"}]},
        {"step": "cart_loaded", "goodsList": [{"goodsName": "Eggs"}]},
    ]

    one_by_one, _ = _reconciler()
    for payload in fragments:
        one_by_one.apply(_fragment(payload))

    merged: dict[str, Any] = {}
    for payload in fragments:
        merged.update(payload)
    at_once, _ = _reconciler()
    at_once.apply(_fragment(merged))

    assert one_by_one.state == at_once.state
    assert [goods.goods_name for goods in one_by_one.state.goods_list] == ["Eggs"]
    assert [store.store_id for store in one_by_one.state.stores] == ["s1"]


def test_state_property_is_a_copy() -> None:
    reconciler, _sink = _reconciler()
    snapshot = reconciler.state
    snapshot.is_running = True
    snapshot.goods_list.append(Goods(goods_name="x"))

    assert reconciler.state.is_running is False
    assert reconciler.state.goods_list == []


def test_dispatch_routes_log_and_status_from_one_payload() -> None:
    reconciler, sink = _reconciler()

    messages = reconciler.dispatch(
        {"time": "10:00:00", "level": "success", "message": "Address saved", "step": "address_saved"}
    )

    assert len(messages) == 2
    assert [(entry.level, entry.message) for entry in sink.entries] == [(LogLevel.SUCCESS, "Address saved")]
    assert reconciler.state.current_step == "address_saved"


def test_dispatch_ping_is_silent(surface: Any) -> None:
    reconciler, sink = _reconciler(surface)
    before = reconciler.state

    reconciler.dispatch({"type": "ping"})

    assert reconciler.state == before
    assert len(sink) == 0
    assert surface.commands == []
    assert surface.log_lines == []


def test_indicator_follows_state() -> None:
    reconciler, _sink = _reconciler()
    reconciler.apply(_fragment({"status": "running", "step": "checking_stores"}))
    assert reconciler.view().indicator is Indicator.RUNNING


def test_malformed_field_does_not_block_step_or_error() -> None:
    reconciler, sink = _reconciler()
    reconciler.apply(_fragment({"goodsList": [{"goodsName": "Eggs", "price": 300, "quantity": 1}]}))

    reconciler.dispatch({"step": "cart_loaded", "error": "timeout", "goodsList": [{"goodsName": "Milk", "price": "12.50"}]})

    state = reconciler.state
    assert state.current_step == "cart_loaded"
    assert [goods.goods_name for goods in state.goods_list] == ["Eggs"]
    assert [(entry.level, entry.message) for entry in sink.entries] == [(LogLevel.ERROR, "timeout")]
