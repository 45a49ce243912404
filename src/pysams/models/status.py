"""Status payload models pushed by the control server.

The purchase workflow itself runs remotely; these models only describe
the shape of what it reports. Unknown keys are ignored.
"""

from __future__ import annotations

from pysams.models._base import SamsBaseModel


class Address(SamsBaseModel):
    """Delivery address selected for the purchase run."""

    address_id: str = ""
    name: str = ""
    """Recipient name."""
    mobile: str = ""
    district_name: str = ""
    receiver_address: str = ""
    detail_address: str = ""
    latitude: str = ""
    longitude: str = ""

    @property
    def full_address(self) -> str:
        parts = (self.district_name, self.receiver_address, self.detail_address)
        return " ".join(part for part in parts if part)


class Store(SamsBaseModel):
    """A store that can deliver to the selected address."""

    store_id: str = ""
    store_name: str = ""
    store_type: int | None = None
    area_block_id: str = ""


class Goods(SamsBaseModel):
    """A cart line item."""

    spu_id: str = ""
    store_id: str = ""
    goods_name: str = ""
    price: int = 0
    """Unit price in cents."""
    quantity: int = 0
    stock_quantity: int | None = None

    @property
    def total_price(self) -> int:
        """Line total in cents."""
        return self.price * self.quantity


class TimeSlot(SamsBaseModel):
    """An available delivery window."""

    arrival_time_str: str = ""
    delivery_start_time: int | None = None
    delivery_end_time: int | None = None


class Order(SamsBaseModel):
    """A successfully submitted order awaiting payment."""

    order_no: str = ""
    pay_amount: str = ""
    channel: str = ""


class StatusFragment(SamsBaseModel):
    """A sparse status update.

    Any subset of fields may be present; :meth:`present_fields` tells
    them apart from defaults. ``step`` and ``status`` are distinct:
    ``step`` names the workflow stage while ``status`` says whether the
    remote run is active.
    """

    step: str | None = None
    status: str | None = None
    address: Address | None = None
    stores: list[Store] | None = None
    goods_list: list[Goods] | None = None
    time_slots: list[TimeSlot] | None = None
    delivery_fee: str | None = None
    order: Order | None = None
    error: str | None = None


class LogFragment(SamsBaseModel):
    """A log line emitted by the remote process.

    ``time`` is the server's wall-clock label. It is informational only;
    entries are ordered by receipt.
    """

    time: str
    level: str
    message: str
