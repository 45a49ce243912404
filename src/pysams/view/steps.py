"""Static step table used by the step panel."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class StepId(StrEnum):
    """Workflow stages reported by the remote process."""

    IDLE = "idle"
    CONFIGURED = "configured"
    STARTING = "starting"
    SAVING_ADDRESS = "saving_address"
    ADDRESS_SAVED = "address_saved"
    CHECKING_STORES = "checking_stores"
    STORES_LOADED = "stores_loaded"
    CHECKING_CART = "checking_cart"
    CART_LOADED = "cart_loaded"
    CHECKING_GOODS = "checking_goods"
    SETTLE_CHECKED = "settle_checked"
    CHECKING_CAPACITY = "checking_capacity"
    CAPACITY_LOADED = "capacity_loaded"
    SUBMITTING_ORDER = "submitting_order"
    ORDER_SUCCESS = "order_success"
    STOPPED = "stopped"


@dataclass(frozen=True)
class StepDescriptor:
    title: str
    description: str
    icon: str


STEP_TABLE = MappingProxyType(
    {
        StepId.IDLE: StepDescriptor("Waiting to start", "Save a configuration, then press start", "⏸️"),
        StepId.CONFIGURED: StepDescriptor("Configured", "Settings saved", "✅"),
        StepId.STARTING: StepDescriptor("Starting", "Initializing...", "🚀"),
        StepId.SAVING_ADDRESS: StepDescriptor("Saving address", "Saving the delivery address...", "📍"),
        StepId.ADDRESS_SAVED: StepDescriptor("Address saved", "Delivery address set", "✅"),
        StepId.CHECKING_STORES: StepDescriptor("Finding stores", "Looking for available stores...", "🏪"),
        StepId.STORES_LOADED: StepDescriptor("Stores loaded", "Available stores found", "✅"),
        StepId.CHECKING_CART: StepDescriptor("Checking cart", "Fetching cart items...", "🛒"),
        StepId.CART_LOADED: StepDescriptor("Cart loaded", "Cart items fetched", "✅"),
        StepId.CHECKING_GOODS: StepDescriptor("Validating items", "Checking item availability...", "🔍"),
        StepId.SETTLE_CHECKED: StepDescriptor("Settlement", "Calculating the delivery fee...", "💰"),
        StepId.CHECKING_CAPACITY: StepDescriptor("Delivery windows", "Querying available time slots...", "⏰"),
        StepId.CAPACITY_LOADED: StepDescriptor("Delivery windows loaded", "Available time slots found", "✅"),
        StepId.SUBMITTING_ORDER: StepDescriptor("Submitting order", "Placing the order...", "📦"),
        StepId.ORDER_SUCCESS: StepDescriptor("Order placed", "Purchase succeeded!", "🎉"),
        StepId.STOPPED: StepDescriptor("Stopped", "The run has stopped", "⏹️"),
    }
)


def descriptor_for(step_id: str | None) -> StepDescriptor:
    """Return the descriptor for *step_id*, falling back to ``idle``."""
    try:
        return STEP_TABLE[StepId(step_id)]
    except ValueError:
        return STEP_TABLE[StepId.IDLE]
