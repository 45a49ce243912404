"""Data models for control server payloads."""

from pysams.models._base import SamsBaseModel
from pysams.models.envelope import ApiResponse, ConfigResult
from pysams.models.status import Address, Goods, LogFragment, Order, StatusFragment, Store, TimeSlot
from pysams.models.submission import SubmissionConfig

__all__ = [
    "Address",
    "ApiResponse",
    "ConfigResult",
    "Goods",
    "LogFragment",
    "Order",
    "SamsBaseModel",
    "StatusFragment",
    "Store",
    "SubmissionConfig",
    "TimeSlot",
]
