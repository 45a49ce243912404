"""pysams - Async Python client for the sams purchase-automation control server."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysams")
except PackageNotFoundError:
    __version__ = "0+local"
from pysams.channel import ConnectionState, StatusChannel
from pysams.client import Lifecycle, SamsClient
from pysams.config import SamsConfig, endpoint_url
from pysams.exceptions import (
    SamsApiError,
    SamsConfigError,
    SamsError,
    SamsSessionError,
    SamsTransportError,
)
from pysams.logsink import LogEntry, LogLevel, LogSink, render_log_entry
from pysams.models import (
    Address,
    ApiResponse,
    ConfigResult,
    Goods,
    LogFragment,
    Order,
    StatusFragment,
    Store,
    SubmissionConfig,
    TimeSlot,
)
from pysams.snapshot import SnapshotFetcher
from pysams.state.store import CanonicalState, StateReconciler
from pysams.view import (
    Indicator,
    NullSurface,
    Panel,
    PanelCommand,
    RenderSurface,
    StepDescriptor,
    StepId,
    StepPanelCommand,
    ViewCommand,
    descriptor_for,
    project,
)

__all__ = [
    "__version__",
    "Address",
    "ApiResponse",
    "CanonicalState",
    "ConfigResult",
    "ConnectionState",
    "Goods",
    "Indicator",
    "Lifecycle",
    "LogEntry",
    "LogFragment",
    "LogLevel",
    "LogSink",
    "NullSurface",
    "Order",
    "Panel",
    "PanelCommand",
    "RenderSurface",
    "SamsApiError",
    "SamsClient",
    "SamsConfig",
    "SamsConfigError",
    "SamsError",
    "SamsSessionError",
    "SamsTransportError",
    "SnapshotFetcher",
    "StateReconciler",
    "StatusChannel",
    "StatusFragment",
    "StepDescriptor",
    "StepId",
    "StepPanelCommand",
    "Store",
    "SubmissionConfig",
    "TimeSlot",
    "ViewCommand",
    "descriptor_for",
    "endpoint_url",
    "project",
    "render_log_entry",
]
