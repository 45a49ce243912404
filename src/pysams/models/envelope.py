"""Success/failure envelope returned by every HTTP endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pysams.exceptions import SamsApiError
from pysams.models._base import SamsBaseModel
from pysams.models.status import Address


class ApiResponse(BaseModel):
    """``{success, message?, data?}`` envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool = False
    message: str = ""
    data: Any = None

    def raise_for_failure(self, endpoint: str) -> None:
        """Raise :class:`SamsApiError` when the server reported a failure."""
        if self.success:
            return
        raise SamsApiError(self.message or f"{endpoint} failed", endpoint=endpoint)


class ConfigResult(SamsBaseModel):
    """``data`` payload of a successful ``POST /api/config``."""

    selected_address: Address | None = None
    address_list: list[Address] = Field(default_factory=list)
