"""Operator-supplied run configuration sent to ``POST /api/config``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class SubmissionConfig(BaseModel):
    """Configuration form submitted before a purchase run.

    Numeric defaults match what the control panel sends when a field is
    left blank.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    auth_token: str
    address_id: str = ""
    delivery_type: int = 2
    pay_method: int = 1
    floor_id: int = 1
    bark_id: str = ""
    longitude: str = ""
    latitude: str = ""
    promotion_id: str = ""
    delivery_fee: bool = False
    """Only accept orders without a delivery fee."""
    is_selected: bool = False
    device_id: str = ""
    track_info: str = ""
    store_conf: str = ""

    @field_validator("auth_token")
    @classmethod
    def _require_token(cls, value: str) -> str:
        if not value:
            raise ValueError("auth_token must be non-empty")
        return value

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase request body."""
        return self.model_dump(by_alias=True)
