"""Base model for payloads exchanged with the sams control server.

Every wire model inherits from :class:`SamsBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase wire keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` and empty
  strings so the field default is used (the server omits empty values,
  and a missing value always means "no change").
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def is_absent(value: Any) -> bool:
    """Return ``True`` when *value* carries no information on the wire."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class SamsBaseModel(BaseModel):
    """Base for server payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original payload dict."""

    @model_validator(mode="before")
    @classmethod
    def _drop_absent_values(cls, values: Any) -> Any:
        """Drop absent values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if not is_absent(value)}
        # Keep an explicitly passed raw= (keyword construction).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned

    def present_fields(self) -> set[str]:
        """Names of the fields the payload actually carried."""
        return set(self.model_fields_set) - {"raw"}
