"""Schema for the admin_toggle_exclude event."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from luckydraw.api.schemas.draw._normalize import coerce_name, name_payload


class ToggleExcludeRequest(BaseModel):
    """Admin toggling a name in or out of the exclusion set."""
    model_config = ConfigDict(extra="ignore")

    name: str = ""

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        return name_payload(data)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return coerce_name(value)
