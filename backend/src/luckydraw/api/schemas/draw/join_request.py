"""Schema for the join_request event."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from luckydraw.api.schemas.draw._normalize import coerce_name, name_payload


class JoinRequest(BaseModel):
    """Mobile client asking to join the draw."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    identity_token: Optional[str] = Field(default=None, alias="identityToken")

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        data = name_payload(data)
        if isinstance(data, dict) and "identityToken" not in data:
            # Accept the snake_case and short spellings used by older clients
            for key in ("identity_token", "token"):
                if data.get(key) is not None:
                    data = {**data, "identityToken": data[key]}
                    break
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return coerce_name(value)

    @field_validator("identity_token", mode="before")
    @classmethod
    def _blank_token_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value
