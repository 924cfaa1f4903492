"""Shared payload normalization for draw event schemas."""

from typing import Any


def name_payload(data: Any) -> Any:
    """Accept a bare string as shorthand for ``{"name": <string>}``.

    Older clients send the name alone; newer ones send an object. ``None`` is
    treated as an empty object so field validation reports the missing name.
    """
    if data is None:
        return {}
    if isinstance(data, str):
        return {"name": data}
    return data


def coerce_name(value: Any) -> str:
    """Return ``value`` as a string, treating None as empty."""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value
