"""Draw event schema exports."""

from luckydraw.api.schemas.draw.join_request import JoinRequest
from luckydraw.api.schemas.draw.toggle_exclude_request import ToggleExcludeRequest

__all__ = [
    "JoinRequest",
    "ToggleExcludeRequest",
]
