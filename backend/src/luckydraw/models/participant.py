"""Participant data model - a registered entrant in the draw session."""

from dataclasses import dataclass, field
from typing import Dict, Optional


def format_participant_number(n: int) -> str:
    """Format a sequential registration number for display (``No. 007``)."""
    return "No. " + str(n).zfill(3)


@dataclass
class Participant:
    """Represents a participant registered from a mobile client.

    ``name``, ``identity_token`` and ``number`` are fixed for the lifetime of
    the entry. ``connection_id`` follows the participant's live socket and is
    replaced in place when they reconnect.
    """
    name: str
    connection_id: str
    number: str
    identity_token: Optional[str] = field(default=None, repr=False)

    def matches_token(self, token: Optional[str]) -> bool:
        """Return True when ``token`` reclaims this entry."""
        return bool(token) and bool(self.identity_token) and token == self.identity_token

    def to_dict(self) -> Dict[str, str]:
        """Public view sent to clients (never includes the identity token)."""
        return {"no": self.number, "name": self.name}
