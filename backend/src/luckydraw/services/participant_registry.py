"""Participant registry - name-unique set of registered participants.

Entries are kept in registration order. A participant who drops their
connection can reclaim their entry by presenting the identity token they
registered with; anyone else asking for the same name is refused.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from luckydraw.models.participant import Participant, format_participant_number
from luckydraw.services.errors import EmptyNameError, NameTakenError

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    """Outcome of a successful registration."""
    participant: Participant
    reconnected: bool = False


class ParticipantRegistry:
    """Holds the registered participants for one draw session."""

    def __init__(self):
        # Insertion order of the dict is registration order
        self._participants: Dict[str, Participant] = {}
        self._next_number = 1

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, name: object) -> bool:
        return name in self._participants

    def __iter__(self) -> Iterator[Participant]:
        return iter(list(self._participants.values()))

    def register(
        self,
        name: Optional[str],
        identity_token: Optional[str],
        connection_id: str,
    ) -> RegistrationResult:
        """Register ``name`` for ``connection_id``.

        Raises:
            EmptyNameError: name is blank after trimming
            NameTakenError: name is registered and the token does not reclaim it
        """
        clean_name = (name or "").strip()
        if not clean_name:
            raise EmptyNameError()
        token = identity_token or None

        existing = self._participants.get(clean_name)
        if existing is not None:
            if not existing.matches_token(token):
                raise NameTakenError(clean_name)
            previous_connection = existing.connection_id
            existing.connection_id = connection_id
            logger.info(
                "[Registry] Reconnected | name=%s old_connection=%s new_connection=%s",
                clean_name, previous_connection, connection_id,
            )
            return RegistrationResult(participant=existing, reconnected=True)

        participant = Participant(
            name=clean_name,
            connection_id=connection_id,
            number=format_participant_number(self._next_number),
            identity_token=token,
        )
        self._next_number += 1
        self._participants[clean_name] = participant
        logger.info(
            "[Registry] Registered | name=%s no=%s connection=%s total=%d",
            clean_name, participant.number, connection_id, len(self._participants),
        )
        return RegistrationResult(participant=participant)

    def remove_by_connection(self, connection_id: str) -> List[Participant]:
        """Remove every participant bound to ``connection_id``.

        A single socket can own several entries (more than one name registered
        from it, or a reconnect onto a socket that already had one), and all of
        them go stale together when it drops.
        """
        removed = self.find_by_connection(connection_id)
        for participant in removed:
            del self._participants[participant.name]
            logger.info(
                "[Registry] Removed | name=%s connection=%s total=%d",
                participant.name, connection_id, len(self._participants),
            )
        return removed

    def find_by_connection(self, connection_id: str) -> List[Participant]:
        """Participants bound to ``connection_id``, in registration order."""
        return [p for p in self._participants.values() if p.connection_id == connection_id]

    def get(self, name: str) -> Optional[Participant]:
        return self._participants.get(name)

    def participants(self) -> List[Participant]:
        """Participants in registration order."""
        return list(self._participants.values())

    def snapshot(self) -> List[str]:
        """Participant names in registration order."""
        return list(self._participants.keys())

    def reset(self) -> None:
        self._participants.clear()
        self._next_number = 1
