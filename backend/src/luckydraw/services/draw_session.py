"""Draw session - single owner of the registry, winner ledger and exclusions.

One DrawSession is built at process start and handed to the Socket.IO event
layer. Every method here is synchronous and completes before returning, so as
long as callers stay on one event loop no mutation is ever observed half done.
Validation always happens before state is touched.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from luckydraw.mechanics.draw.draw_engine import DrawEngine, DrawResult
from luckydraw.mechanics.draw.random_source import PseudoRandomSource, RandomSource
from luckydraw.models.participant import Participant
from luckydraw.models.session_phase import SessionPhase
from luckydraw.services.errors import EmptyNameError, NoCandidatesError
from luckydraw.services.exclusion_set import ExclusionSet
from luckydraw.services.participant_registry import ParticipantRegistry, RegistrationResult
from luckydraw.services.winner_ledger import WinnerLedger

logger = logging.getLogger(__name__)


@dataclass
class SessionSnapshot:
    """Point-in-time view used for admin initialization and diagnostics."""
    participants: List[str] = field(default_factory=list)
    players: List[Dict[str, str]] = field(default_factory=list)
    winners: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    phase: SessionPhase = SessionPhase.EMPTY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participants": self.participants,
            "players": self.players,
            "winners": self.winners,
            "excluded": self.excluded,
            "phase": self.phase.value,
        }


class DrawSession:
    """The live lucky draw session."""

    def __init__(self, random_source: Optional[RandomSource] = None):
        self.registry = ParticipantRegistry()
        self.winners = WinnerLedger()
        self.exclusions = ExclusionSet()
        self.engine = DrawEngine(
            registry=self.registry,
            ledger=self.winners,
            exclusions=self.exclusions,
            random_source=random_source or PseudoRandomSource(),
        )
        self.phase = SessionPhase.EMPTY

    # =========================================================================
    # Registration
    # =========================================================================

    def register(
        self,
        name: Optional[str],
        identity_token: Optional[str],
        connection_id: str,
    ) -> RegistrationResult:
        """Register or reconnect a participant. See ParticipantRegistry.register."""
        result = self.registry.register(name, identity_token, connection_id)
        if not result.reconnected:
            self.phase = SessionPhase.POPULATING
        return result

    def remove_by_connection(self, connection_id: str) -> List[Participant]:
        removed = self.registry.remove_by_connection(connection_id)
        if removed and self.phase == SessionPhase.POPULATING:
            if not len(self.registry) and not len(self.winners):
                self.phase = SessionPhase.EMPTY
        return removed

    # =========================================================================
    # Admin actions
    # =========================================================================

    def toggle_exclusion(self, name: Optional[str]) -> bool:
        """Toggle exclusion for ``name``; returns True if it is now excluded."""
        clean_name = (name or "").strip()
        if not clean_name:
            raise EmptyNameError()
        return self.exclusions.toggle(clean_name)

    def start_rolling(self) -> None:
        self.phase = SessionPhase.ROLLING

    def draw(self) -> DrawResult:
        """Draw the next winner.

        Raises:
            NoCandidatesError: the pool is exhausted
        """
        try:
            result = self.engine.draw()
        except NoCandidatesError:
            self.phase = SessionPhase.EXHAUSTED
            raise
        self.phase = SessionPhase.DRAWN
        return result

    def reset(self) -> None:
        """Clear all participants, winners and exclusions."""
        self.registry.reset()
        self.winners.reset()
        self.exclusions.reset()
        self.phase = SessionPhase.EMPTY
        logger.info("[Session] Reset")

    # =========================================================================
    # Views
    # =========================================================================

    def participant_names(self) -> List[str]:
        return self.registry.snapshot()

    def players(self) -> List[Dict[str, str]]:
        return [p.to_dict() for p in self.registry.participants()]

    def winner_names(self) -> List[str]:
        return self.winners.snapshot()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            participants=self.registry.snapshot(),
            players=self.players(),
            winners=self.winners.snapshot(),
            excluded=self.exclusions.snapshot(),
            phase=self.phase,
        )
