"""Draw engine - computes the candidate pool and selects a winner.

The pool is rebuilt from the registry on every draw, so exclusion toggles and
late registrations are always reflected without incremental bookkeeping.
Draws are human-paced, so the O(registry) cost per draw does not matter.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from luckydraw.mechanics.draw.random_source import RandomSource
from luckydraw.models.participant import Participant
from luckydraw.services.errors import NoCandidatesError
from luckydraw.services.exclusion_set import ExclusionSet
from luckydraw.services.participant_registry import ParticipantRegistry
from luckydraw.services.winner_ledger import WinnerLedger

logger = logging.getLogger(__name__)


@dataclass
class DrawResult:
    """A successful draw: the winner and how many candidates are left."""
    winner: Participant
    remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": self.winner.name,
            "no": self.winner.number,
            "remaining": self.remaining,
        }


class DrawEngine:
    """Selects winners from registry minus ledger minus exclusions."""

    def __init__(
        self,
        registry: ParticipantRegistry,
        ledger: WinnerLedger,
        exclusions: ExclusionSet,
        random_source: RandomSource,
    ):
        self.registry = registry
        self.ledger = ledger
        self.exclusions = exclusions
        self.random_source = random_source

    def candidates(self) -> List[Participant]:
        """Eligible participants in registration order."""
        return [
            p for p in self.registry.participants()
            if p.name not in self.ledger and p.name not in self.exclusions
        ]

    def draw(self) -> DrawResult:
        """Pick one candidate uniformly at random and record it as a winner.

        Raises:
            NoCandidatesError: nobody is eligible; the ledger is left untouched
        """
        pool = self.candidates()
        if not pool:
            logger.info(
                "[Draw] No candidates | registered=%d winners=%d excluded=%d",
                len(self.registry), len(self.ledger), len(self.exclusions),
            )
            raise NoCandidatesError()

        index = self.random_source.pick_index(len(pool))
        if not 0 <= index < len(pool):
            raise ValueError(f"random source returned {index} outside [0, {len(pool)})")
        winner = pool[index]
        self.ledger.record(winner.name)

        logger.info(
            "[Draw] Winner selected | name=%s no=%s pool=%d",
            winner.name, winner.number, len(pool),
        )
        return DrawResult(winner=winner, remaining=len(pool) - 1)
