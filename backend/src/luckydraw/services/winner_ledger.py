"""Append-only record of names already drawn, oldest first."""

import logging
from typing import List

logger = logging.getLogger(__name__)


class WinnerLedger:

    def __init__(self):
        self._winners: List[str] = []

    def __len__(self) -> int:
        return len(self._winners)

    def __contains__(self, name: object) -> bool:
        return name in self._winners

    def record(self, name: str) -> bool:
        """Append ``name``. A name already recorded is left alone and False is returned."""
        if name in self._winners:
            logger.warning("[Ledger] Ignoring duplicate winner | name=%s", name)
            return False
        self._winners.append(name)
        return True

    def snapshot(self) -> List[str]:
        return list(self._winners)

    def reset(self) -> None:
        self._winners.clear()
