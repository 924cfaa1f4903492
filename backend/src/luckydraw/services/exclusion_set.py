"""Names temporarily removed from draw eligibility."""

import logging
from typing import List, Set

logger = logging.getLogger(__name__)


class ExclusionSet:
    """Toggleable set of excluded names.

    Names are not checked against the registry: a name can be excluded before
    it registers or after it has left.
    """

    def __init__(self):
        self._names: Set[str] = set()

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def toggle(self, name: str) -> bool:
        """Flip the exclusion for ``name``. Returns True if it is now excluded."""
        if name in self._names:
            self._names.discard(name)
            excluded = False
        else:
            self._names.add(name)
            excluded = True
        logger.info("[Exclusions] Toggled | name=%s excluded=%s total=%d", name, excluded, len(self._names))
        return excluded

    def is_excluded(self, name: str) -> bool:
        return name in self._names

    def snapshot(self) -> List[str]:
        return sorted(self._names)

    def reset(self) -> None:
        self._names.clear()
