"""Admin-visible phase of the draw session."""

from enum import Enum


class SessionPhase(str, Enum):
    EMPTY = "empty"
    POPULATING = "populating"
    ROLLING = "rolling"
    DRAWN = "drawn"
    EXHAUSTED = "exhausted"
