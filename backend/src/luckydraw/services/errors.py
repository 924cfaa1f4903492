"""Recoverable, user-facing errors raised by the draw session.

Each error carries a stable ``code`` that clients switch on and a readable
``message`` for display. None of them is fatal to the server.
"""

from typing import Dict


class DrawSessionError(Exception):
    """Base class for draw session errors reported back to clients."""

    code = "draw_session_error"
    default_message = "Draw session error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


class EmptyNameError(DrawSessionError):
    """Name was blank or whitespace only."""

    code = "empty_name"
    default_message = "Name must not be empty"


class NameTakenError(DrawSessionError):
    """Name already registered and no valid reconnect token was presented."""

    code = "name_taken"
    default_message = "This name is already taken"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"The name '{name}' is already taken")


class NoCandidatesError(DrawSessionError):
    """Every registered participant has already won or is excluded."""

    code = "no_candidates"
    default_message = "No eligible participants left to draw"
