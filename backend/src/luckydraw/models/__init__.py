"""Lucky draw models package - re-exports for public API"""

from luckydraw.models.participant import Participant, format_participant_number
from luckydraw.models.session_phase import SessionPhase

__all__ = [
    "Participant",
    "format_participant_number",
    "SessionPhase",
]
