"""Socket.IO-based broadcaster for draw session updates.

Translates session state changes into Socket.IO events. Pushes go to every
connected client; replies go to a single socket. Delivery is fire-and-forget:
``AsyncServer.emit`` queues the packets and returns without waiting for acks.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from luckydraw.mechanics.draw.draw_engine import DrawResult
from luckydraw.services.draw_session import DrawSession
from luckydraw.services.errors import DrawSessionError

logger = logging.getLogger(__name__)

# Server -> client event names
UPDATE_PARTICIPANT_LIST = "update_participant_list"
LOGIN_SUCCESS = "login_success"
LOGIN_ERROR = "login_error"
ADMIN_INIT_DATA = "admin_init_data"
START_ROLLING = "start_rolling"
DRAW_RESULT = "draw_result"
DRAW_ERROR = "draw_error"
YOU_WIN = "you_win"
EXCLUDE_TOGGLED = "exclude_toggled"
EXCLUDE_ERROR = "exclude_error"
EVENT_RESET = "event_reset"


def build_message(event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap event data with the common ``type`` and ``timestamp`` envelope."""
    return {
        "type": event_type,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **data,
    }


class SocketIOBroadcaster:
    """Broadcasts draw session events using Socket.IO."""

    def __init__(self, sio, namespace: str = "/"):
        self.sio = sio
        self.namespace = namespace

    # =========================================================================
    # Transport helpers
    # =========================================================================

    async def broadcast(self, event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Send an event to every connected client."""
        message = build_message(event_type, data)
        await self.sio.emit(event_type, message, namespace=self.namespace)
        logger.debug("[SocketIO] Broadcast %s", event_type)
        return message

    async def send_to_socket(self, sid: str, event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Send an event to a single socket."""
        message = build_message(event_type, data)
        await self.sio.emit(event_type, message, to=sid, namespace=self.namespace)
        logger.debug("[SocketIO] Sent %s to sid=%s", event_type, sid)
        return message

    # =========================================================================
    # Participant list
    # =========================================================================

    @staticmethod
    def participant_list_data(session: DrawSession) -> Dict[str, Any]:
        return {
            "participants": session.participant_names(),
            "players": session.players(),
            "winners": session.winner_names(),
        }

    async def broadcast_participant_list(self, session: DrawSession) -> Dict[str, Any]:
        data = self.participant_list_data(session)
        logger.info(
            "[SocketIO] Broadcasting participant list | participants=%d winners=%d",
            len(data["participants"]), len(data["winners"]),
        )
        return await self.broadcast(UPDATE_PARTICIPANT_LIST, data)

    async def send_participant_list(self, sid: str, session: DrawSession) -> Dict[str, Any]:
        return await self.send_to_socket(sid, UPDATE_PARTICIPANT_LIST, self.participant_list_data(session))

    # =========================================================================
    # Replies
    # =========================================================================

    async def send_login_success(
        self,
        sid: str,
        name: str,
        number: str,
        reconnected: bool,
    ) -> Dict[str, Any]:
        return await self.send_to_socket(
            sid,
            LOGIN_SUCCESS,
            {"success": True, "name": name, "no": number, "reconnected": reconnected},
        )

    async def send_login_error(self, sid: str, error: Dict[str, str]) -> Dict[str, Any]:
        return await self.send_to_socket(sid, LOGIN_ERROR, {"success": False, **error})

    async def send_admin_init(self, sid: str, session: DrawSession) -> Dict[str, Any]:
        return await self.send_to_socket(sid, ADMIN_INIT_DATA, session.snapshot().to_dict())

    async def send_exclude_toggled(
        self,
        sid: str,
        name: str,
        excluded: bool,
        excluded_names: List[str],
    ) -> Dict[str, Any]:
        return await self.send_to_socket(
            sid,
            EXCLUDE_TOGGLED,
            {"success": True, "name": name, "excluded": excluded, "excluded_names": excluded_names},
        )

    async def send_exclude_error(self, sid: str, error: Dict[str, str]) -> Dict[str, Any]:
        return await self.send_to_socket(sid, EXCLUDE_ERROR, {"success": False, **error})

    # =========================================================================
    # Draw broadcasts
    # =========================================================================

    async def broadcast_start_rolling(self) -> Dict[str, Any]:
        return await self.broadcast(START_ROLLING, {})

    async def broadcast_draw_result(self, result: DrawResult, session: DrawSession) -> Dict[str, Any]:
        return await self.broadcast(
            DRAW_RESULT,
            {"success": True, **result.to_dict(), "winners": session.winner_names()},
        )

    async def notify_winner(self, result: DrawResult) -> Optional[Dict[str, Any]]:
        """Tell the winning participant's own device that they won."""
        winner = result.winner
        if not winner.connection_id:
            return None
        return await self.send_to_socket(
            winner.connection_id,
            YOU_WIN,
            {"name": winner.name, "no": winner.number},
        )

    async def broadcast_draw_error(self, error: DrawSessionError) -> Dict[str, Any]:
        return await self.broadcast(DRAW_ERROR, {"success": False, **error.to_payload()})

    async def broadcast_reset(self) -> Dict[str, Any]:
        return await self.broadcast(EVENT_RESET, {})
