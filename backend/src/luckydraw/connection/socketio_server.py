"""Socket.IO server for the lucky draw session.

Client -> server events:
- join_request: mobile client registers (or reconnects) by name
- admin_init: admin console asks for the current snapshot
- admin_start_rolling: admin starts the rolling animation on every screen
- admin_perform_draw: admin draws the next winner
- admin_toggle_exclude: admin flips a name in or out of the exclusion set
- admin_reset: admin clears the whole session

Every handler runs its mutate-then-emit sequence under one asyncio lock, so
the order in which the server emits events is the order in which state
changed. Handler return values are delivered as the Socket.IO ack.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import socketio
from pydantic import ValidationError

from luckydraw.api.schemas.draw import JoinRequest, ToggleExcludeRequest
from luckydraw.connection.socketio_broadcaster import SocketIOBroadcaster
from luckydraw.services.draw_session import DrawSession
from luckydraw.services.errors import DrawSessionError, NoCandidatesError

logger = logging.getLogger(__name__)

INVALID_PAYLOAD = {"code": "invalid_payload", "message": "Malformed request payload"}
INTERNAL_ERROR = {"code": "internal_error", "message": "Unexpected server error"}

CLIENT_EVENTS = (
    "join_request",
    "admin_init",
    "admin_start_rolling",
    "admin_perform_draw",
    "admin_toggle_exclude",
    "admin_reset",
)


def create_sio(cors_allowed_origins: Any = "*") -> socketio.AsyncServer:
    """Create the async Socket.IO server."""
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=cors_allowed_origins,
        ping_timeout=30,
        ping_interval=25,
        logger=False,  # Disable socket.io internal logging (too verbose)
        engineio_logger=False,
    )


class DrawEventHandlers:
    """Socket.IO event handlers bound to one DrawSession."""

    def __init__(
        self,
        session: DrawSession,
        broadcaster: SocketIOBroadcaster,
        remove_on_disconnect: bool = False,
    ):
        self.session = session
        self.broadcaster = broadcaster
        self.remove_on_disconnect = remove_on_disconnect
        self._lock = asyncio.Lock()

    def register(self, sio: socketio.AsyncServer, namespace: str = "/") -> None:
        """Attach every handler to ``sio``.

        Client events are accepted under both their underscore and hyphenated
        spellings (``join_request`` and ``join-request``).
        """
        sio.on("connect", self.connect, namespace=namespace)
        sio.on("disconnect", self.disconnect, namespace=namespace)
        for event in CLIENT_EVENTS:
            handler = getattr(self, event)
            sio.on(event, handler, namespace=namespace)
            sio.on(event.replace("_", "-"), handler, namespace=namespace)

    # =========================================================================
    # Connection lifecycle
    # =========================================================================

    async def connect(self, sid: str, environ: Dict, auth: Optional[Dict] = None):
        """Replay the current participant list to the new socket."""
        logger.info("[SocketIO] Connected | sid=%s", sid)
        try:
            async with self._lock:
                await self.broadcaster.send_participant_list(sid, self.session)
        except Exception as e:
            logger.error("[SocketIO] Failed to replay participant list | sid=%s: %s", sid, e, exc_info=True)

    async def disconnect(self, sid: str, reason: Any = None):
        logger.info("[SocketIO] Disconnected | sid=%s reason=%s", sid, reason)
        if not self.remove_on_disconnect:
            return
        try:
            async with self._lock:
                removed = self.session.remove_by_connection(sid)
                if removed:
                    await self.broadcaster.broadcast_participant_list(self.session)
        except Exception as e:
            logger.error("[SocketIO] Failed to handle disconnect | sid=%s: %s", sid, e, exc_info=True)

    # =========================================================================
    # Mobile events
    # =========================================================================

    async def join_request(self, sid: str, data: Any = None) -> Dict[str, Any]:
        """Register a participant; reply login_success or login_error."""
        try:
            request = JoinRequest.model_validate(data)
        except ValidationError as e:
            logger.warning("[SocketIO] join_request with invalid payload | sid=%s: %s", sid, e)
            return await self.broadcaster.send_login_error(sid, INVALID_PAYLOAD)

        try:
            async with self._lock:
                try:
                    result = self.session.register(request.name, request.identity_token, sid)
                except DrawSessionError as e:
                    logger.info("[SocketIO] join_request refused | sid=%s code=%s", sid, e.code)
                    return await self.broadcaster.send_login_error(sid, e.to_payload())

                participant = result.participant
                reply = await self.broadcaster.send_login_success(
                    sid, participant.name, participant.number, result.reconnected
                )
                if not result.reconnected:
                    await self.broadcaster.broadcast_participant_list(self.session)
                return reply
        except Exception as e:
            logger.error("[SocketIO] join_request failed | sid=%s: %s", sid, e, exc_info=True)
            return {"success": False, **INTERNAL_ERROR}

    # =========================================================================
    # Admin events
    # =========================================================================

    async def admin_init(self, sid: str, data: Any = None) -> Dict[str, Any]:
        """Reply with the participant list and winners, to the requester only."""
        try:
            async with self._lock:
                return await self.broadcaster.send_admin_init(sid, self.session)
        except Exception as e:
            logger.error("[SocketIO] admin_init failed | sid=%s: %s", sid, e, exc_info=True)
            return {"success": False, **INTERNAL_ERROR}

    async def admin_start_rolling(self, sid: str, data: Any = None) -> Dict[str, Any]:
        try:
            async with self._lock:
                self.session.start_rolling()
                logger.info("[SocketIO] Rolling started | sid=%s", sid)
                return await self.broadcaster.broadcast_start_rolling()
        except Exception as e:
            logger.error("[SocketIO] admin_start_rolling failed | sid=%s: %s", sid, e, exc_info=True)
            return {"success": False, **INTERNAL_ERROR}

    async def admin_perform_draw(self, sid: str, data: Any = None) -> Dict[str, Any]:
        """Draw a winner and broadcast the result (or the exhausted pool) to all."""
        try:
            async with self._lock:
                try:
                    result = self.session.draw()
                except NoCandidatesError as e:
                    return await self.broadcaster.broadcast_draw_error(e)

                message = await self.broadcaster.broadcast_draw_result(result, self.session)
                await self.broadcaster.notify_winner(result)
                logger.info(
                    "[SocketIO] Draw broadcast | winner=%s remaining=%d",
                    result.winner.name, result.remaining,
                )
                return message
        except Exception as e:
            logger.error("[SocketIO] admin_perform_draw failed | sid=%s: %s", sid, e, exc_info=True)
            return {"success": False, **INTERNAL_ERROR}

    async def admin_toggle_exclude(self, sid: str, data: Any = None) -> Dict[str, Any]:
        """Toggle an exclusion. Only the requesting console is told."""
        try:
            request = ToggleExcludeRequest.model_validate(data)
        except ValidationError as e:
            logger.warning("[SocketIO] admin_toggle_exclude with invalid payload | sid=%s: %s", sid, e)
            return await self.broadcaster.send_exclude_error(sid, INVALID_PAYLOAD)

        try:
            async with self._lock:
                try:
                    excluded = self.session.toggle_exclusion(request.name)
                except DrawSessionError as e:
                    return await self.broadcaster.send_exclude_error(sid, e.to_payload())
                return await self.broadcaster.send_exclude_toggled(
                    sid,
                    request.name.strip(),
                    excluded,
                    self.session.exclusions.snapshot(),
                )
        except Exception as e:
            logger.error("[SocketIO] admin_toggle_exclude failed | sid=%s: %s", sid, e, exc_info=True)
            return {"success": False, **INTERNAL_ERROR}

    async def admin_reset(self, sid: str, data: Any = None) -> Dict[str, Any]:
        """Clear the session, then tell everyone to reset and show the empty list."""
        try:
            async with self._lock:
                self.session.reset()
                logger.info("[SocketIO] Session reset | sid=%s", sid)
                message = await self.broadcaster.broadcast_reset()
                await self.broadcaster.broadcast_participant_list(self.session)
                return message
        except Exception as e:
            logger.error("[SocketIO] admin_reset failed | sid=%s: %s", sid, e, exc_info=True)
            return {"success": False, **INTERNAL_ERROR}


# =============================================================================
# ASGI App
# =============================================================================

def create_socketio_app(sio: socketio.AsyncServer, other_app):
    """Create Socket.IO ASGI app wrapping another ASGI app.

    Args:
        sio: The Socket.IO server
        other_app: The main ASGI app (e.g., FastAPI)

    Returns:
        Combined ASGI app with Socket.IO
    """
    return socketio.ASGIApp(sio, other_asgi_app=other_app)
