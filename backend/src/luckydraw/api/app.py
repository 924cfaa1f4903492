"""FastAPI application wrapped with the Socket.IO server.

Use ``socket_app`` with uvicorn; it routes Socket.IO traffic to the draw
event handlers and everything else to FastAPI.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from luckydraw import __version__
from luckydraw.api.routes.pages import router as pages_router
from luckydraw.config.logging_config import setup_logging
from luckydraw.config.settings import Settings, get_settings
from luckydraw.connection.socketio_broadcaster import SocketIOBroadcaster
from luckydraw.connection.socketio_server import (
    DrawEventHandlers,
    create_sio,
    create_socketio_app,
)
from luckydraw.mechanics.draw.random_source import PseudoRandomSource
from luckydraw.services.draw_session import DrawSession

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, session: Optional[DrawSession] = None) -> FastAPI:
    """Build the FastAPI app, its Socket.IO server and the one DrawSession.

    The combined ASGI app is stored on ``app.state.socket_app``.
    """
    settings = settings or get_settings()
    session = session or DrawSession(random_source=PseudoRandomSource(settings.random_seed))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Lucky Draw server starting | port=%s remove_on_disconnect=%s static_dir=%s",
            settings.port, settings.remove_on_disconnect, settings.static_dir,
        )
        yield
        logger.info("Lucky Draw server shutdown complete")

    app = FastAPI(title="Lucky Draw", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.draw_session = session

    sio = create_sio(settings.cors_origins)
    broadcaster = SocketIOBroadcaster(sio)
    handlers = DrawEventHandlers(
        session,
        broadcaster,
        remove_on_disconnect=settings.remove_on_disconnect,
    )
    handlers.register(sio)
    app.state.sio = sio
    app.state.broadcaster = broadcaster
    app.state.event_handlers = handlers

    app.include_router(pages_router)
    if settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
    else:
        logger.warning("Static directory %s does not exist; assets will not be served", settings.static_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.socket_app = create_socketio_app(sio, app)
    return app


_settings = get_settings()
setup_logging(_settings.log_level)
app = create_app(_settings)
socket_app = app.state.socket_app
