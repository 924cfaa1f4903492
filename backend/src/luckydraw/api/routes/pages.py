"""Page and diagnostics endpoints.

The HTML pages themselves are static files; this router only maps the two
entry URLs onto them and exposes a read-only session snapshot.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

DASHBOARD_PAGE = "index.html"
MOBILE_PAGE = "mobile.html"


def _page(request: Request, filename: str) -> FileResponse:
    static_dir: Path = request.app.state.settings.static_dir
    path = static_dir / filename
    if not path.is_file():
        logger.warning("Page not found: %s", path)
        raise HTTPException(status_code=404, detail=f"{filename} not found")
    return FileResponse(path, media_type="text/html")


@router.get("/", include_in_schema=False)
async def dashboard(request: Request):
    """Admin dashboard page."""
    return _page(request, DASHBOARD_PAGE)


@router.get("/mobile.html", include_in_schema=False)
async def mobile(request: Request):
    """Participant page opened on phones."""
    return _page(request, MOBILE_PAGE)


@router.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "Lucky Draw"}


@router.get("/api/session")
async def session_snapshot(request: Request):
    """Same snapshot the admin console receives on admin_init."""
    return request.app.state.draw_session.snapshot().to_dict()
