#!/usr/bin/env python3
"""
Uvicorn runner script for the Lucky Draw server.
Starts the Socket.IO-wrapped FastAPI application on the configured port.
"""

import sys
from pathlib import Path

import uvicorn


def main():
    """Start the Socket.IO-wrapped FastAPI application with uvicorn."""
    # Allow running from a checkout without installing the package
    src_dir = Path(__file__).parent / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    from luckydraw.config.settings import get_settings

    settings = get_settings()
    uvicorn.run(
        "luckydraw.api.app:socket_app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
