"""Logging setup shared by the server entry points."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class HealthCheckFilter(logging.Filter):
    """Drop successful health check lines from the uvicorn access log."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if '"GET /api/health' in message and "200" in message:
            return False
        return True


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure root logging once and return the package logger."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())
    # Socket.IO internals are far too chatty at INFO
    logging.getLogger("socketio").setLevel(logging.WARNING)
    logging.getLogger("engineio").setLevel(logging.WARNING)
    return logging.getLogger("luckydraw")
