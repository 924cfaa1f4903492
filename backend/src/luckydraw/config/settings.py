"""Environment-driven settings for the lucky draw server.

Values come from the process environment, optionally seeded from a ``.env``
file. ``get_settings()`` caches the result; call ``get_settings.cache_clear()``
after changing the environment in tests.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# backend/src/luckydraw/config/settings.py -> repository root
PROJECT_ROOT = Path(__file__).resolve().parents[4]
DEFAULT_STATIC_DIR = PROJECT_ROOT / "static"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _parse_allowed_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    host: str = "0.0.0.0"
    log_level: str = "INFO"
    remove_on_disconnect: bool = False
    static_dir: Path = DEFAULT_STATIC_DIR
    allowed_origins: List[str] = field(default_factory=list)
    random_seed: Optional[int] = None

    @property
    def cors_origins(self):
        """Origins for Socket.IO; ``*`` when no allowlist is configured (dev)."""
        return self.allowed_origins or "*"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            port=_env_int("PORT", 3000),
            host=os.getenv("HOST", "0.0.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            remove_on_disconnect=_env_bool("REMOVE_ON_DISCONNECT", False),
            static_dir=Path(os.getenv("STATIC_DIR") or DEFAULT_STATIC_DIR),
            allowed_origins=_parse_allowed_origins(os.getenv("WS_ALLOWED_ORIGINS", "")),
            random_seed=_env_int("RANDOM_SEED", None),
        )


@lru_cache()
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
