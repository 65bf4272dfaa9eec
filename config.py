"""Runtime configuration read from the environment."""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Configuration
APP_DIR = Path(__file__).resolve().parent
DEFAULT_PHOTOS_DIR = "/app/data/photos"
DEFAULT_CACHE_DIR = "/app/cache"
DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_FRONTEND_DIR = APP_DIR / "frontend"


@dataclass
class Settings:
    photos_dir: Path
    cache_dir: Path
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    frontend_dir: Path = DEFAULT_FRONTEND_DIR
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: int = logging.INFO
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        try:
            port = int(env.get("PORT") or DEFAULT_PORT)
        except ValueError:
            port = DEFAULT_PORT

        origins = [o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()]
        level = logging.getLevelName(env.get("LOG_LEVEL", "INFO").upper())
        log_dir = env.get("LOG_DIR")

        return cls(
            photos_dir=Path(env.get("PHOTOS_DIR") or DEFAULT_PHOTOS_DIR),
            cache_dir=Path(env.get("CACHE_DIR") or DEFAULT_CACHE_DIR),
            port=port,
            host=env.get("HOST") or DEFAULT_HOST,
            frontend_dir=Path(env.get("FRONTEND_DIR") or DEFAULT_FRONTEND_DIR),
            cors_origins=origins or ["*"],
            log_level=level if isinstance(level, int) else logging.INFO,
            log_dir=Path(log_dir) if log_dir else None,
        )
