"""Runtime configuration helpers for the Gymote relay server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    """Immutable application configuration loaded from the environment."""

    debug: bool
    host: str
    port: int
    log_level: str
    # WebSocket configuration
    websocket_cors_origins: str
    websocket_ping_interval: int
    websocket_ping_timeout: int
    websocket_async_mode: str
    # Join link configuration
    public_base_url: Optional[str]
    remote_path: str
    # Room id generation
    room_id_prefix: str
    room_id_digits: int

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> "Settings":
        env = env if env is not None else os.environ
        return Settings(

            # toggle Flask debugger (disabled in prod)
            debug=env.get("FLASK_DEBUG", "false").lower() in ("1", "true", "yes"),
            # phones on the LAN must reach the server, so bind to all interfaces
            host=env.get("FLASK_HOST", "0.0.0.0"),  # nosec B104
            port=int(env.get("FLASK_PORT", "3001")),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),

            # websocket configuration
            websocket_cors_origins=env.get("WEBSOCKET_CORS_ORIGINS", "*"),
            websocket_ping_interval=int(env.get("WEBSOCKET_PING_INTERVAL", "25")),
            websocket_ping_timeout=int(env.get("WEBSOCKET_PING_TIMEOUT", "60")),
            websocket_async_mode=env.get("WEBSOCKET_ASYNC_MODE", "eventlet"),

            # join link shown to the screen (falls back to the request host)
            public_base_url=env.get("PUBLIC_BASE_URL") or None,
            remote_path=env.get("REMOTE_PATH", "/remote"),

            # generated room ids look like "room4821"
            room_id_prefix=env.get("ROOM_ID_PREFIX", "room"),
            room_id_digits=int(env.get("ROOM_ID_DIGITS", "4")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings loaded from environment variables."""

    return Settings.from_env()


settings = get_settings()
