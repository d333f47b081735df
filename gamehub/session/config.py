"""Configuration helpers for the session client runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_SERVER_URL = "https://mini-games-hub.onrender.com"


@dataclass(frozen=True)
class ClientSettings:
    server_url: str
    reconnect_attempts: int
    reconnect_delay: float
    transports: tuple[str, ...]
    log_level: str


def load_settings() -> ClientSettings:
    attempts_raw = os.getenv("GAMEHUB_RECONNECT_ATTEMPTS", "10")
    delay_raw = os.getenv("GAMEHUB_RECONNECT_DELAY", "1.0")
    transports_raw = os.getenv("GAMEHUB_TRANSPORTS", "websocket")
    attempts = int(attempts_raw)
    delay = float(delay_raw)
    if attempts < 0 or delay < 0:
        raise ValueError("Reconnect attempts and delay must not be negative")
    return ClientSettings(
        server_url=os.getenv("GAMEHUB_SERVER_URL", DEFAULT_SERVER_URL),
        reconnect_attempts=attempts,
        reconnect_delay=delay,
        transports=tuple(item.strip() for item in transports_raw.split(",") if item.strip()),
        log_level=os.getenv("GAMEHUB_LOG_LEVEL", "INFO").upper(),
    )
