# rpcschema/config/default.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from dotenv import load_dotenv

load_dotenv()

# ──────────────────────────────────────────────────────────────
# Defaults (overridable through the environment or a .env file)
# ──────────────────────────────────────────────────────────────
API_PATH: str = os.getenv("RPCSCHEMA_API_PATH", "api.json")
LOG_LEVEL: str = os.getenv("RPCSCHEMA_LOG_LEVEL", "INFO")
HOST: str = os.getenv("RPCSCHEMA_HOST", "127.0.0.1")
PORT: int = int(os.getenv("RPCSCHEMA_PORT", "8000"))
SCHEMA_URL: str = os.getenv("RPCSCHEMA_URL", f"http://{HOST}:{PORT}")


# ──────────────────────────────────────────────────────────────
# Settings
# ──────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class SchemaSettings:
    api_path: str = API_PATH
    log_level: str | int = LOG_LEVEL
    host: str = HOST
    port: int = PORT
    schema_url: str = SCHEMA_URL
    request_timeout: float = 10.0

    @classmethod
    def resolve(cls, settings: "SchemaSettings | dict | None" = None, **overrides: Any) -> "SchemaSettings":
        """Accept a SchemaSettings, a dict or None and apply non-None overrides."""
        if settings is None:
            resolved = cls()
        elif isinstance(settings, SchemaSettings):
            resolved = settings
        elif isinstance(settings, dict):
            resolved = cls(**settings)
        else:
            raise TypeError("settings must be SchemaSettings | dict | None")

        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            resolved = replace(resolved, **overrides)
        return resolved
