"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with no configuration at all, which is what a classroom
exercise usually wants.  Override values via environment variables
before the application is imported.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


def _get_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Classroom Users API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _get_bool(os.getenv("DEBUG"), default=False)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path to a log file.  When empty only console logging is
    # configured.
    log_file: str = os.getenv("LOG_FILE", "")

    # Set ACCESS_LOG=false to hide uvicorn's per‑request access lines.
    access_log: bool = _get_bool(os.getenv("ACCESS_LOG"), default=True)

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Versioned prefix under which all user routes are mounted.
    base_path: str = os.getenv("BASE_PATH", "/api/v1")

    # Comma‑separated list of allowed CORS origins.  ``*`` allows any
    # origin, which matches the permissive setup students expect when
    # calling the API from Postman or a local web page.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # When enabled the in‑memory store starts with the three classroom
    # users (Asha, Ravi and Maya).
    seed_users: bool = _get_bool(os.getenv("SEED_USERS"), default=True)

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
