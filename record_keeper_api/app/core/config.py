"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration.  In a deployment you should
override these via environment variables.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Record Keeper API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    # Per-logger overrides, e.g. "uvicorn.access=WARNING".
    log_levels: str = field(default_factory=lambda: os.getenv("LOG_LEVELS", ""))

    # Key‑value slot holding the signed-in identity between restarts.
    # Relative paths are resolved against the project root by ``core.db``.
    # Each call opens its own connection, so ``:memory:`` cannot be used.
    session_db_path: str = field(default_factory=lambda: os.getenv("SESSION_DB_PATH", "record_keeper_session.db"))
    session_key: str = field(default_factory=lambda: os.getenv("SESSION_KEY", "emberUser"))

    # Load the demo identities and records at start-up.
    seed_demo_data: bool = field(default_factory=lambda: _env_bool("SEED_DEMO_DATA", "true"))

    # Number of notifications kept for the presentation layer.
    notification_history: int = field(default_factory=lambda: int(os.getenv("NOTIFICATION_HISTORY", "50")))

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  ``create_app`` also accepts
# an explicit instance, which is how tests point the session slot at a
# temporary file.
settings = Settings()
