"""
Starry Geo Dashboard Configuration.

Frozen dataclass for immutable configuration with environment overrides.
All magic numbers and configuration values should be defined here.

Environment variables can override defaults (read at module import time):
- API_BASE_URL: Backend API URL
- API_TIMEOUT_SECONDS: Override API timeout
- APP_VERSION: Override version string
- SESSION_FILE: Where the session token is persisted ("" keeps it in memory)
- NOTIFICATION_TTL_SECONDS: How long a toast stays visible
- DEFAULT_LOGIN_EMAIL / DEFAULT_LOGIN_PASSWORD: Login form prefill
- LOG_LEVEL: Root logging level
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_int_env(name: str, default: int) -> int:
    """Get integer environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            pass
    return default


def _get_float_env(name: str, default: float) -> float:
    """Get float environment variable or return default."""
    val = os.getenv(name)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            pass
    return default


def _get_str_env(name: str, default: str) -> str:
    """Get string environment variable or return default."""
    return os.getenv(name, default)


def _default_session_file() -> str:
    return str(Path.home() / ".starry_geo" / "session.json")


@dataclass(frozen=True)
class GeoDashboardConfig:
    """Immutable dashboard configuration.

    frozen=True ensures config values cannot be accidentally modified.
    Environment variables are read at module import time.
    """

    # Application
    APP_NAME: str = "Starry Geo"
    APP_ICON: str = "🌍"
    APP_VERSION: str = field(
        default_factory=lambda: _get_str_env('APP_VERSION', "1.0.0")
    )

    # Backend API
    API_BASE_URL: str = field(
        default_factory=lambda: _get_str_env('API_BASE_URL', 'http://localhost:8000/api').rstrip('/')
    )
    API_TIMEOUT_SECONDS: int = field(
        default_factory=lambda: _get_int_env('API_TIMEOUT_SECONDS', 30)
    )

    # Session persistence
    SESSION_TOKEN_KEY: str = "exam-token"
    SESSION_FILE: str = field(
        default_factory=lambda: _get_str_env('SESSION_FILE', _default_session_file())
    )

    # Toast notifications
    NOTIFICATION_TTL_SECONDS: float = field(
        default_factory=lambda: _get_float_env('NOTIFICATION_TTL_SECONDS', 3.2)
    )
    TOAST_REFRESH_SECONDS: float = 1.0

    # Geo + history are loaded side by side after sign-in
    LOAD_WORKERS: int = 2

    # Map embed half-width in degrees around the pinned location
    MAP_SPAN_DEGREES: float = 0.15
    MAP_HEIGHT: int = 256

    # Login form prefill (seeded backend account)
    DEFAULT_LOGIN_EMAIL: str = field(
        default_factory=lambda: _get_str_env('DEFAULT_LOGIN_EMAIL', 'exam.user@example.com')
    )
    DEFAULT_LOGIN_PASSWORD: str = field(
        default_factory=lambda: _get_str_env('DEFAULT_LOGIN_PASSWORD', 'Password123!')
    )

    # Logging
    LOG_LEVEL: str = field(
        default_factory=lambda: _get_str_env('LOG_LEVEL', 'INFO').upper()
    )

    @property
    def uses_memory_session(self) -> bool:
        """Whether the session token lives only for the process lifetime."""
        return not self.SESSION_FILE


# Global immutable config instance
config = GeoDashboardConfig()
