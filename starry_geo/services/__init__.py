"""Services for the Starry Geo dashboard."""
from starry_geo.services.api_client import (
    GeoAPIClient,
    LoginResponse,
    extract_error_message,
    get_api_client,
)
from starry_geo.services.session_store import (
    SessionStore,
    FileSessionStore,
    MemorySessionStore,
    browser_session_key,
    create_session_store,
)
from starry_geo.services.orchestrator import (
    DashboardOrchestrator,
    DashboardState,
    SessionPhase,
    create_orchestrator,
)

__all__ = [
    # Backend client
    "GeoAPIClient",
    "LoginResponse",
    "extract_error_message",
    "get_api_client",
    # Session persistence
    "SessionStore",
    "FileSessionStore",
    "MemorySessionStore",
    "browser_session_key",
    "create_session_store",
    # Orchestration
    "DashboardOrchestrator",
    "DashboardState",
    "SessionPhase",
    "create_orchestrator",
]
