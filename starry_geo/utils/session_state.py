"""Session state management for the Starry Geo dashboard.

Streamlit reruns the whole script on every interaction. This module keeps
the objects that must survive those reruns in ``st.session_state``:
- The per-browser-session DashboardOrchestrator
- Login form values
- The browser id, mirrored in the ``sid`` query parameter so a reload of
  the same page finds the same stored token

All dashboard data lives in the orchestrator; nothing else here holds state
of its own.
"""

import logging
import re
import uuid
from typing import Any, Callable, Dict

import streamlit as st

from starry_geo.config.settings import config
from starry_geo.services.orchestrator import DashboardOrchestrator, create_orchestrator

logger = logging.getLogger(__name__)

_ORCHESTRATOR_KEY = "orchestrator"
_BROWSER_ID_KEY = "browser_id"
_BROWSER_ID_PARAM = "sid"
_BROWSER_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class SessionState:
    """Thin typed access to Streamlit session state.

    Example:
        >>> from starry_geo.utils.session_state import SessionState
        >>> SessionState.init_defaults()
        >>> orchestrator = SessionState.get_orchestrator()
    """

    # Default value factories for session state keys
    _DEFAULT_FACTORIES: Dict[str, Callable[[], Any]] = {
        'login_email': lambda: config.DEFAULT_LOGIN_EMAIL,
        'login_password': lambda: config.DEFAULT_LOGIN_PASSWORD,
    }

    @classmethod
    def _get_session_state(cls):
        """Get Streamlit session state (patched in tests)."""
        return st.session_state

    @classmethod
    def _get_query_params(cls):
        """Get Streamlit query params (patched in tests)."""
        return st.query_params

    @classmethod
    def init_defaults(cls) -> None:
        """Initialize default session state values.

        Call this at the start of the Streamlit app to ensure
        all expected keys exist with sensible defaults.
        """
        session_state = cls._get_session_state()

        for key, factory in cls._DEFAULT_FACTORIES.items():
            if key not in session_state:
                session_state[key] = factory()
                logger.debug(f"Initialized session state key: {key}")

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a value from session state."""
        return cls._get_session_state().get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set a value in session state."""
        cls._get_session_state()[key] = value

    @classmethod
    def get_orchestrator(cls) -> DashboardOrchestrator:
        """Get this browser session's orchestrator, creating it on first use."""
        session_state = cls._get_session_state()
        orchestrator = session_state.get(_ORCHESTRATOR_KEY)
        if orchestrator is None:
            orchestrator = create_orchestrator(cls.get_browser_id())
            session_state[_ORCHESTRATOR_KEY] = orchestrator
            logger.info("Created dashboard orchestrator for new browser session")
        return orchestrator

    @classmethod
    def get_browser_id(cls) -> str:
        """Get the id that separates this browser's session from every other.

        Generated once and kept in the page URL, so it persists across page
        refreshes. Anything in the URL that is not a well-formed id is replaced.

        Returns:
            32-character hex id
        """
        browser_id = cls.get(_BROWSER_ID_KEY)
        if browser_id:
            return browser_id

        params = cls._get_query_params()
        browser_id = params.get(_BROWSER_ID_PARAM)
        if not browser_id or not _BROWSER_ID_PATTERN.match(browser_id):
            browser_id = uuid.uuid4().hex
            params[_BROWSER_ID_PARAM] = browser_id
            logger.info(f"Generated new browser ID: {browser_id[:8]}...")

        cls.set(_BROWSER_ID_KEY, browser_id)
        return browser_id
