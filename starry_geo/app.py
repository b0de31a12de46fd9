"""Starry Geo Dashboard Application.

Streamlit app that renders from a per-session DashboardOrchestrator.
"""

import logging
from pathlib import Path

# Load environment variables from .env file BEFORE any other imports
# so the frozen config picks them up
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

import streamlit as st

from starry_geo.config.settings import config
from starry_geo.services.orchestrator import SessionPhase
from starry_geo.utils.session_state import SessionState
from starry_geo.ui.components import render_toast
from starry_geo.ui.pages import render_login_page, render_dashboard_page

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Main application entry point."""
    # Page configuration - must be first Streamlit command
    st.set_page_config(
        page_title=config.APP_NAME,
        page_icon=config.APP_ICON,
        layout="wide",
    )

    SessionState.init_defaults()
    orchestrator = SessionState.get_orchestrator()

    # Single best-effort resume of a stored session
    if orchestrator.state.phase is SessionPhase.BOOTING:
        with st.spinner("Checking session..."):
            orchestrator.bootstrap()

    render_toast(orchestrator)

    if orchestrator.is_authenticated:
        render_dashboard_page(orchestrator)
    else:
        render_login_page(orchestrator)


if __name__ == "__main__":
    main()
