"""Login page for the Starry Geo dashboard."""

import logging

import streamlit as st

from starry_geo.config.settings import config
from starry_geo.services.orchestrator import DashboardOrchestrator
from starry_geo.utils.session_state import SessionState

logger = logging.getLogger(__name__)


def render_login_page(orchestrator: DashboardOrchestrator) -> None:
    """Render the sign-in form."""
    st.title(f"{config.APP_NAME} Login")
    st.caption("Sign in to view your IP geolocation and run IP-based lookups.")

    busy = orchestrator.state.is_busy

    with st.form("login_form"):
        email = st.text_input("Email", value=SessionState.get('login_email', ''))
        password = st.text_input(
            "Password",
            value=SessionState.get('login_password', ''),
            type="password",
        )
        submitted = st.form_submit_button(
            "Signing in..." if busy else "Login",
            type="primary",
            disabled=busy,
            width='stretch',
        )

    if submitted:
        SessionState.set('login_email', email)
        SessionState.set('login_password', password)
        with st.spinner("Signing in..."):
            orchestrator.login(email, password)
        st.rerun()

    st.caption(
        f"Seeder credentials: **{config.DEFAULT_LOGIN_EMAIL} / {config.DEFAULT_LOGIN_PASSWORD}**"
    )
