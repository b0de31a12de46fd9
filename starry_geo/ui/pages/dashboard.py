"""Dashboard page for the Starry Geo dashboard.

Search box, geolocation details, map and search history. Every button
delegates to the orchestrator and then reruns the script so the page is
rebuilt from the orchestrator's state.
"""

import logging

import streamlit as st

from starry_geo.config.settings import config
from starry_geo.services.orchestrator import DashboardOrchestrator
from starry_geo.ui.components import render_geo_details, render_history, render_map

logger = logging.getLogger(__name__)


def render_dashboard_page(orchestrator: DashboardOrchestrator) -> None:
    """Render the signed-in dashboard."""
    render_header(orchestrator)

    st.divider()

    render_search_section(orchestrator)

    col1, col2 = st.columns(2)
    with col1:
        with st.container(border=True):
            render_geo_details(orchestrator.state.geo)
    with col2:
        with st.container(border=True):
            render_map(orchestrator.state.geo)

    with st.container(border=True):
        replay = render_history(orchestrator)

    if replay is not None:
        orchestrator.select_history_entry(replay)
        st.rerun()


def render_header(orchestrator: DashboardOrchestrator) -> None:
    """Render title, signed-in account and the logout button."""
    col1, col2 = st.columns([4, 1])

    with col1:
        st.title(f"{config.APP_NAME} Dashboard")
        st.caption(f"Logged in as {orchestrator.state.user.email}")

    with col2:
        if st.button("Logout", key="logout", width='stretch'):
            orchestrator.logout()
            st.rerun()


def render_search_section(orchestrator: DashboardOrchestrator) -> None:
    """Render the IP search form with Search and Clear actions."""
    state = orchestrator.state

    with st.form("search_form"):
        # No key: a new value (replay, clear) recreates the widget with it
        search_ip = st.text_input(
            "IP address",
            value=state.search_ip,
            placeholder="Enter IPv4 or IPv6 address",
            label_visibility="collapsed",
        )
        col1, col2, _ = st.columns([1, 1, 4])
        with col1:
            search = st.form_submit_button(
                "Search", type="primary", disabled=state.is_busy, width='stretch'
            )
        with col2:
            clear = st.form_submit_button(
                "Clear", disabled=state.is_busy, width='stretch'
            )

    if search:
        with st.spinner("Looking up..."):
            orchestrator.search(search_ip)
        st.rerun()
    elif clear:
        with st.spinner("Locating you..."):
            orchestrator.clear_search()
        st.rerun()
