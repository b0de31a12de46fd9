"""Search history list with bulk selection."""

import logging
from typing import Optional

import streamlit as st

from starry_geo.models import HistoryEntry
from starry_geo.services.orchestrator import DashboardOrchestrator

logger = logging.getLogger(__name__)


def format_history_caption(entry: HistoryEntry) -> str:
    """One-line summary shown under an entry's IP, e.g. "2025-01-15 10:30:00 • Mountain View, US"."""
    when = entry.created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S") if entry.created_at else "-"
    city = entry.payload.city or "Unknown"
    country = entry.payload.country or "--"
    return f"{when} • {city}, {country}"


def render_history(orchestrator: DashboardOrchestrator) -> Optional[HistoryEntry]:
    """Render the history list.

    Returns:
        The entry the user asked to replay, if any
    """
    state = orchestrator.state

    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader("Search History")
    with col2:
        if st.button(
            "Delete Selected",
            key="history_delete_selected",
            disabled=not state.selected_ids or state.is_busy,
            width='stretch',
        ):
            with st.spinner("Deleting..."):
                orchestrator.delete_selected()
            st.rerun()

    if not state.history:
        st.caption("No search history yet.")
        return None

    clicked = None
    with st.container(height=320):
        for entry in state.history:
            checked = entry.id in state.selected_ids
            col_check, col_entry = st.columns([1, 12])
            with col_check:
                # Key carries the checked value so the widget follows the orchestrator
                st.checkbox(
                    "Select",
                    value=checked,
                    key=f"history_select_{entry.id}_{checked}",
                    label_visibility="collapsed",
                    on_change=orchestrator.toggle_selection,
                    args=(entry.id,),
                )
            with col_entry:
                if st.button(entry.ip, key=f"history_open_{entry.id}", type="tertiary"):
                    clicked = entry
                st.caption(format_history_caption(entry))

    return clicked
