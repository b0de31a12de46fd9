"""Toast component.

Renders the orchestrator's current notification. The fragment re-runs on a
short interval so an expired notification disappears without a full rerun.
"""

import streamlit as st

from starry_geo.config.settings import config
from starry_geo.services.orchestrator import DashboardOrchestrator


@st.fragment(run_every=config.TOAST_REFRESH_SECONDS)
def render_toast(orchestrator: DashboardOrchestrator) -> None:
    """Render the live notification, if any."""
    notification = orchestrator.notification
    if notification is None:
        return

    if notification.is_error:
        st.error(notification.message)
    else:
        st.success(notification.message)
