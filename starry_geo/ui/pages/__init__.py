"""Page components for the Starry Geo dashboard."""
from starry_geo.ui.pages.login import render_login_page
from starry_geo.ui.pages.dashboard import render_dashboard_page

__all__ = [
    "render_login_page",
    "render_dashboard_page",
]
