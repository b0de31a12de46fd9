"""Reusable UI components for the Starry Geo dashboard."""
from starry_geo.ui.components.toast import render_toast
from starry_geo.ui.components.geo_panel import (
    build_map_embed_url,
    render_geo_details,
    render_map,
)
from starry_geo.ui.components.history_list import (
    format_history_caption,
    render_history,
)

__all__ = [
    # Toast
    "render_toast",
    # Geolocation
    "build_map_embed_url",
    "render_geo_details",
    "render_map",
    # History
    "format_history_caption",
    "render_history",
]
