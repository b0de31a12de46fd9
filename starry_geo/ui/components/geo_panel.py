"""Geolocation details and map panels."""

import logging
from typing import Optional
from urllib.parse import urlencode

import streamlit as st
import streamlit.components.v1 as components

from starry_geo.config.settings import config
from starry_geo.models import GeoRecord

logger = logging.getLogger(__name__)

OSM_EMBED_URL = "https://www.openstreetmap.org/export/embed.html"

# (label, GeoRecord attribute)
GEO_FIELDS = (
    ("IP", "ip"),
    ("City", "city"),
    ("Region", "region"),
    ("Country", "country"),
    ("Coordinates", "loc"),
    ("Org", "org"),
    ("Postal", "postal"),
    ("Timezone", "timezone"),
)


def build_map_embed_url(lat: float, lng: float, span: float = None) -> str:
    """Build an OpenStreetMap embed URL centred on (lat, lng) with a marker.

    Args:
        lat: Latitude of the marker
        lng: Longitude of the marker
        span: Half-width of the bounding box in degrees (default from config)

    Returns:
        URL suitable for an iframe

    Example:
        >>> build_map_embed_url(37.386, -122.0838, span=0.1)
        'https://www.openstreetmap.org/export/embed.html?bbox=-122.1838%2C37.286%2C-121.9838%2C37.486&layer=mapnik&marker=37.386%2C-122.0838'
    """
    span = config.MAP_SPAN_DEGREES if span is None else span
    bbox = (
        round(lng - span, 6),
        round(lat - span, 6),
        round(lng + span, 6),
        round(lat + span, 6),
    )
    query = urlencode({
        "bbox": ",".join(str(v) for v in bbox),
        "layer": "mapnik",
        "marker": f"{lat},{lng}",
    })
    return f"{OSM_EMBED_URL}?{query}"


def render_geo_details(geo: Optional[GeoRecord]) -> None:
    """Render every geolocation field, '-' where the backend gave none."""
    st.subheader("Geolocation")

    if geo is None:
        st.caption("No data loaded yet.")
        return

    for label, attr in GEO_FIELDS:
        col1, col2 = st.columns([1, 2])
        col1.markdown(f"**{label}**")
        col2.text(getattr(geo, attr) or "-")


def render_map(geo: Optional[GeoRecord]) -> None:
    """Render the map pinned on the record's coordinates."""
    st.subheader("Map")

    coordinates = geo.coordinates() if geo is not None else None
    if coordinates is None:
        st.caption("Search an IP with valid coordinates to pin a location.")
        return

    lat, lng = coordinates
    components.iframe(build_map_embed_url(lat, lng), height=config.MAP_HEIGHT)
