"""Starry Geo Dashboard.

Streamlit dashboard for IP geolocation lookups with:
- Frozen dataclass configuration
- Backend API client with bearer-token authentication
- Persisted session token
- Session/search orchestration state machine
- Page-based rendering
"""

__version__ = "1.0.0"
