"""
Unit tests for the pure helpers behind the Streamlit pages.
"""
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest

from starry_geo.models import GeoRecord, HistoryEntry
from starry_geo.ui.components.geo_panel import build_map_embed_url
from starry_geo.ui.components.history_list import format_history_caption
from starry_geo.utils.session_state import SessionState


class TestMapEmbedUrl:
    """Tests for build_map_embed_url."""

    def test_bbox_and_marker(self):
        url = build_map_embed_url(37.386, -122.0838, span=0.1)

        assert url == (
            "https://www.openstreetmap.org/export/embed.html"
            "?bbox=-122.1838%2C37.286%2C-121.9838%2C37.486"
            "&layer=mapnik&marker=37.386%2C-122.0838"
        )

    def test_default_span_from_config(self):
        url = build_map_embed_url(0.0, 0.0)

        assert "bbox=-0.15%2C-0.15%2C0.15%2C0.15" in url


class TestHistoryCaption:
    """Tests for format_history_caption."""

    def test_full_entry(self):
        entry = HistoryEntry(
            id=1,
            ip="8.8.8.8",
            payload=GeoRecord(ip="8.8.8.8", city="Mountain View", country="US"),
            created_at=datetime(2025, 1, 15, 10, 30),
        )

        assert format_history_caption(entry) == "2025-01-15 10:30:00 • Mountain View, US"

    def test_missing_fields(self):
        entry = HistoryEntry(id=1, ip="8.8.8.8", payload=GeoRecord(ip="8.8.8.8"))

        assert format_history_caption(entry) == "- • Unknown, --"


class TestSessionState:
    """Tests for SessionState with a plain dict standing in for st.session_state."""

    @pytest.fixture
    def session(self):
        session = {}
        with patch.object(SessionState, "_get_session_state", return_value=session):
            yield session

    @pytest.fixture
    def query_params(self):
        params = {}
        with patch.object(SessionState, "_get_query_params", return_value=params):
            yield params

    def test_init_defaults(self, session):
        SessionState.init_defaults()

        assert session["login_email"] == "exam.user@example.com"
        assert session["login_password"] == "Password123!"

    def test_init_defaults_keeps_existing(self, session):
        session["login_email"] = "someone@example.com"

        SessionState.init_defaults()

        assert session["login_email"] == "someone@example.com"

    def test_get_and_set(self, session):
        SessionState.set("search_ip", "8.8.8.8")

        assert SessionState.get("search_ip") == "8.8.8.8"
        assert SessionState.get("missing", "fallback") == "fallback"

    def test_orchestrator_created_once(self, session, query_params):
        """Test one orchestrator lives for the whole browser session."""
        orchestrator = MagicMock()
        with patch("starry_geo.utils.session_state.create_orchestrator", return_value=orchestrator) as factory:
            first = SessionState.get_orchestrator()
            second = SessionState.get_orchestrator()

        assert first is orchestrator
        assert second is orchestrator
        factory.assert_called_once_with(query_params["sid"])


class TestBrowserId:
    """Tests for SessionState.get_browser_id."""

    @pytest.fixture
    def session(self):
        session = {}
        with patch.object(SessionState, "_get_session_state", return_value=session):
            yield session

    @pytest.fixture
    def query_params(self):
        params = {}
        with patch.object(SessionState, "_get_query_params", return_value=params):
            yield params

    def test_generated_and_kept_in_url(self, session, query_params):
        browser_id = SessionState.get_browser_id()

        assert len(browser_id) == 32
        assert query_params["sid"] == browser_id
        assert SessionState.get_browser_id() == browser_id

    def test_reload_reuses_url_id(self, session, query_params):
        """Test a page reload keeps the id the URL already carries."""
        query_params["sid"] = "0123456789abcdef0123456789abcdef"

        assert SessionState.get_browser_id() == "0123456789abcdef0123456789abcdef"

    @pytest.mark.parametrize("sid", ["", "short", "../../etc/passwd", "0123456789ABCDEF0123456789ABCDEF"])
    def test_malformed_url_id_replaced(self, session, query_params, sid):
        query_params["sid"] = sid

        browser_id = SessionState.get_browser_id()

        assert browser_id != sid
        assert query_params["sid"] == browser_id

    def test_each_browser_gets_its_own_id(self, query_params):
        with patch.object(SessionState, "_get_session_state", return_value={}):
            first = SessionState.get_browser_id()
        query_params.clear()
        with patch.object(SessionState, "_get_session_state", return_value={}):
            second = SessionState.get_browser_id()

        assert first != second
