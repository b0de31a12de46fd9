"""
Backend API Client for the Starry Geo dashboard.

Provides typed access to the geolocation backend with bearer-token
authentication and uniform error extraction.

Every request bypasses caches and is sent exactly once: a failed attempt is
reported to the user, who may retry by hand.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional

import requests

from starry_geo.config.settings import config
from starry_geo.models import GeoRecord, HistoryEntry, User
from starry_geo.utils.exceptions import (
    BackendUnavailableError,
    RequestError,
    ResponseFormatError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Request failed."

_NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache",
    "Pragma": "no-cache",
}


@dataclass(frozen=True)
class LoginResponse:
    """Token and account returned by a successful login."""
    token: str
    user: User


def extract_error_message(body: Any) -> str:
    """Pick the most useful human-readable message from an error body.

    Preference order: top-level ``message``, then the first validation error
    for the ``ip`` field, then a generic fallback.

    Example:
        >>> extract_error_message({"errors": {"ip": ["The ip must be valid."]}})
        'The ip must be valid.'
    """
    if not isinstance(body, dict):
        return GENERIC_ERROR_MESSAGE

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    errors = body.get("errors")
    if isinstance(errors, dict):
        ip_errors = errors.get("ip")
        if isinstance(ip_errors, list) and ip_errors and ip_errors[0]:
            return str(ip_errors[0])

    return GENERIC_ERROR_MESSAGE


class GeoAPIClient:
    """Client for the geolocation backend API."""

    def __init__(
        self,
        base_url: str = None,
        timeout: int = None,
        session=None,
    ):
        """Initialize API client.

        Args:
            base_url: Backend API URL (default from config)
            timeout: Request timeout in seconds
            session: Object with a requests-style ``request(method, url, **kwargs)``
        """
        self.base_url = (base_url or config.API_BASE_URL).rstrip('/')
        self.timeout = timeout or config.API_TIMEOUT_SECONDS
        self.session = session if session is not None else requests.Session()

    def _get_headers(self, token: Optional[str]) -> Dict[str, str]:
        """Get request headers, with the bearer token when one is held."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            **_NO_CACHE_HEADERS,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _parse_body(response) -> Dict[str, Any]:
        """Decode a JSON object body; anything else counts as empty."""
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make one HTTP request and return the parsed JSON body.

        Args:
            endpoint: Path below the API base URL, e.g. ``/history``
            method: HTTP method
            body: JSON payload
            token: Bearer token to authenticate with
            params: Query string parameters

        Returns:
            Parsed body (empty dict when the body is not a JSON object)

        Raises:
            RequestError: Backend answered with a non-success status
            BackendUnavailableError: No response could be obtained
        """
        url = f"{self.base_url}{endpoint}"
        kwargs: Dict[str, Any] = {
            "headers": self._get_headers(token),
            "timeout": self.timeout,
        }
        if body is not None:
            kwargs["json"] = body
        if params:
            kwargs["params"] = params

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise BackendUnavailableError() from e

        parsed = self._parse_body(response)

        if not 200 <= response.status_code < 300:
            message = extract_error_message(parsed)
            logger.warning(f"{method} {endpoint} returned HTTP {response.status_code}: {message}")
            raise RequestError(message, status_code=response.status_code)

        return parsed

    # Authentication
    def login(self, email: str, password: str) -> LoginResponse:
        """Exchange credentials for a session token."""
        data = self.request("/login", "POST", body={"email": email, "password": password})

        token = data.get("token")
        if not token or not isinstance(token, str):
            logger.error("Login response carried no token")
            raise ResponseFormatError()
        return LoginResponse(token=token, user=self._parse_user(data))

    def logout(self, token: str) -> None:
        """Invalidate the session token on the backend."""
        self.request("/logout", "POST", token=token)

    def me(self, token: str) -> User:
        """Validate a token and fetch the account it belongs to."""
        return self._parse_user(self.request("/me", token=token))

    # Geolocation
    def fetch_geo(self, token: str, ip: Optional[str] = None) -> GeoRecord:
        """Geolocate ``ip``, or the caller's own address when ip is None."""
        data = self.request("/geo", token=token, params={"ip": ip} if ip else None)
        try:
            return GeoRecord.from_dict(data.get("data"))
        except ValueError as e:
            logger.error(f"Invalid geolocation response: {e}")
            raise ResponseFormatError() from e

    # History
    def fetch_history(self, token: str) -> List[HistoryEntry]:
        """List past lookups in server order."""
        data = self.request("/history", token=token)

        items = data.get("history")
        if not isinstance(items, list):
            logger.error("History response carried no list")
            raise ResponseFormatError()
        try:
            return [HistoryEntry.from_dict(item) for item in items]
        except ValueError as e:
            logger.error(f"Invalid history entry: {e}")
            raise ResponseFormatError() from e

    def delete_history(self, token: str, ids: Iterable[Hashable]) -> None:
        """Delete the given history entries in one call."""
        self.request("/history", "DELETE", body={"ids": list(ids)}, token=token)

    @staticmethod
    def _parse_user(data: Dict[str, Any]) -> User:
        try:
            return User.from_dict(data.get("user"))
        except ValueError as e:
            logger.error(f"Invalid user in response: {e}")
            raise ResponseFormatError() from e

    def close(self) -> None:
        """Release the underlying HTTP session."""
        close = getattr(self.session, "close", None)
        if close is not None:
            close()


# Singleton pattern with thread-safe initialization
_api_client: Optional[GeoAPIClient] = None
_api_client_lock = threading.Lock()


def get_api_client() -> GeoAPIClient:
    """Get singleton API client instance (thread-safe)."""
    global _api_client
    if _api_client is None:
        with _api_client_lock:
            if _api_client is None:
                _api_client = GeoAPIClient()
    return _api_client
