"""
Session and search orchestration for the dashboard.

DashboardOrchestrator owns the whole application state and is the only thing
that mutates it. The UI reads ``orchestrator.state`` on every render and
calls the named operations in response to user actions.

State machine:
    BOOTING ──bootstrap()──> AUTHENTICATED | UNAUTHENTICATED
    UNAUTHENTICATED ──login()──> AUTHENTICATED
    AUTHENTICATED ──logout()──> UNAUTHENTICATED

Ordering:
- Calls that depend on each other run one after the other
  (geolocation then history in search, delete then reload)
- The geolocation and history loads that follow sign-in are independent
  and run side by side on a small thread pool

Stale responses:
- Every session reset bumps an epoch; results from an older epoch are dropped
- Every geolocation fetch takes a ticket; only the newest ticket may apply
"""

import logging
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, List, Optional, Tuple

from starry_geo.config.settings import config
from starry_geo.models import GeoRecord, HistoryEntry, User
from starry_geo.services.api_client import GeoAPIClient, get_api_client
from starry_geo.services.session_store import SessionStore, create_session_store
from starry_geo.utils.best_effort import best_effort
from starry_geo.utils.exceptions import InvalidIPAddressError, RequestError
from starry_geo.utils.notifications import Notification, NotificationKind, NotificationQueue
from starry_geo.utils.validators import InputValidator

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED_MESSAGE = "Email and password are required."
LOGIN_FAILED_MESSAGE = "Login failed."
SEARCH_FAILED_MESSAGE = "Search failed."
CLEAR_FAILED_MESSAGE = "Unable to clear search."
DELETE_FAILED_MESSAGE = "Unable to delete history."
DELETE_SUCCESS_MESSAGE = "Selected history deleted."


class SessionPhase(str, Enum):
    BOOTING = "booting"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


@dataclass
class DashboardState:
    """Everything the dashboard renders from.

    ``token`` and ``user`` are set and cleared together.
    """
    phase: SessionPhase = SessionPhase.BOOTING
    token: Optional[str] = None
    user: Optional[User] = None
    geo: Optional[GeoRecord] = None
    history: List[HistoryEntry] = field(default_factory=list)
    selected_ids: List[Hashable] = field(default_factory=list)
    search_ip: str = ""
    is_busy: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None


class DashboardOrchestrator:
    """Drives sign-in, lookups and history management.

    Each operation returns True when it ran to completion, and False when it
    was skipped by a guard or ended with a failure shown to the user.
    Request failures never escape an operation.

    Example:
        >>> orchestrator = DashboardOrchestrator(GeoAPIClient(), MemorySessionStore())
        >>> orchestrator.bootstrap()
        False
        >>> orchestrator.login("exam.user@example.com", "Password123!")
        True
        >>> orchestrator.search("8.8.8.8")
        True
    """

    def __init__(
        self,
        api_client: GeoAPIClient,
        session_store: SessionStore,
        notifications: NotificationQueue = None,
        executor: Executor = None,
    ):
        """Initialize the orchestrator.

        Args:
            api_client: Backend client
            session_store: Where the token is persisted
            notifications: Toast slot (a fresh queue by default)
            executor: Runs the parallel post-login loads (a private pool by default)
        """
        self._api = api_client
        self._store = session_store
        self._notifications = notifications if notifications is not None else NotificationQueue()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=config.LOAD_WORKERS,
            thread_name_prefix="geo_loader",
        )
        self._state = DashboardState()
        self._epoch = 0
        self._geo_ticket = 0

    # Read access
    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def notification(self) -> Optional[Notification]:
        return self._notifications.current

    @property
    def notifications(self) -> NotificationQueue:
        return self._notifications

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def map_location(self) -> Optional[Tuple[float, float]]:
        """Coordinates of the displayed record, when it can be pinned."""
        geo = self._state.geo
        return geo.coordinates() if geo is not None else None

    # Session lifecycle
    def bootstrap(self) -> bool:
        """Resume a stored session, once, at startup.

        A rejected or unusable token is discarded silently: the user simply
        lands on the login page.
        """
        if self._state.phase is not SessionPhase.BOOTING:
            return self.is_authenticated

        token = self._store.load()
        if not token:
            logger.info("No stored session, showing login")
            self._state.phase = SessionPhase.UNAUTHENTICATED
            return False

        try:
            user = self._api.me(token)
            self._state.token = token
            self._state.user = user
            self._state.phase = SessionPhase.AUTHENTICATED
            self._load_geo_and_history(token)
        except RequestError as e:
            logger.warning(f"Stored session could not be resumed: {e.message}")
            self._forget_token()
            self._reset(SessionPhase.UNAUTHENTICATED)
            return False

        logger.info(f"Resumed session for {user.email}")
        return True

    def login(self, email: str, password: str) -> bool:
        """Sign in and load the first lookup plus the history."""
        if self._state.is_busy:
            logger.debug("Login ignored while another action is in flight")
            return False
        if self.is_authenticated:
            return False

        email = (email or "").strip()
        if not email or not password:
            self._notifications.show(CREDENTIALS_REQUIRED_MESSAGE)
            return False

        self._notifications.clear()
        epoch = self._epoch
        with self._busy():
            try:
                session = self._api.login(email, password)
                self._remember_token(session.token)
                self._state.token = session.token
                self._state.user = session.user
                self._state.search_ip = ""
                self._state.phase = SessionPhase.AUTHENTICATED
                logger.info(f"Signed in as {session.user.email}")

                self._load_geo_and_history(session.token)
            except RequestError as e:
                self._fail(epoch, e, LOGIN_FAILED_MESSAGE)
                return False
        return True

    def logout(self) -> bool:
        """Sign out. Always succeeds locally."""
        token = self._state.token
        if not token:
            return False

        # Outcome ignored: the local session ends whatever the backend says
        best_effort(self._api.logout, token)

        try:
            self._forget_token()
        finally:
            self._reset(SessionPhase.UNAUTHENTICATED)
        logger.info("Signed out")
        return True

    # Lookups
    def search(self, ip: Optional[str] = None) -> bool:
        """Geolocate the search input, then refresh the history.

        Args:
            ip: New search input; the current one is used when omitted
        """
        if not self.is_authenticated or self._state.is_busy:
            return False

        if ip is not None:
            self._state.search_ip = ip

        try:
            target = self._parse_search_input(self._state.search_ip)
        except InvalidIPAddressError as e:
            self._notifications.show(e.message)
            return False

        token, epoch = self._state.token, self._epoch
        self._notifications.clear()
        with self._busy():
            try:
                self._load_geo(token, target)
                self._load_history(token)
            except RequestError as e:
                self._fail(epoch, e, SEARCH_FAILED_MESSAGE)
                return False
        return True

    def clear_search(self) -> bool:
        """Reset the search input and show the caller's own location."""
        if not self.is_authenticated or self._state.is_busy:
            return False

        token, epoch = self._state.token, self._epoch
        self._state.search_ip = ""
        self._notifications.clear()
        with self._busy():
            try:
                self._load_geo(token)
            except RequestError as e:
                self._fail(epoch, e, CLEAR_FAILED_MESSAGE)
                return False
        return True

    # History
    def select_history_entry(self, entry: HistoryEntry) -> None:
        """Replay a past lookup from its cached payload (no network call)."""
        # Any geolocation still in flight is older than this replay
        self._next_geo_ticket()
        self._state.geo = entry.payload
        self._state.search_ip = entry.ip
        self._notifications.clear()

    def toggle_selection(self, entry_id: Hashable) -> bool:
        """Check or uncheck a history entry. Returns whether it is now checked."""
        selected = self._state.selected_ids
        if entry_id in selected:
            selected.remove(entry_id)
            return False
        selected.append(entry_id)
        return True

    def delete_selected(self) -> bool:
        """Delete every checked history entry.

        The selection is only cleared once the backend accepted the delete, so
        a failed attempt can be retried with the same selection.
        """
        if not self.is_authenticated or not self._state.selected_ids or self._state.is_busy:
            return False

        token, epoch = self._state.token, self._epoch
        ids = list(self._state.selected_ids)
        self._notifications.clear()
        with self._busy():
            try:
                self._api.delete_history(token, ids)
            except RequestError as e:
                self._fail(epoch, e, DELETE_FAILED_MESSAGE)
                return False

            if self._is_stale(epoch):
                return False
            self._state.selected_ids = []
            logger.info(f"Deleted {len(ids)} history entries")

            try:
                self._load_history(token)
            except RequestError as e:
                self._fail(epoch, e, DELETE_FAILED_MESSAGE)
                return False

            self._notifications.show(DELETE_SUCCESS_MESSAGE, NotificationKind.SUCCESS)
        return True

    def close(self) -> None:
        """Cancel pending timers and release the loader pool."""
        self._notifications.close()
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    # Internals
    @staticmethod
    def _parse_search_input(raw: str) -> str:
        value = (raw or "").strip()
        result = InputValidator.validate_ip(value)
        if not result:
            raise InvalidIPAddressError(value, result.errors[0])
        return value

    def _remember_token(self, token: str) -> None:
        """Persist the token, logging rather than raising on a storage failure."""
        try:
            self._store.save(token)
        except OSError as e:
            logger.error(f"Could not persist session token, it will not survive a restart: {e}")

    def _forget_token(self) -> None:
        """Remove the persisted token, logging rather than raising on a storage failure."""
        try:
            self._store.clear()
        except OSError as e:
            logger.error(f"Could not remove persisted session token: {e}")

    @contextmanager
    def _busy(self):
        self._state.is_busy = True
        try:
            yield
        finally:
            self._state.is_busy = False

    def _reset(self, phase: SessionPhase) -> None:
        """Drop every piece of session state and invalidate in-flight results."""
        self._epoch += 1
        self._state = DashboardState(phase=phase)
        self._notifications.clear()

    def _is_stale(self, epoch: int) -> bool:
        return epoch != self._epoch

    def _fail(self, epoch: int, error: RequestError, fallback: str) -> None:
        if self._is_stale(epoch):
            logger.debug(f"Not reporting failure from an ended session: {error.message}")
            return
        self._notifications.show(error.message or fallback)

    def _next_geo_ticket(self) -> int:
        self._geo_ticket += 1
        return self._geo_ticket

    def _apply_geo(self, geo: GeoRecord, epoch: int, ticket: int) -> None:
        if self._is_stale(epoch) or ticket != self._geo_ticket:
            logger.debug(f"Dropping stale geolocation for {geo.ip}")
            return
        self._state.geo = geo

    def _apply_history(self, history: List[HistoryEntry], epoch: int) -> None:
        if self._is_stale(epoch):
            logger.debug("Dropping stale history")
            return
        self._state.history = history

    def _load_geo(self, token: str, ip: Optional[str] = None) -> None:
        epoch, ticket = self._epoch, self._next_geo_ticket()
        self._apply_geo(self._api.fetch_geo(token, ip), epoch, ticket)

    def _load_history(self, token: str) -> None:
        epoch = self._epoch
        self._apply_history(self._api.fetch_history(token), epoch)

    def _load_geo_and_history(self, token: str) -> None:
        """Load both panels in parallel.

        Whatever succeeded is applied; the first failure is then re-raised.
        """
        epoch, ticket = self._epoch, self._next_geo_ticket()
        geo_future = self._executor.submit(self._api.fetch_geo, token)
        history_future = self._executor.submit(self._api.fetch_history, token)
        wait((geo_future, history_future))

        if geo_future.exception() is None:
            self._apply_geo(geo_future.result(), epoch, ticket)
        if history_future.exception() is None:
            self._apply_history(history_future.result(), epoch)

        for future in (geo_future, history_future):
            error = future.exception()
            if error is not None:
                raise error


def create_orchestrator(browser_id: str) -> DashboardOrchestrator:
    """Build an orchestrator wired to the configured backend and to the
    session store of one browser."""
    return DashboardOrchestrator(
        api_client=get_api_client(),
        session_store=create_session_store(browser_id),
        notifications=NotificationQueue(),
    )
