"""Utilities for the Starry Geo dashboard."""
from starry_geo.utils.exceptions import (
    GeoDashboardError,
    ValidationError,
    InvalidIPAddressError,
    RequestError,
    BackendUnavailableError,
    ResponseFormatError,
)
from starry_geo.utils.validators import (
    ValidationResult,
    InputValidator,
    is_valid_ip,
)
from starry_geo.utils.notifications import (
    Notification,
    NotificationKind,
    NotificationQueue,
)
from starry_geo.utils.best_effort import Attempt, best_effort

__all__ = [
    # Exceptions
    "GeoDashboardError",
    "ValidationError",
    "InvalidIPAddressError",
    "RequestError",
    "BackendUnavailableError",
    "ResponseFormatError",
    # Validators
    "ValidationResult",
    "InputValidator",
    "is_valid_ip",
    # Notifications
    "Notification",
    "NotificationKind",
    "NotificationQueue",
    # Best-effort calls
    "Attempt",
    "best_effort",
]
