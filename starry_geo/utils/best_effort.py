"""Run a call whose failure the caller has decided not to act on."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from starry_geo.utils.exceptions import GeoDashboardError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attempt:
    """Outcome of a best-effort call."""
    ok: bool
    value: Any = None
    error: Optional[GeoDashboardError] = None


def best_effort(func: Callable[..., Any], *args, **kwargs) -> Attempt:
    """Call ``func`` and capture an application failure instead of raising it.

    Only GeoDashboardError is captured; programming errors still propagate.

    Example:
        >>> attempt = best_effort(api_client.logout, token)
        >>> attempt.ok
        False
    """
    try:
        return Attempt(ok=True, value=func(*args, **kwargs))
    except GeoDashboardError as e:
        logger.warning(f"Ignoring failure of {getattr(func, '__name__', func)!s}: {e.message}")
        return Attempt(ok=False, error=e)
