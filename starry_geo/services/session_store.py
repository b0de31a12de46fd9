"""
Session token persistence.

The token is opaque to the dashboard: it is saved after login, read once at
startup and removed on logout or when the backend rejects it. No expiry is
tracked here; an expired token is discovered by the next request failing.

Every browser keeps its own token. The server-side file holds one entry per
browser, keyed by the storage key plus that browser's id, so one visitor's
login or logout never touches another visitor's session.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from starry_geo.config.settings import config

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Read/write contract for the persisted session token."""

    def save(self, token: str) -> None: ...

    def load(self) -> Optional[str]: ...

    def clear(self) -> None: ...


class MemorySessionStore:
    """Keeps the token for the lifetime of the process."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def save(self, token: str) -> None:
        self._token = token

    def load(self) -> Optional[str]:
        return self._token

    def clear(self) -> None:
        self._token = None


class FileSessionStore:
    """Stores the token in a small JSON file so it survives restarts.

    The file is a JSON object; the token lives under one fixed key and any
    other keys are left untouched.

    Example:
        >>> store = FileSessionStore("/tmp/session.json")
        >>> store.save("abc123")
        >>> FileSessionStore("/tmp/session.json").load()
        'abc123'
    """

    def __init__(self, path: Union[str, Path] = None, key: str = None):
        """Initialize the store.

        Args:
            path: JSON file location (default from config)
            key: Storage key for the token (default from config)
        """
        self.path = Path(path or config.SESSION_FILE).expanduser()
        self.key = key or config.SESSION_TOKEN_KEY
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        """Read the whole file; missing or corrupt files read as empty."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed session file {self.path}")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        """Atomically replace the file contents."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def save(self, token: str) -> None:
        with self._lock:
            data = self._read()
            data[self.key] = token
            self._write(data)
        logger.debug(f"Saved session token {token[:8]}... to {self.path}")

    def load(self) -> Optional[str]:
        with self._lock:
            token = self._read().get(self.key)
        return token if isinstance(token, str) and token else None

    def clear(self) -> None:
        with self._lock:
            data = self._read()
            if self.key not in data:
                return
            del data[self.key]
            self._write(data)
        logger.debug(f"Cleared session token from {self.path}")


def browser_session_key(browser_id: str) -> str:
    """Storage key of one browser's token, e.g. ``exam-token:3f2a...``."""
    if not browser_id:
        raise ValueError("browser_id is required")
    return f"{config.SESSION_TOKEN_KEY}:{browser_id}"


def create_session_store(browser_id: str) -> SessionStore:
    """Build the configured session store for one browser.

    Args:
        browser_id: Stable id of the browser the dashboard is rendered in
    """
    if config.uses_memory_session:
        logger.info("SESSION_FILE is empty, keeping the session in memory only")
        return MemorySessionStore()
    return FileSessionStore(key=browser_session_key(browser_id))
