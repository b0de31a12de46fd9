"""Records exchanged with the geolocation backend."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Best-effort parsing of backend timestamps (ISO-8601, trailing Z allowed)."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparsable timestamp: {value!r}")
        return None


@dataclass(frozen=True)
class User:
    """Authenticated account as reported by the backend."""
    email: str
    id: Optional[Hashable] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        if not isinstance(data, dict) or not data.get("email"):
            raise ValueError("user payload has no email")
        return cls(email=data["email"], id=data.get("id"), name=data.get("name"))


@dataclass(frozen=True)
class GeoRecord:
    """Location attributes resolved for one IP address."""
    ip: str
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    loc: Optional[str] = None       # "lat,lng"
    org: Optional[str] = None
    postal: Optional[str] = None
    timezone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], fallback_ip: str = None) -> "GeoRecord":
        """Build a record from a backend payload.

        Args:
            data: Payload dictionary; unknown keys are ignored
            fallback_ip: IP to use when the payload does not carry one

        Raises:
            ValueError: If no IP is available
        """
        if not isinstance(data, dict):
            raise ValueError("geolocation payload is not an object")
        ip = data.get("ip") or fallback_ip
        if not ip:
            raise ValueError("geolocation payload has no ip")
        return cls(
            ip=ip,
            city=data.get("city"),
            region=data.get("region"),
            country=data.get("country"),
            loc=data.get("loc"),
            org=data.get("org"),
            postal=data.get("postal"),
            timezone=data.get("timezone"),
        )

    def coordinates(self) -> Optional[Tuple[float, float]]:
        """Parse ``loc`` into (lat, lng), or None when it cannot be pinned."""
        if not self.loc:
            return None

        lat, _, lng = self.loc.partition(",")
        if not lat.strip() or not lng.strip():
            return None
        try:
            return float(lat), float(lng)
        except ValueError:
            return None


@dataclass(frozen=True)
class HistoryEntry:
    """A past lookup stored by the backend."""
    id: Hashable
    ip: str
    payload: GeoRecord
    created_at: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        if not isinstance(data, dict):
            raise ValueError("history entry is not an object")
        if data.get("id") is None or not data.get("ip"):
            raise ValueError("history entry needs id and ip")
        return cls(
            id=data["id"],
            ip=data["ip"],
            payload=GeoRecord.from_dict(data.get("payload") or {}, fallback_ip=data["ip"]),
            created_at=_parse_timestamp(data.get("created_at")),
        )
