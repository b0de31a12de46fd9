"""Input validation utilities.

Validates the search box of the dashboard. Only syntax is checked: no DNS
lookup and no reachability probe is ever made.

All validators return ValidationResult objects for consistent error handling;
``is_valid_ip`` is the bare predicate underneath.
"""

import ipaddress
import logging
from dataclasses import dataclass, field
from typing import Any, List

logger = logging.getLogger(__name__)

INVALID_IP_MESSAGE = "Please enter a valid IPv4 or IPv6 address."
EMPTY_IP_MESSAGE = "IP address cannot be empty"


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        errors: List of error messages (empty if valid)
        warnings: List of warning messages (non-fatal issues)

    Example:
        >>> result = ValidationResult(is_valid=True)
        >>> if result.is_valid:
        ...     run_search()
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.is_valid

    def add_error(self, error: str) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)


def is_valid_ip(value: Any) -> bool:
    """Return whether ``value`` is a syntactically valid IPv4 or IPv6 address.

    IPv4 must be four dotted decimal octets in 0-255 without leading zeros.
    IPv6 may be full or ``::`` compressed; scoped addresses (``fe80::1%eth0``)
    are rejected. Never raises.

    Example:
        >>> is_valid_ip("192.168.0.1")
        True
        >>> is_valid_ip("256.1.1.1")
        False
        >>> is_valid_ip("::1")
        True
    """
    if not isinstance(value, str) or not value:
        return False

    # ipaddress accepts zone ids on IPv6; a search term never carries one
    if '%' in value:
        return False

    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


class InputValidator:
    """Validates dashboard inputs."""

    @classmethod
    def validate_ip(cls, value: str) -> ValidationResult:
        """Validate a search term as an IP address.

        Performs the following checks:
        1. Non-empty after trimming surrounding whitespace
        2. IPv4 or IPv6 syntax

        Args:
            value: Raw text from the search box

        Returns:
            ValidationResult with is_valid flag and any errors

        Example:
            >>> InputValidator.validate_ip(' 8.8.8.8 ').is_valid
            True
            >>> InputValidator.validate_ip('').errors
            ['IP address cannot be empty']
        """
        result = ValidationResult(is_valid=True)

        if not value or not isinstance(value, str) or not value.strip():
            result.add_error(EMPTY_IP_MESSAGE)
            return result

        if not is_valid_ip(value.strip()):
            result.add_error(INVALID_IP_MESSAGE)
            return result

        return result
