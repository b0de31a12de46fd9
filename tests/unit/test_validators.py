"""
Unit tests for IP address validation.
"""
import pytest

from starry_geo.utils.validators import (
    EMPTY_IP_MESSAGE,
    INVALID_IP_MESSAGE,
    InputValidator,
    ValidationResult,
    is_valid_ip,
)


class TestIsValidIp:
    """Tests for the is_valid_ip predicate."""

    @pytest.mark.parametrize("value", [
        "192.168.0.1",
        "0.0.0.0",
        "255.255.255.255",
        "8.8.8.8",
    ])
    def test_valid_ipv4(self, value):
        """Test dotted quads within range are accepted."""
        assert is_valid_ip(value) is True

    @pytest.mark.parametrize("value", [
        "256.1.1.1",
        "1.2.3",
        "1.2.3.4.5",
        "01.2.3.4",
        "1.2.3.-4",
        "a.b.c.d",
        "1.2.3.4/24",
    ])
    def test_invalid_ipv4(self, value):
        """Test out-of-range, short, long and leading-zero forms are rejected."""
        assert is_valid_ip(value) is False

    @pytest.mark.parametrize("value", [
        "::1",
        "::",
        "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
        "2001:db8::1",
        "fe80::",
        "::ffff:192.0.2.128",
    ])
    def test_valid_ipv6(self, value):
        """Test full and compressed IPv6 forms are accepted."""
        assert is_valid_ip(value) is True

    @pytest.mark.parametrize("value", [
        "2001:db8::1::1",
        "12345::1",
        "gggg::1",
        "fe80::1%eth0",
        ":::",
    ])
    def test_invalid_ipv6(self, value):
        """Test malformed and scoped IPv6 forms are rejected."""
        assert is_valid_ip(value) is False

    def test_empty_string(self):
        """Test empty string is not an address."""
        assert is_valid_ip("") is False

    def test_surrounding_whitespace_rejected(self):
        """Test the predicate does not trim; trimming is the caller's job."""
        assert is_valid_ip(" 8.8.8.8 ") is False

    @pytest.mark.parametrize("value", [None, 3232235521, b"8.8.8.8", ["8.8.8.8"]])
    def test_non_string_input(self, value):
        """Test non-strings return False instead of raising."""
        assert is_valid_ip(value) is False

    def test_hostname_is_not_resolved(self):
        """Test hostnames are rejected without any DNS lookup."""
        assert is_valid_ip("localhost") is False
        assert is_valid_ip("example.com") is False


class TestInputValidator:
    """Tests for InputValidator.validate_ip."""

    def test_valid_ip_trimmed(self):
        """Test surrounding whitespace is ignored."""
        result = InputValidator.validate_ip("  8.8.8.8\n")

        assert result.is_valid
        assert result.errors == []

    def test_empty_input(self):
        """Test blank input reports an empty error."""
        for value in ("", "   ", None):
            result = InputValidator.validate_ip(value)
            assert not result
            assert result.errors == [EMPTY_IP_MESSAGE]

    def test_invalid_input(self):
        """Test malformed input reports the user-facing message."""
        result = InputValidator.validate_ip("not-an-ip")

        assert result.is_valid is False
        assert result.errors == [INVALID_IP_MESSAGE]


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_add_error_marks_invalid(self):
        result = ValidationResult(is_valid=True)
        result.add_error("bad")

        assert result.is_valid is False
        assert bool(result) is False

    def test_add_warning_keeps_valid(self):
        result = ValidationResult(is_valid=True)
        result.add_warning("hmm")

        assert result.is_valid is True
        assert result.warnings == ["hmm"]
