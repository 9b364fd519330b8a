"""
Unit tests for the SHA-1 digest service.

Run with: pytest tests/test_digest_service.py -v
"""

import pytest
from unittest.mock import patch
from stkeys.services.digest_service import Sha1DigestService
from stkeys.core.exceptions import DigestUnavailableException


class TestSha1DigestService:
    """Test digests against reference SHA-1 values."""

    @pytest.fixture
    def service(self):
        return Sha1DigestService()

    @pytest.mark.parametrize("serial, expected", [
        ("CP1611313131", "73e2ec5d26624f32d47ebe26ad4ab083e5ea6601"),
        ("CP1707313131", "a475d879dfd12d3aa209315ff5d7fb239800cf7f"),
        ("CP0001303030", "0e12e9f167f459f32c52bd037d20b884e00d652e"),
        ("CP0552393939", "33ecfbe90faf650f2d50fb2339eb28d4b07c68a4"),
    ])
    def test_known_vectors(self, service, serial, expected):
        """Digest is 40 lowercase hex characters matching reference SHA-1."""
        assert service.digest(serial) == expected

    def test_digest_is_deterministic(self, service):
        """Same serial, same digest."""
        assert service.digest("CP1611313131") == service.digest("CP1611313131")

    def test_unknown_algorithm(self):
        """An algorithm hashlib lacks raises DigestUnavailableException."""
        service = Sha1DigestService(algorithm="no-such-digest")

        with pytest.raises(DigestUnavailableException) as exc_info:
            service.digest("CP1611313131")

        assert exc_info.value.algorithm == "no-such-digest"

    def test_hashlib_failure_is_wrapped(self, service):
        """A ValueError from hashlib surfaces as DigestUnavailableException."""
        with patch("stkeys.services.digest_service.hashlib.new",
                   side_effect=ValueError("unsupported hash type sha1")):
            with pytest.raises(DigestUnavailableException) as exc_info:
                service.digest("CP1611313131")

        assert "unsupported hash type" in exc_info.value.reason


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
