"""
Digest computation for candidate serials.

Implements IDigestService on top of hashlib.
"""

import hashlib

from stkeys.core.interfaces import IDigestService
from stkeys.core.exceptions import DigestUnavailableException


class Sha1DigestService(IDigestService):
    """
    SHA-1 over the ASCII bytes of the serial.

    Example:
        >>> Sha1DigestService().digest("CP1611313131")
        '73e2ec5d26624f32d47ebe26ad4ab083e5ea6601'
    """

    def __init__(self, algorithm: str = "sha1"):
        self.algorithm = algorithm

    def digest(self, serial: str) -> str:
        """
        Hash a candidate serial.

        Args:
            serial: Candidate serial (ASCII only)

        Returns:
            Lowercase hex digest

        Raises:
            DigestUnavailableException: If hashlib does not provide the algorithm
        """
        try:
            hasher = hashlib.new(self.algorithm)
        except ValueError as e:
            raise DigestUnavailableException(self.algorithm, str(e))

        hasher.update(serial.encode("ascii"))
        return hasher.hexdigest()
