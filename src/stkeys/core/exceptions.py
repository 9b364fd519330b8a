"""
Custom exceptions for the keyspace search.

Each failure mode gets its own exception so callers can decide which
conditions are fatal to a run and which only affect a single candidate.
"""


class KeyspaceSearchException(Exception):
    """Base exception for all keyspace search errors."""
    pass


class ConfigurationError(KeyspaceSearchException):
    """Raised when configuration or search bounds are invalid or missing."""
    pass


class DigestUnavailableException(KeyspaceSearchException):
    """Raised when the hashing primitive cannot be obtained on this host."""

    def __init__(self, algorithm: str, reason: str):
        self.algorithm = algorithm
        self.reason = reason
        super().__init__(f"Digest '{algorithm}' unavailable: {reason}")


class InvalidTargetException(KeyspaceSearchException):
    """Raised when the target fingerprint cannot be searched for."""

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Invalid target {target!r}: {reason}")
