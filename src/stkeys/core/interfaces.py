"""
Abstract interfaces and data model for the keyspace search.

The search engine, digest service and logger depend on these contracts
rather than on each other, so tests can swap in fakes for any of them.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional
from dataclasses import dataclass


UNRESOLVED = "??"


@dataclass(frozen=True)
class SerialCandidate:
    """
    One candidate serial number.

    Attributes:
        serial: The string that gets hashed, e.g. "CP1611313131"
        year: Two-digit year component (years since 2000)
        week: Week of the year (1-52)
        unit: Unit number as a plain integer
    """
    serial: str
    year: int
    week: int
    unit: int


@dataclass(frozen=True)
class MatchRecord:
    """
    A candidate whose digest ends with the target fingerprint.

    Attributes:
        password: First 10 hex characters of the digest, uppercased
        year: Two-digit year component
        week: Week of the year
        unit: Unit number (decimal, not the hex form that was hashed)
        digest: Full lowercase hex digest
        serial: The candidate serial that produced the digest
        plant_code: Production plant code; never derivable from the SSID
    """
    password: str
    year: int
    week: int
    unit: int
    digest: str
    serial: str
    plant_code: Optional[str] = None

    @property
    def full_year(self) -> int:
        return 2000 + self.year

    @property
    def serial_label(self) -> str:
        """Vendor layout CP YY WW PP XXX (CC) with unknown fields as ??."""
        plant = self.plant_code or UNRESOLVED
        return f"CP {self.year:02d} {self.week:02d} {plant} {self.unit} ({UNRESOLVED})"


class IDigestService(ABC):
    """Interface for the one-way hash applied to candidate serials."""

    @abstractmethod
    def digest(self, serial: str) -> str:
        """
        Hash a candidate serial.

        Args:
            serial: Candidate serial (ASCII only)

        Returns:
            Lowercase hexadecimal digest

        Raises:
            DigestUnavailableException: If the hash cannot be computed here
        """
        pass


class ISearchStrategy(ABC):
    """
    Interface for keyspace search strategies.

    Sequential and sharded implementations share this contract so the
    command line can drive either one the same way.
    """

    @abstractmethod
    def years(self) -> Iterator[int]:
        """Two-digit years to search, newest first."""
        pass

    @abstractmethod
    def search_year(self, target: str, year: int) -> Iterator[MatchRecord]:
        """Lazily yield matches for a single two-digit year."""
        pass

    def search(
        self,
        target: str,
        on_year: Optional[Callable[[int], None]] = None
    ) -> Iterator[MatchRecord]:
        """
        Lazily yield every match across the whole keyspace.

        Args:
            target: Fingerprint (last 6 characters of the network name)
            on_year: Called with each two-digit year before it is searched

        Returns:
            Iterator of MatchRecord, newest year first
        """
        for year in self.years():
            if on_year is not None:
                on_year(year)
            yield from self.search_year(target, year)

    def close(self) -> None:
        """Release any resources held by the strategy."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False


class ILogger(ABC):
    """Interface for logging functionality."""

    @abstractmethod
    def debug(self, message: str) -> None:
        """Log debug message."""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        """Log info message."""
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        """Log warning message."""
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        """Log error message."""
        pass
