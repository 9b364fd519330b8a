"""
Keyspace search engine.

Implements ISearchStrategy by exhaustively hashing every candidate serial
and comparing the digest tail with the target fingerprint.
"""

import time
from typing import Callable, Iterator, Optional
from dataclasses import dataclass

from stkeys.core.interfaces import (
    ISearchStrategy, IDigestService, ILogger, SerialCandidate, MatchRecord
)
from stkeys.core.exceptions import (
    ConfigurationError, DigestUnavailableException, InvalidTargetException
)
from stkeys.services.candidate_service import CandidateGenerator
from stkeys.services.digest_service import Sha1DigestService
from stkeys.utils.stats import SearchStats
from stkeys.utils.logger import Logger


FINGERPRINT_LENGTH = 6
PASSWORD_LENGTH = 10


@dataclass(frozen=True)
class SearchConfig:
    """
    Bounds of the keyspace.

    max_year is the newest calendar year searched. It is passed in rather
    than read from the clock so a search is a pure function of its inputs.

    last_unit defaults to 1000, one past the three digit range, so unit
    "1000" is hashed as well. Set it to 999 to stay inside the serial format.
    """
    max_year: int
    min_year: int = 2000
    prefix: str = "CP"
    first_week: int = 1
    last_week: int = 52
    first_unit: int = 0
    last_unit: int = 1000

    def __post_init__(self):
        if not 2000 <= self.min_year <= self.max_year <= 2099:
            raise ConfigurationError(
                f"Year range must satisfy 2000 <= min_year <= max_year <= 2099, "
                f"got {self.min_year}..{self.max_year}"
            )
        if not 1 <= self.first_week <= self.last_week <= 52:
            raise ConfigurationError(
                f"Week range must lie within 1..52, got {self.first_week}..{self.last_week}"
            )
        if not 0 <= self.first_unit <= self.last_unit <= 1000:
            raise ConfigurationError(
                f"Unit range must lie within 0..1000, got {self.first_unit}..{self.last_unit}"
            )


def match_candidate(
    candidate: SerialCandidate,
    digest: str,
    target: str
) -> Optional[MatchRecord]:
    """
    Compare the digest tail with the target, ignoring case.

    Returns:
        MatchRecord carrying the password candidate, or None
    """
    if digest[-FINGERPRINT_LENGTH:].upper() != target.upper():
        return None

    return MatchRecord(
        password=digest[:PASSWORD_LENGTH].upper(),
        year=candidate.year,
        week=candidate.week,
        unit=candidate.unit,
        digest=digest,
        serial=candidate.serial
    )


def check_target(target: str) -> str:
    """Reject an empty fingerprint; anything else is searched as given."""
    if not target:
        raise InvalidTargetException(target, "fingerprint must not be empty")
    return target


class KeyspaceSearchEngine(ISearchStrategy):
    """
    Sequential brute-force search over every plausible serial number.

    Algorithm:
    1. For each year, newest first
    2. For each week 1..52
    3. For each unit number, build the serial, hash it, compare the last
       6 hex characters with the target

    Matches are yielded as soon as they are found; the caller may stop
    consuming at any point.

    Example:
        >>> engine = KeyspaceSearchEngine(SearchConfig(max_year=2017))
        >>> for record in engine.search("ea6601"):
        ...     print(record.password, record.serial_label)
        73E2EC5D26 CP 16 11 ?? 111 (??)
    """

    def __init__(
        self,
        config: SearchConfig,
        digest_service: Optional[IDigestService] = None,
        logger: Optional[ILogger] = None
    ):
        """
        Initialize search engine.

        Args:
            config: Keyspace bounds
            digest_service: Hash used on each candidate (SHA-1 by default)
            logger: Logger instance
        """
        self.config = config
        self.generator = CandidateGenerator(config)
        self.digest_service = digest_service or Sha1DigestService()
        self.logger = logger or Logger(name="stkeys.search", console=False)
        self.stats = SearchStats()

    @property
    def keyspace_size(self) -> int:
        return len(self.generator)

    def years(self) -> Iterator[int]:
        return self.generator.years()

    def search(
        self,
        target: str,
        on_year: Optional[Callable[[int], None]] = None
    ) -> Iterator[MatchRecord]:
        """
        Search the whole keyspace for a fingerprint.

        The target is checked and statistics are reset as soon as this is
        called, before any candidate is hashed.

        Args:
            target: Fingerprint (last 6 characters of the network name)
            on_year: Called with each two-digit year before it is searched

        Returns:
            Iterator of MatchRecord in descending year, ascending week and
            ascending unit order

        Raises:
            InvalidTargetException: If target is empty
        """
        check_target(target)
        self.stats = SearchStats()
        self.logger.info(
            f"Searching {self.keyspace_size} candidates for fingerprint '{target}'"
        )
        return super().search(target, on_year)

    def search_year(self, target: str, year: int) -> Iterator[MatchRecord]:
        """
        Search one two-digit year.

        A candidate whose digest cannot be computed is logged, counted as
        skipped and treated as a non-match.
        """
        check_target(target)
        self.logger.debug(f"Searching year 20{year:02d}")

        examined = 0
        started = time.perf_counter()
        try:
            for candidate in self.generator.iter_year(year):
                examined += 1
                try:
                    digest = self.digest_service.digest(candidate.serial)
                except DigestUnavailableException as e:
                    self.stats.digests_skipped += 1
                    self.logger.warning(f"Skipping {candidate.serial}: {e}")
                    continue

                record = match_candidate(candidate, digest, target)
                if record is not None:
                    self.stats.matches_found += 1
                    self.logger.debug(f"Match {record.password} from {record.serial}")
                    yield record
        finally:
            self.stats.candidates_examined += examined
            self.stats.record_year(year, examined, time.perf_counter() - started)
