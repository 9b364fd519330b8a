"""
Run statistics for the keyspace search.

Counters are plain integers updated by the search loop; the summary
helpers turn the per-year timings into throughput figures.
"""

from typing import Dict, Tuple
from dataclasses import dataclass, field
import numpy as np


@dataclass
class SearchStats:
    """
    Counters collected during one search run.

    Attributes:
        candidates_examined: Candidate serials generated (hashed or skipped)
        digests_skipped: Candidates whose digest could not be computed
        matches_found: Match records produced
        year_candidates: Two-digit year -> candidates examined in that year
        year_durations: Two-digit year -> wall-clock seconds spent on it
    """
    candidates_examined: int = 0
    digests_skipped: int = 0
    matches_found: int = 0
    year_candidates: Dict[int, int] = field(default_factory=dict)
    year_durations: Dict[int, float] = field(default_factory=dict)

    def record_year(self, year: int, candidates: int, duration: float) -> None:
        self.year_candidates[year] = self.year_candidates.get(year, 0) + candidates
        self.year_durations[year] = self.year_durations.get(year, 0.0) + duration

    @property
    def elapsed(self) -> float:
        return sum(self.year_durations.values())


def expected_keyspace_size(years: int, weeks: int, units: int) -> int:
    """
    Number of candidates in a keyspace.

    Example:
        >>> expected_keyspace_size(27, 52, 1001)
        1405404
    """
    if years <= 0 or weeks <= 0 or units <= 0:
        return 0
    return years * weeks * units


def throughput(stats: SearchStats) -> float:
    """Overall candidates per second, 0.0 if nothing was timed."""
    elapsed = stats.elapsed
    if elapsed <= 0:
        return 0.0
    return stats.candidates_examined / elapsed


def summarize_year_rates(stats: SearchStats) -> Tuple[float, float]:
    """
    Mean and standard deviation of the per-year hashing rate.

    Years with no recorded duration are ignored.

    Returns:
        Tuple of (mean_rate, std_dev) in candidates per second
    """
    rates = [
        stats.year_candidates.get(year, 0) / duration
        for year, duration in stats.year_durations.items()
        if duration > 0
    ]
    if not rates:
        return 0.0, 0.0

    values = np.asarray(rates, dtype=float)
    return float(np.mean(values)), float(np.std(values))
