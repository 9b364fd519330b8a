"""
Sharded keyspace search across worker processes.

Each (year, week) pair is an independent shard. Results are gathered with
Executor.map, which returns them in submission order, so the output order
is identical to the sequential engine.
"""

import time
from typing import Callable, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field
from concurrent.futures import ProcessPoolExecutor

from stkeys.core.interfaces import ISearchStrategy, ILogger, MatchRecord
from stkeys.core.exceptions import DigestUnavailableException
from stkeys.services.candidate_service import CandidateGenerator
from stkeys.services.digest_service import Sha1DigestService
from stkeys.search.keyspace_search import SearchConfig, match_candidate, check_target
from stkeys.utils.stats import SearchStats
from stkeys.utils.logger import Logger


@dataclass(frozen=True)
class ShardTask:
    """One (year, week) slice of the keyspace."""
    config: SearchConfig
    target: str
    year: int
    week: int


@dataclass
class ShardResult:
    """Outcome of scanning one shard."""
    year: int
    week: int
    examined: int = 0
    matches: List[MatchRecord] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)


def scan_shard(task: ShardTask) -> ShardResult:
    """
    Hash every unit number of one week. Runs inside a worker process.

    Skipped serials are returned with the failure reason so the parent
    process can log them.
    """
    generator = CandidateGenerator(task.config)
    digest_service = Sha1DigestService()
    result = ShardResult(year=task.year, week=task.week)

    for candidate in generator.iter_week(task.year, task.week):
        result.examined += 1
        try:
            digest = digest_service.digest(candidate.serial)
        except DigestUnavailableException as e:
            result.skipped.append((candidate.serial, str(e)))
            continue

        record = match_candidate(candidate, digest, task.target)
        if record is not None:
            result.matches.append(record)

    return result


class ParallelKeyspaceSearch(ISearchStrategy):
    """
    Multi-process variant of KeyspaceSearchEngine.

    The worker pool is created on first use and shut down by close().
    Closing cancels shards that have not started yet, which is how early
    termination reaches the workers.

    Example:
        >>> with ParallelKeyspaceSearch(SearchConfig(max_year=2017), max_workers=4) as search:
        ...     records = list(search.search("ea6601"))
    """

    def __init__(
        self,
        config: SearchConfig,
        max_workers: Optional[int] = None,
        logger: Optional[ILogger] = None,
        chunksize: int = 4
    ):
        """
        Args:
            config: Keyspace bounds
            max_workers: Worker processes (None lets the executor decide)
            logger: Logger instance
            chunksize: Shards handed to a worker at a time
        """
        self.config = config
        self.generator = CandidateGenerator(config)
        self.max_workers = max_workers
        self.chunksize = chunksize
        self.logger = logger or Logger(name="stkeys.parallel", console=False)
        self.stats = SearchStats()
        self._executor: Optional[ProcessPoolExecutor] = None

    @property
    def keyspace_size(self) -> int:
        return len(self.generator)

    def years(self) -> Iterator[int]:
        return self.generator.years()

    def _get_executor(self) -> ProcessPoolExecutor:
        if self._executor is None:
            self._executor = ProcessPoolExecutor(max_workers=self.max_workers)
            self.logger.debug(f"Started worker pool (max_workers={self.max_workers})")
        return self._executor

    def search(
        self,
        target: str,
        on_year: Optional[Callable[[int], None]] = None
    ) -> Iterator[MatchRecord]:
        check_target(target)
        self.stats = SearchStats()
        self.logger.info(
            f"Searching {self.keyspace_size} candidates for fingerprint '{target}' [PARALLEL]"
        )
        return super().search(target, on_year)

    def search_year(self, target: str, year: int) -> Iterator[MatchRecord]:
        check_target(target)
        tasks = [
            ShardTask(config=self.config, target=target, year=year, week=week)
            for week in self.generator.weeks()
        ]
        self.logger.debug(f"Searching year 20{year:02d} in {len(tasks)} shards")

        started = time.perf_counter()
        examined = 0
        try:
            for result in self._get_executor().map(scan_shard, tasks, chunksize=self.chunksize):
                examined += result.examined
                for serial, reason in result.skipped:
                    self.stats.digests_skipped += 1
                    self.logger.warning(f"Skipping {serial}: {reason}")
                for record in result.matches:
                    self.stats.matches_found += 1
                    yield record
        finally:
            self.stats.candidates_examined += examined
            self.stats.record_year(year, examined, time.perf_counter() - started)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None
