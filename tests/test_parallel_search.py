"""
Tests for the multi-process keyspace search.

Run with: pytest tests/test_parallel_search.py -v
"""

import pytest
from stkeys.search.keyspace_search import KeyspaceSearchEngine, SearchConfig
from stkeys.search.parallel_search import ParallelKeyspaceSearch, ShardTask, scan_shard
from stkeys.utils.logger import Logger


@pytest.fixture
def logger():
    return Logger(console=False)


class TestScanShard:
    """Test a single (year, week) shard in-process."""

    def test_shard_finds_match(self):
        """Week 11 of 2016 contains the documented key."""
        task = ShardTask(config=SearchConfig(max_year=2016), target="ea6601", year=16, week=11)

        result = scan_shard(task)

        assert result.examined == 1001
        assert [r.password for r in result.matches] == ["73E2EC5D26"]
        assert result.skipped == []

    def test_shard_without_match(self):
        """A shard with no matching tail returns no records."""
        task = ShardTask(config=SearchConfig(max_year=2016), target="ea6601", year=16, week=12)

        result = scan_shard(task)

        assert result.matches == []
        assert (result.year, result.week) == (16, 12)


class TestParallelKeyspaceSearch:
    """Test the worker pool strategy against the sequential engine."""

    def test_same_output_as_sequential(self, logger):
        """Sharding keeps the global order of the sequential engine."""
        config = SearchConfig(max_year=2001)
        sequential = list(KeyspaceSearchEngine(config, logger=logger).search("005057"))

        with ParallelKeyspaceSearch(config, max_workers=2, logger=logger) as search:
            parallel = list(search.search("005057"))

        assert parallel == sequential
        assert [r.password for r in parallel] == ["B60162937D", "3075D392CC"]

    def test_totality(self, logger):
        """Every candidate is examined exactly once across shards."""
        with ParallelKeyspaceSearch(SearchConfig(max_year=2001), max_workers=2, logger=logger) as search:
            records = list(search.search("ZZZZZZ"))
            stats = search.stats

        assert records == []
        assert stats.candidates_examined == 2 * 52 * 1001
        assert search.keyspace_size == 2 * 52 * 1001

    def test_early_termination(self, logger):
        """Closing after the first match shuts the pool down cleanly."""
        search = ParallelKeyspaceSearch(SearchConfig(max_year=2001), max_workers=2, logger=logger)
        matches = search.search("005057")

        first = next(matches)
        matches.close()
        search.close()

        assert first.password == "B60162937D"
        assert search._executor is None

    def test_on_year_callback(self, logger):
        """on_year fires once per year, newest first."""
        seen = []
        with ParallelKeyspaceSearch(SearchConfig(max_year=2001), max_workers=2, logger=logger) as search:
            list(search.search("ZZZZZZ", on_year=seen.append))

        assert seen == [1, 0]

    def test_close_without_use(self, logger):
        """Closing a strategy that never started a pool is a no-op."""
        search = ParallelKeyspaceSearch(SearchConfig(max_year=2001), logger=logger)
        search.close()
        search.close()

        assert search._executor is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
