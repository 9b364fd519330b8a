"""
Tests for run statistics and the logger.

Run with: pytest tests/test_stats.py -v
"""

import pytest
from stkeys.utils.stats import (
    SearchStats, expected_keyspace_size, throughput, summarize_year_rates
)
from stkeys.utils.logger import Logger


class TestStatisticalFunctions:
    """Test suite for statistics helpers."""

    def test_expected_keyspace_size(self):
        """Years x weeks x units."""
        assert expected_keyspace_size(27, 52, 1001) == 1405404
        assert expected_keyspace_size(0, 52, 1001) == 0

    def test_record_year_accumulates(self):
        stats = SearchStats()
        stats.record_year(5, 100, 0.5)
        stats.record_year(5, 50, 0.25)

        assert stats.year_candidates[5] == 150
        assert stats.year_durations[5] == pytest.approx(0.75)
        assert stats.elapsed == pytest.approx(0.75)

    def test_throughput(self):
        stats = SearchStats(candidates_examined=300)
        stats.record_year(1, 100, 1.0)
        stats.record_year(0, 200, 2.0)

        assert throughput(stats) == pytest.approx(100.0)

    def test_throughput_without_timing(self):
        assert throughput(SearchStats()) == 0.0

    def test_summarize_year_rates(self):
        """Mean and population standard deviation of per-year rates."""
        stats = SearchStats()
        stats.record_year(1, 100, 1.0)
        stats.record_year(0, 300, 1.0)

        mean, std = summarize_year_rates(stats)

        assert mean == pytest.approx(200.0)
        assert std == pytest.approx(100.0)

    def test_summarize_empty(self):
        assert summarize_year_rates(SearchStats()) == (0.0, 0.0)


class TestLogger:
    """Test logger construction."""

    def test_file_output(self, tmp_path):
        """Messages reach the log file."""
        log_file = tmp_path / "logs" / "search.log"
        logger = Logger(name="stkeys-test-file", level="DEBUG", log_file=str(log_file), console=False)

        logger.warning("digest unavailable")
        for handler in logger.logger.handlers:
            handler.flush()

        assert "WARNING - digest unavailable" in log_file.read_text()

    def test_level_filtering(self, tmp_path):
        log_file = tmp_path / "search.log"
        logger = Logger(name="stkeys-test-level", level="WARNING", log_file=str(log_file), console=False)

        logger.info("hidden")
        logger.error("shown")
        for handler in logger.logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "hidden" not in content
        assert "shown" in content

    def test_silent_logger(self):
        """console=False and no file still accepts messages."""
        logger = Logger(name="stkeys-test-silent", console=False)

        logger.info("nothing to see")

        assert len(logger.logger.handlers) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
