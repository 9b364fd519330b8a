"""
Default key recovery for SpeedTouch/Thomson routers.

The last six characters of the default network name are the tail of
SHA-1(serial); the default key is the first ten characters of the same
digest. Searching every plausible serial recovers the key.
"""

from stkeys.core.interfaces import MatchRecord, SerialCandidate
from stkeys.search.keyspace_search import KeyspaceSearchEngine, SearchConfig
from stkeys.search.parallel_search import ParallelKeyspaceSearch

__version__ = "0.1"

__all__ = [
    "KeyspaceSearchEngine",
    "MatchRecord",
    "ParallelKeyspaceSearch",
    "SearchConfig",
    "SerialCandidate",
]
