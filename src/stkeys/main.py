"""
Command-line entry point.

Usage: stkeys <SSID or last 6 characters of the SSID>

Prints a status line per year and one line per possible default key.
"""

import os
import re
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import yaml
from dotenv import load_dotenv

from stkeys.core.exceptions import ConfigurationError, InvalidTargetException
from stkeys.core.interfaces import ISearchStrategy, MatchRecord
from stkeys.search.keyspace_search import KeyspaceSearchEngine, SearchConfig
from stkeys.search.parallel_search import ParallelKeyspaceSearch
from stkeys.utils.logger import Logger
from stkeys.utils.stats import throughput, summarize_year_rates


DEFAULT_CONFIG_PATH = "config/config.yaml"

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_USAGE = 2
EXIT_UNEXPECTED = 3

DEFAULT_CONFIG = {
    'search': {
        'prefix': 'CP',
        'min_year': 2000,
        'max_year': None,
        'first_week': 1,
        'last_week': 52,
        'first_unit': 0,
        'last_unit': 1000,
    },
    'ssid': {
        'strip_prefixes': ['SpeedTouch', 'Thomson'],
    },
    'performance': {
        'parallel': False,
        'max_workers': None,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
        'console': True,
    },
}

FINGERPRINT_PATTERN = re.compile(r'^[0-9A-Fa-f]{6}$')

USAGE = (
    "Usage: stkeys <fingerprint>\n"
    "  fingerprint: the last 6 characters of the network name, e.g. F8A3D0\n"
    "               (a full name such as SpeedTouchF8A3D0 is accepted too)"
)


def load_config(config_path: Optional[str] = None) -> dict:
    """
    Load YAML configuration on top of the built-in defaults.

    A missing default file is not an error; a missing file that was
    asked for explicitly is.
    """
    explicit = config_path is not None
    path = Path(config_path or DEFAULT_CONFIG_PATH)

    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}

    if not path.exists():
        if explicit:
            raise ConfigurationError(f"Config file not found: {path}")
        return config

    try:
        with open(path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML config: {str(e)}")

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")

    for section, values in loaded.items():
        if section not in config:
            raise ConfigurationError(f"Unknown config section: {section}")
        if not isinstance(values, dict):
            raise ConfigurationError(f"Config section '{section}' must be a mapping")
        config[section].update(values)

    return config


def build_search_config(config: dict, current_year: Optional[int] = None) -> SearchConfig:
    """
    Turn the 'search' section into a SearchConfig.

    The upper year comes from STKEYS_MAX_YEAR, then the config file, then
    current_year (the wall clock when not given).
    """
    section = config['search']
    max_year = os.environ.get('STKEYS_MAX_YEAR') or section.get('max_year')
    if max_year is None:
        max_year = current_year or datetime.now().year

    try:
        return SearchConfig(
            max_year=int(max_year),
            min_year=int(section['min_year']),
            prefix=str(section['prefix']),
            first_week=int(section['first_week']),
            last_week=int(section['last_week']),
            first_unit=int(section['first_unit']),
            last_unit=int(section['last_unit'])
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid search settings: {str(e)}")


def extract_fingerprint(argument: str, strip_prefixes: List[str]) -> str:
    """
    Reduce a full network name to its fingerprint.

    Example:
        >>> extract_fingerprint("SpeedTouchF8A3D0", ["SpeedTouch"])
        'F8A3D0'
    """
    value = argument.strip()
    for prefix in strip_prefixes:
        if prefix and value.lower().startswith(prefix.lower()) and len(value) > len(prefix):
            return value[len(prefix):]
    return value


def create_strategy(config: dict, search_config: SearchConfig, logger: Logger) -> ISearchStrategy:
    performance = config['performance']
    if performance.get('parallel'):
        return ParallelKeyspaceSearch(
            search_config,
            max_workers=performance.get('max_workers'),
            logger=logger
        )
    return KeyspaceSearchEngine(search_config, logger=logger)


def format_match(record: MatchRecord) -> str:
    return f"Possible key '{record.password}' for serial number {record.serial_label}"


def run_search(target: str, strategy: ISearchStrategy, logger: Logger) -> List[MatchRecord]:
    """
    Drive a search strategy and print its progress and results.

    Returns:
        All match records, in the order they were found
    """
    def announce_year(year: int) -> None:
        print(f"Starting the year 20{year:02d}")

    # search() checks the target and resets statistics straight away
    matches = strategy.search(target, on_year=announce_year)

    years = list(strategy.years())
    print(
        f"Searching the years 20{years[-1]:02d} to 20{years[0]:02d} "
        f"(newest first) for fingerprint {target.upper()}"
    )

    records: List[MatchRecord] = []
    start_time = time.time()
    for record in matches:
        print(format_match(record))
        records.append(record)

    elapsed_time = time.time() - start_time
    stats = strategy.stats
    mean_rate, std_rate = summarize_year_rates(stats)
    logger.info(
        f"Examined {stats.candidates_examined} candidates in {elapsed_time:.2f}s "
        f"({throughput(stats):.0f}/s, per year {mean_rate:.0f} +/- {std_rate:.0f}/s), "
        f"{stats.matches_found} match(es), {stats.digests_skipped} skipped"
    )

    print(f"Done: {len(records)} possible key(s) found")
    return records


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = sys.argv[1:] if argv is None else argv

    if len(args) < 1:
        print(USAGE)
        return EXIT_USAGE
    if len(args) > 1:
        print("Provide exactly one network name at a time", file=sys.stderr)
        return EXIT_USAGE

    try:
        config = load_config(os.environ.get('STKEYS_CONFIG'))
        logger = Logger(
            name="stkeys",
            level=os.environ.get('LOG_LEVEL', config['logging']['level']),
            log_file=config['logging'].get('file'),
            console=config['logging']['console']
        )

        target = extract_fingerprint(args[0], config['ssid'].get('strip_prefixes') or [])
        if target and not FINGERPRINT_PATTERN.match(target):
            logger.warning(
                f"Fingerprint '{target}' is not 6 hex characters; no key will match"
            )

        search_config = build_search_config(config)
        with create_strategy(config, search_config, logger) as strategy:
            run_search(target, strategy, logger)

        return EXIT_OK

    except InvalidTargetException as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return EXIT_USAGE
    except ConfigurationError as e:
        print(f"Configuration error: {str(e)}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except KeyboardInterrupt:
        print("\n\nSearch interrupted.\n")
        return EXIT_OK
    except Exception as e:
        print(f"Unexpected error: {str(e)}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
