"""
Candidate serial generation.

Serial layout hashed by the vendor: CP YY WW XXX, where the three unit
number digits are written as the hex codes of their ASCII characters.
The production plant and configuration codes are not part of the hash.
"""

from typing import Iterator

from stkeys.core.interfaces import SerialCandidate


def hex_encode(text: str) -> str:
    """
    Concatenate the hex code point of every character.

    Each run is lowercase with no padding, so its width is the natural
    hex width of the code point (2 for ASCII digits).

    Example:
        >>> hex_encode("007")
        '303037'
    """
    return "".join(format(ord(char), "x") for char in text)


def encode_unit_number(unit: int) -> str:
    """
    Hex-encode a zero-padded three digit unit number.

    Unit 1000 pads to four digits and yields an eight character run.
    """
    return hex_encode(f"{unit:03d}")


def build_serial(prefix: str, year: int, week: int, unit: int) -> str:
    """
    Build the string that gets hashed.

    Example:
        >>> build_serial("CP", 16, 11, 111)
        'CP1611313131'
    """
    return f"{prefix}{year:02d}{week:02d}{encode_unit_number(unit)}"


class CandidateGenerator:
    """
    Enumerates candidate serials in search order.

    Years run newest first, weeks and unit numbers ascending. Every
    (year, week, unit) triple in the configured bounds is produced once.

    Example:
        >>> generator = CandidateGenerator(SearchConfig(max_year=2016))
        >>> next(iter(generator)).serial
        'CP1601303030'
    """

    def __init__(self, config):
        """
        Args:
            config: SearchConfig with the keyspace bounds
        """
        self.config = config

    def years(self) -> Iterator[int]:
        """Two-digit years from the newest down to the oldest."""
        newest = self.config.max_year - 2000
        oldest = self.config.min_year - 2000
        return iter(range(newest, oldest - 1, -1))

    def weeks(self) -> Iterator[int]:
        return iter(range(self.config.first_week, self.config.last_week + 1))

    def units(self) -> Iterator[int]:
        return iter(range(self.config.first_unit, self.config.last_unit + 1))

    def iter_week(self, year: int, week: int) -> Iterator[SerialCandidate]:
        prefix = self.config.prefix
        for unit in self.units():
            yield SerialCandidate(
                serial=build_serial(prefix, year, week, unit),
                year=year,
                week=week,
                unit=unit
            )

    def iter_year(self, year: int) -> Iterator[SerialCandidate]:
        for week in self.weeks():
            yield from self.iter_week(year, week)

    def __iter__(self) -> Iterator[SerialCandidate]:
        for year in self.years():
            yield from self.iter_year(year)

    def year_size(self) -> int:
        """Candidates produced for a single year."""
        weeks = self.config.last_week - self.config.first_week + 1
        units = self.config.last_unit - self.config.first_unit + 1
        return weeks * units

    def __len__(self) -> int:
        years = self.config.max_year - self.config.min_year + 1
        return years * self.year_size()
