# yorkescraper/models/gazetteer.py
"""Suburb and hundred name reference data used for address normalization."""

from pathlib import Path
from typing import Dict, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field

from yorkescraper.errors import GazetteerError


class Gazetteer(BaseModel):
    """Known suburbs with their canonical "SUBURB, STATE POSTCODE" suffix,
    plus the hundred names that must never be read as suburbs.

    Keys of ``suburbs`` are upper-case, single-space separated suburb names.
    """

    model_config = ConfigDict(frozen=True)

    suburbs: Dict[str, str] = Field(default_factory=dict)
    hundred_names: Tuple[str, ...] = Field(default_factory=tuple)

    @property
    def suburb_names(self) -> Tuple[str, ...]:
        return tuple(self.suburbs.keys())

    def canonical(self, suburb_name: str) -> str:
        return self.suburbs[suburb_name]

    @staticmethod
    def parse_suburb_lines(lines: Iterable[str]) -> Dict[str, str]:
        """Parse ``NAME,STATE POSTCODE`` lines into a suburb mapping.

        Blank lines are ignored; any other line without a comma is rejected
        because an incomplete gazetteer silently degrades every address.
        """
        suburbs: Dict[str, str] = {}
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            if "," not in line:
                raise GazetteerError(
                    f"Malformed suburb line {line_number} (expected NAME,STATE POSTCODE): {line!r}"
                )
            name, state_postcode = line.upper().split(",", 1)
            name = " ".join(name.split())
            state_postcode = " ".join(state_postcode.split())
            if not name or not state_postcode:
                raise GazetteerError(f"Malformed suburb line {line_number}: {line!r}")
            suburbs[name] = f"{name}, {state_postcode}"
        return suburbs

    @staticmethod
    def parse_hundred_lines(lines: Iterable[str]) -> Tuple[str, ...]:
        names = []
        for line in lines:
            name = " ".join(line.upper().split())
            if name:
                names.append(name)
        return tuple(names)

    @classmethod
    def from_lines(cls, suburb_lines: Iterable[str], hundred_lines: Iterable[str]) -> "Gazetteer":
        return cls(
            suburbs=cls.parse_suburb_lines(suburb_lines),
            hundred_names=cls.parse_hundred_lines(hundred_lines),
        )

    @classmethod
    def load(cls, suburb_names_path: Path, hundred_names_path: Path) -> "Gazetteer":
        """Load the gazetteer from the two newline-delimited reference files."""
        suburb_lines = _read_lines(Path(suburb_names_path))
        hundred_lines = _read_lines(Path(hundred_names_path))
        return cls.from_lines(suburb_lines, hundred_lines)


def _read_lines(path: Path) -> list:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise GazetteerError(f"Unable to read reference list {path}: {e}") from e
