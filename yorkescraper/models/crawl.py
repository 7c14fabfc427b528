# yorkescraper/models/crawl.py
"""Date windows and crawl bookkeeping."""

from dataclasses import dataclass, field
from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, model_validator


class CrawlWindow(BaseModel):
    """An inclusive date range searched on the register."""

    model_config = ConfigDict(frozen=True)

    date_from: date
    date_to: date

    @model_validator(mode="after")
    def check_order(self):
        if self.date_from > self.date_to:
            raise ValueError(f"date_from {self.date_from} is after date_to {self.date_to}")
        return self

    @property
    def label(self) -> str:
        return f"{self.date_from.isoformat()} to {self.date_to.isoformat()}"


@dataclass
class WindowResult:
    """Counters for one crawled window."""
    window: CrawlWindow
    pages: int = 0
    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0
    reached_page_limit: bool = False

    @property
    def saved(self) -> int:
        return self.inserted + self.updated + self.unchanged


@dataclass
class RunResult:
    windows: List[WindowResult] = field(default_factory=list)

    @property
    def pages(self) -> int:
        return sum(w.pages for w in self.windows)

    @property
    def inserted(self) -> int:
        return sum(w.inserted for w in self.windows)

    @property
    def updated(self) -> int:
        return sum(w.updated for w in self.windows)

    @property
    def unchanged(self) -> int:
        return sum(w.unchanged for w in self.windows)

    @property
    def skipped(self) -> int:
        return sum(w.skipped for w in self.windows)
