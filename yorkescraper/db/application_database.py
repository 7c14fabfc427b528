import logging
import sqlite3
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from yorkescraper.models.application import DevelopmentApplication

CREATE_TABLE_SQL = (
    "create table if not exists [data] ("
    "[council_reference] text primary key, "
    "[address] text, "
    "[description] text, "
    "[info_url] text, "
    "[comment_url] text, "
    "[date_scraped] text, "
    "[date_received] text, "
    "[on_notice_from] text, "
    "[on_notice_to] text)"
)

INSERT_SQL = "insert or ignore into [data] values (?, ?, ?, ?, ?, ?, ?, ?, ?)"

COLUMNS = (
    "council_reference",
    "address",
    "description",
    "info_url",
    "comment_url",
    "date_scraped",
    "date_received",
    "on_notice_from",
    "on_notice_to",
)


class ReconcileOutcome(str, Enum):
    INSERTED = "inserted"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class ApplicationDatabase:
    """
    SQLite store of development applications keyed by council reference.

    Applications are inserted once; the first-seen address, description and
    received date are kept. The only field ever rewritten is the information
    URL, and only while it still points at a legacy URL form.
    """

    def __init__(
        self,
        path: Union[str, Path] = "data.sqlite",
        legacy_info_url_patterns: Optional[Sequence[str]] = None,
    ):
        self.path = str(path)
        self.legacy_info_url_patterns: List[str] = list(legacy_info_url_patterns or [])
        self.logger = logging.getLogger("ApplicationDatabase")
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = sqlite3.connect(self.path)
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> "ApplicationDatabase":
        """Create the data table if it does not already exist."""
        with self.connection:
            self.connection.execute(CREATE_TABLE_SQL)
        self.logger.debug(f"Database ready: {self.path}")
        return self

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> "ApplicationDatabase":
        return self.initialize()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def insert_if_absent(self, application: DevelopmentApplication) -> bool:
        """Insert the application unless its council reference already exists.

        Returns True when a row was written.
        """
        with self.connection:
            cursor = self.connection.execute(INSERT_SQL, application.to_row())
        return cursor.rowcount > 0

    def update_legacy_info_url(self, application: DevelopmentApplication) -> bool:
        """Point a stored row at the current information URL if it still holds a legacy one."""
        if not self.legacy_info_url_patterns:
            return False
        conditions = " or ".join("[info_url] like ?" for _ in self.legacy_info_url_patterns)
        sql = (
            "update [data] set [info_url] = ? "
            f"where [council_reference] = ? and ({conditions})"
        )
        params = [application.information_url, application.application_number]
        params.extend(self.legacy_info_url_patterns)
        with self.connection:
            cursor = self.connection.execute(sql, params)
        return cursor.rowcount > 0

    def reconcile(self, application: DevelopmentApplication) -> ReconcileOutcome:
        """
        Insert-once, patch-forward persistence of a scraped application.

        Args:
            application: Application built from the latest visit

        Returns:
            INSERTED for a new row, UPDATED when a legacy information URL was
            replaced, UNCHANGED otherwise
        """
        if self.insert_if_absent(application):
            self.logger.info(
                f'    Saved: application "{application.application_number}" with address '
                f'"{application.address}", description "{application.description}" and received date '
                f'"{application.received_date.isoformat() if application.received_date else ""}" into the database.'
            )
            return ReconcileOutcome.INSERTED

        if self.update_legacy_info_url(application):
            self.logger.info(
                f'    Updated: information URL of application "{application.application_number}" '
                f'to "{application.information_url}".'
            )
            return ReconcileOutcome.UPDATED

        self.logger.info(
            f'    Skipped: application "{application.application_number}" is already present in the database.'
        )
        return ReconcileOutcome.UNCHANGED

    def get(self, application_number: str) -> Optional[Dict[str, Any]]:
        row = self.connection.execute(
            "select * from [data] where [council_reference] = ?",
            (application_number,),
        ).fetchone()
        return dict(row) if row else None

    def count(self) -> int:
        return self.connection.execute("select count(*) from [data]").fetchone()[0]
