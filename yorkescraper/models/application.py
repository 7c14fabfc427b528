# yorkescraper/models/application.py
"""Development application record and the intermediate records the scraper
passes between stages."""

from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ListingItem(BaseModel):
    """One row of the register's search results."""

    model_config = ConfigDict(frozen=True)

    detail_url: str = Field(..., description="Link to the application's detail page")
    raw_address: str = Field("", description="Address snippet shown in the results row")


class ListingPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: List[ListingItem] = Field(default_factory=list)
    has_next_page: bool = False


class ApplicationDetail(BaseModel):
    """Fields read from an application's detail page."""

    model_config = ConfigDict(frozen=True)

    application_number: str = ""
    received_date: Optional[date] = None
    description: str = ""


class DevelopmentApplication(BaseModel):
    """A development application as stored in the database."""

    model_config = ConfigDict(frozen=True)

    application_number: str = Field(..., description="Council reference, the primary key")
    address: str = Field(..., description="Normalized address where possible")
    description: str = Field("", description="Development details")
    information_url: str = Field(..., description="Stable link to the application")
    comment_url: str = Field(..., description="Contact endpoint for comments")
    scrape_date: date = Field(default_factory=date.today)
    received_date: Optional[date] = None

    # Reserved for on notice tracking; never populated by the scraper.
    on_notice_from: Optional[date] = None
    on_notice_to: Optional[date] = None

    def validate(self) -> List[str]:
        """Returns list of validation error messages. Empty list = valid."""
        errors = []
        if not self.application_number or not self.application_number.strip():
            errors.append("Application must have an application number")
        if not self.address or not self.address.strip():
            errors.append("Application must have an address")
        return errors

    def to_row(self) -> Tuple[Optional[str], ...]:
        """Column values in table order, dates as YYYY-MM-DD text."""
        return (
            self.application_number,
            self.address,
            self.description,
            self.information_url,
            self.comment_url,
            self.scrape_date.isoformat(),
            self.received_date.isoformat() if self.received_date else "",
            self.on_notice_from.isoformat() if self.on_notice_from else None,
            self.on_notice_to.isoformat() if self.on_notice_to else None,
        )
