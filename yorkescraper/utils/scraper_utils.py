"""
Shared helpers for the register scraper.

Pure functions for building register URLs, parsing register dates and
working out the one-month search windows.
"""

import calendar
import random
import re
from datetime import date, datetime
from typing import Optional
from urllib.parse import quote

from .constants import (
    INFORMATION_URL_TEMPLATE,
    LISTING_URL_TEMPLATE,
    REGISTER_DATE_FORMAT,
)

# The day may drop its leading zero, the month may not.
_REGISTER_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{2}/\d{4}$")


def format_register_date(value: date) -> str:
    """Format a date the way the register's search form expects, URL-encoded."""
    return quote(value.strftime("%d/%m/%Y"), safe="")


def build_listing_url(page_number: int, date_from: date, date_to: date) -> str:
    return LISTING_URL_TEMPLATE.format(
        page=page_number,
        date_from=format_register_date(date_from),
        date_to=format_register_date(date_to),
    )


def build_information_url(application_number: str) -> str:
    return INFORMATION_URL_TEMPLATE.format(
        application_number=quote(application_number, safe=""),
    )


def parse_register_date(text: str) -> Optional[date]:
    """
    Parse a register date such as "5/03/2019" or "15/03/2019".

    Returns None when the text is empty or not a valid date.
    """
    text = (text or "").strip()
    if not _REGISTER_DATE_PATTERN.match(text):
        return None
    try:
        return datetime.strptime(text, REGISTER_DATE_FORMAT).date()
    except ValueError:
        return None


def subtract_months(value: date, months: int) -> date:
    """Move a date back by whole months, clamping to the end of shorter months."""
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_since(epoch_year: int, epoch_month: int, today: date) -> int:
    """Whole months between the epoch month and the month of ``today``."""
    return (today.year * 12 + today.month) - (epoch_year * 12 + epoch_month)


def random_delay(minimum: float, maximum: float) -> float:
    """Pick a pause length in seconds for pacing requests to the register."""
    if maximum <= minimum:
        return minimum
    return random.uniform(minimum, maximum)
