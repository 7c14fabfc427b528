"""
HTML parsing for the register's search results and application detail pages.
"""

from urllib.parse import urljoin

from bs4 import BeautifulSoup

from yorkescraper.models.application import ApplicationDetail, ListingItem, ListingPage
from yorkescraper.utils.constants import (
    DETAIL_KEY_APPLICATION_NUMBER,
    DETAIL_KEY_DESCRIPTION,
    DETAIL_KEY_RECEIVED_DATE,
    DETAIL_ROW_SELECTOR,
    LISTING_ADDRESS_SELECTOR,
    LISTING_LINK_SELECTOR,
    LISTING_ROW_SELECTOR,
    NEXT_PAGE_SELECTOR,
    REGISTER_BASE_URL,
)
from yorkescraper.utils.scraper_utils import parse_register_date


def parse_listing_page(content: str, base_url: str = REGISTER_BASE_URL) -> ListingPage:
    """
    Extract the detail links and address snippets from one page of search results.

    Rows without a detail link (headers, spacer rows) are ignored.
    """
    soup = BeautifulSoup(content or "", "lxml")
    items = []
    for row in soup.select(LISTING_ROW_SELECTOR):
        link = row.select_one(LISTING_LINK_SELECTOR)
        href = link.get("href") if link else None
        if not href:
            continue
        address_elem = row.select_one(LISTING_ADDRESS_SELECTOR)
        items.append(
            ListingItem(
                detail_url=urljoin(base_url, href.strip()),
                raw_address=address_elem.text.strip() if address_elem else "",
            )
        )
    return ListingPage(items=items, has_next_page=has_next_page(soup))


def has_next_page(soup: BeautifulSoup) -> bool:
    return soup.select_one(NEXT_PAGE_SELECTOR) is not None


def parse_detail_page(content: str) -> ApplicationDetail:
    """Read the DA number, received date and development details from a detail page."""
    soup = BeautifulSoup(content or "", "lxml")
    application_number = ""
    received_date = None
    description = ""

    for row in soup.select(DETAIL_ROW_SELECTOR):
        key = _cell_text(row, "th").upper()
        if key == DETAIL_KEY_APPLICATION_NUMBER:
            application_number = _cell_text(row, "td")
        elif key == DETAIL_KEY_RECEIVED_DATE:
            received_date = parse_register_date(_cell_text(row, "td"))
        elif key == DETAIL_KEY_DESCRIPTION:
            description = _cell_text(row, "td").replace("&apos;", "'")

    return ApplicationDetail(
        application_number=application_number,
        received_date=received_date,
        description=description,
    )


def _cell_text(row, tag: str) -> str:
    cell = row.find(tag)
    return cell.text.strip() if cell else ""
