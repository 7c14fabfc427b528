"""Test configuration and fixtures for pytest."""

import pytest

from yorkescraper.config import ScraperSettings
from yorkescraper.db.application_database import ApplicationDatabase
from yorkescraper.errors import FetchError
from yorkescraper.models.gazetteer import Gazetteer

LEGACY_URL_PATTERN = "https://yorke.sa.gov.au/development/development-information/development-register/entry/%"


class FakeFetcher:
    """Serves canned HTML by URL and records every request."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requested = []

    async def fetch(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404")
        return self.pages[url]


@pytest.fixture
def gazetteer():
    return Gazetteer(
        suburbs={
            "EDITHBURGH": "EDITHBURGH, SA 5583",
            "MARION BAY": "MARION BAY, SA 5575",
            "PORT CLINTON": "PORT CLINTON, SA 5570",
            "CLINTON": "CLINTON, SA 5570",
            "STANSBURY": "STANSBURY, SA 5582",
            "PORT VINCENT": "PORT VINCENT, SA 5581",
        },
        hundred_names=("CLINTON", "MELVILLE", "PARA WURLIE"),
    )


@pytest.fixture
def database(tmp_path):
    db = ApplicationDatabase(
        tmp_path / "data.sqlite",
        legacy_info_url_patterns=[LEGACY_URL_PATTERN],
    ).initialize()
    yield db
    db.close()


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def fast_settings():
    """Settings with no pacing delays so crawls run instantly."""
    return ScraperSettings(
        page_delay_min=0,
        page_delay_max=0,
        window_delay_min=0,
        window_delay_max=0,
        legacy_info_url_patterns=[LEGACY_URL_PATTERN],
    )


@pytest.fixture
def make_listing_html():
    def _make(rows, has_next=False):
        body = "".join(
            '<tr>'
            f'<td id="gv-field-31-1"><a href="{url}">View</a></td>'
            '<td id="gv-field-31-3">Development</td>'
            f'<td id="gv-field-31-7">{address}</td>'
            '</tr>'
            for url, address in rows
        )
        pager = ""
        if has_next:
            pager = (
                '<ul class="page-numbers">'
                '<li><span class="current">1</span></li>'
                '<li><a class="next page-numbers" href="?pagenum=2">Next</a></li>'
                '</ul>'
            )
        return (
            '<html><body>'
            '<table class="gv-table-view">'
            '<thead><tr><th>DA Number</th><th>Type</th><th>Address</th></tr></thead>'
            f'<tbody>{body}</tbody>'
            '</table>'
            f'{pager}'
            '</body></html>'
        )
    return _make


@pytest.fixture
def make_detail_html():
    def _make(application_number="", received="", description=""):
        rows = []
        if application_number is not None:
            rows.append(f'<tr><th>DA Number</th><td>{application_number}</td></tr>')
        if received is not None:
            rows.append(f'<tr><th>Date Application Received</th><td>{received}</td></tr>')
        if description is not None:
            rows.append(f'<tr><th>Development Details</th><td>{description}</td></tr>')
        return (
            '<html><body>'
            '<table class="gv-table-view-content">'
            + "".join(rows) +
            '</table>'
            '</body></html>'
        )
    return _make
