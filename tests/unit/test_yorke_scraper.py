# tests/unit/test_yorke_scraper.py
from datetime import date
from unittest.mock import MagicMock

import pytest

from yorkescraper.config import ScraperSettings
from yorkescraper.errors import FetchError
from yorkescraper.models.crawl import CrawlWindow
from yorkescraper.scrapers.yorke_scraper import YorkeScraper
from yorkescraper.utils.scraper_utils import build_information_url, build_listing_url

LEGACY_URL = "https://yorke.sa.gov.au/development/development-information/development-register/entry/4471/"
WINDOW = CrawlWindow(date_from=date(2024, 1, 19), date_to=date(2024, 2, 19))
TODAY = date(2024, 2, 19)


def _listing_url(page_number, window=WINDOW):
    return build_listing_url(page_number, window.date_from, window.date_to)


def _scraper(fetcher, database, gazetteer, config, **kwargs):
    return YorkeScraper(fetcher, database, gazetteer, config=config, **kwargs)


@pytest.mark.asyncio
async def test_single_page_window_saves_applications(
    fake_fetcher, database, gazetteer, fast_settings, make_listing_html, make_detail_html
):
    fake_fetcher.pages = {
        _listing_url(1): make_listing_html([
            ("https://yorke.sa.gov.au/da/1", "106 Sultana Point Road EDITHBURGH (Hd Melville)"),
            ("https://yorke.sa.gov.au/da/2", "7 The Esplanade . MARION BAY"),
        ]),
        "https://yorke.sa.gov.au/da/1": make_detail_html("590/001/24", "9/01/2024", "Dwelling"),
        "https://yorke.sa.gov.au/da/2": make_detail_html("590/002/24", "not recorded", "Shed"),
    }
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)

    result = await scraper.crawl_window(WINDOW, scrape_date=TODAY)

    assert result.pages == 1
    assert result.inserted == 2
    assert result.skipped == 0
    assert result.reached_page_limit is False

    first = database.get("590/001/24")
    assert first["address"] == "106 Sultana Point Road, EDITHBURGH, SA 5583"
    assert first["description"] == "Dwelling"
    assert first["info_url"] == build_information_url("590/001/24")
    assert first["comment_url"] == "mailto:admin@yorke.sa.gov.au"
    assert first["date_scraped"] == "2024-02-19"
    assert first["date_received"] == "2024-01-09"

    second = database.get("590/002/24")
    assert second["address"] == "7 The Esplanade, MARION BAY, SA 5575"
    assert second["date_received"] == ""


@pytest.mark.asyncio
async def test_follows_next_page_links(
    fake_fetcher, database, gazetteer, fast_settings, make_listing_html, make_detail_html
):
    fake_fetcher.pages = {
        _listing_url(1): make_listing_html([("https://yorke.sa.gov.au/da/1", "STANSBURY")], has_next=True),
        _listing_url(2): make_listing_html([("https://yorke.sa.gov.au/da/2", "PORT VINCENT")]),
        "https://yorke.sa.gov.au/da/1": make_detail_html("590/001/24"),
        "https://yorke.sa.gov.au/da/2": make_detail_html("590/002/24"),
    }
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)

    result = await scraper.crawl_window(WINDOW, scrape_date=TODAY)

    assert result.pages == 2
    assert result.inserted == 2
    assert fake_fetcher.requested == [
        _listing_url(1),
        "https://yorke.sa.gov.au/da/1",
        _listing_url(2),
        "https://yorke.sa.gov.au/da/2",
    ]


@pytest.mark.asyncio
async def test_page_ceiling_stops_endless_pagination(
    fake_fetcher, database, gazetteer, make_listing_html
):
    config = ScraperSettings(max_pages=3, page_delay_min=0, page_delay_max=0)
    # Every page claims there is another one
    fake_fetcher.pages = {_listing_url(n): make_listing_html([], has_next=True) for n in range(1, 10)}
    scraper = _scraper(fake_fetcher, database, gazetteer, config)

    result = await scraper.crawl_window(WINDOW, scrape_date=TODAY)

    assert result.pages == 3
    assert result.reached_page_limit is True
    assert fake_fetcher.requested == [_listing_url(1), _listing_url(2), _listing_url(3)]


@pytest.mark.asyncio
async def test_window_without_results_finishes_after_one_page(
    fake_fetcher, database, gazetteer, fast_settings, make_listing_html
):
    fake_fetcher.pages = {_listing_url(1): make_listing_html([])}
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)

    result = await scraper.crawl_window(WINDOW, scrape_date=TODAY)

    assert result.pages == 1
    assert result.saved == 0
    assert database.count() == 0


@pytest.mark.asyncio
async def test_items_missing_number_or_address_are_skipped(
    fake_fetcher, database, gazetteer, fast_settings, make_listing_html, make_detail_html
):
    fake_fetcher.pages = {
        _listing_url(1): make_listing_html([
            ("https://yorke.sa.gov.au/da/1", "STANSBURY"),
            ("https://yorke.sa.gov.au/da/2", "   "),
            ("https://yorke.sa.gov.au/da/3", "PORT VINCENT"),
        ]),
        "https://yorke.sa.gov.au/da/1": make_detail_html(application_number=None, description="Shed"),
        "https://yorke.sa.gov.au/da/2": make_detail_html("590/002/24"),
        "https://yorke.sa.gov.au/da/3": make_detail_html("590/003/24"),
    }
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)

    result = await scraper.crawl_window(WINDOW, scrape_date=TODAY)

    assert result.skipped == 2
    assert result.inserted == 1
    assert database.count() == 1
    assert database.get("590/003/24")["address"] == "PORT VINCENT, SA 5581"


@pytest.mark.asyncio
async def test_unrecognised_address_is_kept_and_logged(
    fake_fetcher, database, gazetteer, fast_settings, make_listing_html, make_detail_html, caplog
):
    fake_fetcher.pages = {
        _listing_url(1): make_listing_html([("https://yorke.sa.gov.au/da/1", "Lot 12 HD CLINTON")]),
        "https://yorke.sa.gov.au/da/1": make_detail_html("590/001/24"),
    }
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)

    with caplog.at_level("INFO"):
        await scraper.crawl_window(WINDOW, scrape_date=TODAY)

    assert database.get("590/001/24")["address"] == "Lot 12 HD CLINTON"
    assert "ends with a hundred name" in caplog.text


@pytest.mark.asyncio
async def test_fetch_failure_is_fatal(fake_fetcher, database, gazetteer, fast_settings, make_listing_html):
    fake_fetcher.pages = {
        _listing_url(1): make_listing_html([("https://yorke.sa.gov.au/da/missing", "STANSBURY")]),
    }
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)

    with pytest.raises(FetchError):
        await scraper.crawl_window(WINDOW, scrape_date=TODAY)


@pytest.mark.asyncio
async def test_rerun_migrates_legacy_url_and_keeps_content(
    fake_fetcher, database, gazetteer, fast_settings, make_listing_html, make_detail_html
):
    database.connection.execute(
        "insert into [data] values (?, ?, ?, ?, ?, ?, ?, ?, ?)",
        ("590/001/24", "Old address", "Old description", LEGACY_URL,
         "mailto:admin@yorke.sa.gov.au", "2024-01-20", "2024-01-09", None, None),
    )
    database.connection.commit()
    fake_fetcher.pages = {
        _listing_url(1): make_listing_html([("https://yorke.sa.gov.au/da/1", "STANSBURY")]),
        "https://yorke.sa.gov.au/da/1": make_detail_html("590/001/24", "9/01/2024", "New description"),
    }
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)

    result = await scraper.crawl_window(WINDOW, scrape_date=TODAY)

    assert result.updated == 1
    row = database.get("590/001/24")
    assert row["info_url"] == build_information_url("590/001/24")
    assert row["address"] == "Old address"
    assert row["description"] == "Old description"
    assert row["date_scraped"] == "2024-01-20"

    again = await scraper.crawl_window(WINDOW, scrape_date=TODAY)
    assert again.unchanged == 1


@pytest.mark.asyncio
async def test_pacing_delays_between_pages_and_windows(
    fake_fetcher, database, gazetteer, make_listing_html
):
    config = ScraperSettings(page_delay_min=2, page_delay_max=2, window_delay_min=5, window_delay_max=5)
    second = CrawlWindow(date_from=date(2010, 5, 19), date_to=date(2010, 6, 19))
    fake_fetcher.pages = {
        _listing_url(1): make_listing_html([]),
        _listing_url(1, second): make_listing_html([]),
    }
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    scraper = _scraper(fake_fetcher, database, gazetteer, config, sleep=fake_sleep)

    result = await scraper.scrape(today=TODAY, windows=[WINDOW, second])

    assert delays == [2, 5, 2]
    assert [w.window for w in result.windows] == [WINDOW, second]
    assert result.pages == 2


@pytest.mark.asyncio
async def test_scrape_plans_recent_and_random_windows(
    fake_fetcher, database, gazetteer, fast_settings, make_listing_html
):
    rng = MagicMock()
    rng.randint.return_value = 3
    recent = CrawlWindow(date_from=date(2024, 1, 19), date_to=date(2024, 2, 19))
    historical = CrawlWindow(date_from=date(2023, 10, 19), date_to=date(2023, 11, 19))
    fake_fetcher.pages = {
        _listing_url(1, recent): make_listing_html([]),
        _listing_url(1, historical): make_listing_html([]),
    }
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings, rng=rng)

    result = await scraper.scrape(today=TODAY)

    assert [w.window for w in result.windows] == [recent, historical]


def test_recent_window_clamps_month_end(fake_fetcher, database, gazetteer, fast_settings):
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)
    window = scraper.recent_window(date(2024, 3, 31))
    assert window.date_from == date(2024, 2, 29)
    assert window.date_to == date(2024, 3, 31)


def test_random_historical_window_spans_archive(fake_fetcher, database, gazetteer, fast_settings):
    rng = MagicMock()
    rng.randint.return_value = 1
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings, rng=rng)

    window = scraper.random_historical_window(date(2026, 10, 19))

    # April 1997 to October 2026 is 354 whole months
    rng.randint.assert_called_once_with(1, 354)
    assert window == CrawlWindow(date_from=date(2026, 8, 19), date_to=date(2026, 9, 19))


def test_oldest_random_window_covers_first_application(fake_fetcher, database, gazetteer, fast_settings):
    rng = MagicMock()
    rng.randint.side_effect = lambda low, high: high
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings, rng=rng)

    window = scraper.random_historical_window(date(2026, 10, 19))

    assert window.date_from <= date(1997, 4, 16) <= window.date_to


def test_random_window_can_be_disabled(fake_fetcher, database, gazetteer):
    config = ScraperSettings(random_window=False)
    scraper = _scraper(fake_fetcher, database, gazetteer, config)
    assert scraper.plan_windows(TODAY) == [scraper.recent_window(TODAY)]


def test_no_historical_window_before_epoch(fake_fetcher, database, gazetteer, fast_settings):
    scraper = _scraper(fake_fetcher, database, gazetteer, fast_settings)
    assert scraper.random_historical_window(date(1997, 4, 20)) is None
