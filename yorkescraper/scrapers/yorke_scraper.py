# yorkescraper/scrapers/yorke_scraper.py
import random
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from yorkescraper.config import ScraperSettings, settings
from yorkescraper.db.application_database import ApplicationDatabase, ReconcileOutcome
from yorkescraper.models.application import DevelopmentApplication, ListingItem, ListingPage
from yorkescraper.models.crawl import CrawlWindow, RunResult, WindowResult
from yorkescraper.models.gazetteer import Gazetteer
from yorkescraper.scrapers.base_scraper import BaseScraper, SleepFunction
from yorkescraper.scrapers.page_fetcher import PageFetcher
from yorkescraper.scrapers.parsers import parse_detail_page, parse_listing_page
from yorkescraper.utils.address_utils import (
    STATUS_HUNDRED,
    STATUS_UNRECOGNISED,
    describe_address,
)
from yorkescraper.utils.constants import COMMENT_URL
from yorkescraper.utils.scraper_utils import (
    build_information_url,
    build_listing_url,
    months_since,
    subtract_months,
)


class CrawlState(Enum):
    FETCH_PAGE = "fetch_page"
    PROCESS_ITEMS = "process_items"
    DONE = "done"


class YorkeScraper(BaseScraper):
    """
    Crawls the Yorke Peninsula Council development register.

    Each run searches the most recent month and then one randomly chosen
    historical month, so the whole archive is covered over many runs without
    loading the council's server with a full crawl.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        database: ApplicationDatabase,
        gazetteer: Gazetteer,
        config: ScraperSettings = settings,
        sleep: Optional[SleepFunction] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__("yorke", sleep=sleep)
        self.fetcher = fetcher
        self.database = database
        self.gazetteer = gazetteer
        self.config = config
        self._random = rng or random.Random()

    def recent_window(self, today: date) -> CrawlWindow:
        return CrawlWindow(date_from=subtract_months(today, 1), date_to=today)

    def random_historical_window(self, today: date) -> Optional[CrawlWindow]:
        """Pick one complete month between the first recorded application and now."""
        month_count = months_since(self.config.epoch_year, self.config.epoch_month, today)
        if month_count < 1:
            return None
        months_back = self._random.randint(1, month_count)
        return CrawlWindow(
            date_from=subtract_months(today, months_back + 1),
            date_to=subtract_months(today, months_back),
        )

    def plan_windows(self, today: date) -> List[CrawlWindow]:
        windows = [self.recent_window(today)]
        if self.config.random_window:
            historical = self.random_historical_window(today)
            if historical is not None:
                windows.append(historical)
        return windows

    async def scrape(
        self,
        today: Optional[date] = None,
        windows: Optional[Iterable[CrawlWindow]] = None,
    ) -> RunResult:
        today = today or date.today()
        windows = list(windows) if windows is not None else self.plan_windows(today)
        run_result = RunResult()

        for index, window in enumerate(windows):
            if index > 0:
                await self._pause(self.config.window_delay_min, self.config.window_delay_max)
            run_result.windows.append(await self.crawl_window(window, scrape_date=today))

        self.logger.info(
            f"Finished {len(run_result.windows)} window(s) over {run_result.pages} page(s): "
            f"{run_result.inserted} inserted, {run_result.updated} updated, "
            f"{run_result.unchanged} unchanged, {run_result.skipped} skipped."
        )
        return run_result

    async def crawl_window(self, window: CrawlWindow, scrape_date: Optional[date] = None) -> WindowResult:
        """Step through every results page of one date window."""
        scrape_date = scrape_date or date.today()
        self.logger.info(f"Retrieving development applications from {window.label}.")

        result = WindowResult(window=window)
        state = CrawlState.FETCH_PAGE
        listing: Optional[ListingPage] = None

        while state is not CrawlState.DONE:
            if state is CrawlState.FETCH_PAGE:
                listing = await self._fetch_listing(window, result.pages + 1)
                result.pages += 1
                state = CrawlState.PROCESS_ITEMS
            elif state is CrawlState.PROCESS_ITEMS:
                for item in listing.items:
                    await self._process_item(item, result, scrape_date)
                state = self._next_state(listing, result)

        return result

    async def _fetch_listing(self, window: CrawlWindow, page_number: int) -> ListingPage:
        url = build_listing_url(page_number, window.date_from, window.date_to)
        self.logger.info(f"Retrieving page {page_number}: {url}")
        body = await self.fetcher.fetch(url)
        await self._pause(self.config.page_delay_min, self.config.page_delay_max)
        listing = parse_listing_page(body)
        self.logger.info(f"Found {len(listing.items)} applications on page {page_number}")
        return listing

    def _next_state(self, listing: ListingPage, result: WindowResult) -> CrawlState:
        if not listing.has_next_page:
            self.logger.info("Reached the last page of the paged search results.")
            return CrawlState.DONE
        # Markup anomalies could otherwise keep a "next" link alive forever.
        if result.pages >= self.config.max_pages:
            self.logger.warning(f"Stopped because reached {result.pages} pages.")
            result.reached_page_limit = True
            return CrawlState.DONE
        return CrawlState.FETCH_PAGE

    async def _process_item(self, item: ListingItem, result: WindowResult, scrape_date: date) -> None:
        self.logger.info(f"Retrieving application: {item.detail_url}")
        body = await self.fetcher.fetch(item.detail_url)
        application = self._build_application(item, body, scrape_date)
        if application is None:
            result.skipped += 1
            return

        outcome = self.database.reconcile(application)
        if outcome is ReconcileOutcome.INSERTED:
            result.inserted += 1
        elif outcome is ReconcileOutcome.UPDATED:
            result.updated += 1
        else:
            result.unchanged += 1

    def _build_application(
        self, item: ListingItem, body: str, scrape_date: date
    ) -> Optional[DevelopmentApplication]:
        detail = parse_detail_page(body)
        address = self._normalize_address(item.raw_address)

        application = DevelopmentApplication(
            application_number=detail.application_number,
            address=address,
            description=detail.description,
            information_url=build_information_url(detail.application_number),
            comment_url=COMMENT_URL,
            scrape_date=scrape_date,
            received_date=detail.received_date,
        )
        errors = application.validate()
        if errors:
            self.logger.info(f"Skipping {item.detail_url}: {', '.join(errors)}")
            return None
        return application

    def _normalize_address(self, raw_address: str) -> str:
        match = describe_address(
            raw_address,
            self.gazetteer,
            threshold=self.config.suburb_match_threshold,
            max_suburb_tokens=self.config.max_suburb_tokens,
        )
        if match.status == STATUS_HUNDRED:
            self.logger.info(
                f"The state and post code will not be added because the address ends with a hundred name: {match.address}"
            )
        elif match.status == STATUS_UNRECOGNISED:
            self.logger.info(
                f"The state and post code will not be added because the suburb was not recognised: {match.address}"
            )
        return match.address


async def scrape_register(
    config: ScraperSettings = settings,
    today: Optional[date] = None,
    windows: Optional[Iterable[CrawlWindow]] = None,
) -> RunResult:
    """Load the gazetteer, open the database and browser, and run one crawl."""
    gazetteer = Gazetteer.load(config.suburb_names_path, config.hundred_names_path)
    with ApplicationDatabase(
        config.database_path,
        legacy_info_url_patterns=config.legacy_info_url_patterns,
    ) as database:
        async with PageFetcher(
            proxy=config.proxy,
            user_agent=config.user_agent,
            navigation_timeout_ms=config.navigation_timeout_ms,
        ) as fetcher:
            scraper = YorkeScraper(fetcher, database, gazetteer, config=config)
            return await scraper.scrape(today=today, windows=windows)
