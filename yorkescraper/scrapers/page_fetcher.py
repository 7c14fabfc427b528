# yorkescraper/scrapers/page_fetcher.py
import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from yorkescraper.errors import FetchError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class PageFetcher:
    """
    Retrieves register pages with a headless Chromium page.

    Requests are issued one at a time through a single browser page. The
    register's certificate chain is not always complete, so HTTPS errors are
    ignored. Use as an async context manager:

        async with PageFetcher(proxy=settings.proxy) as fetcher:
            html = await fetcher.fetch(url)
    """

    def __init__(
        self,
        proxy: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        navigation_timeout_ms: int = 60000,
        headless: bool = True,
    ):
        self.proxy = proxy
        self.user_agent = user_agent
        self.navigation_timeout_ms = navigation_timeout_ms
        self.headless = headless
        self.logger = logging.getLogger("PageFetcher")
        self._playwright = None
        self._browser = None
        self._page = None

    async def __aenter__(self) -> "PageFetcher":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self) -> None:
        self._playwright = await async_playwright().start()
        launch_options = {"headless": self.headless}
        if self.proxy:
            launch_options["proxy"] = {"server": self.proxy}
        self._browser = await self._playwright.chromium.launch(**launch_options)
        context = await self._browser.new_context(
            user_agent=self.user_agent,
            ignore_https_errors=True,
        )
        self._page = await context.new_page()
        self._page.set_default_navigation_timeout(self.navigation_timeout_ms)

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self._page = None

    async def fetch(self, url: str) -> str:
        """Return the HTML of ``url``, raising FetchError if it cannot be loaded."""
        if self._page is None:
            raise FetchError(url, "fetcher is not open")
        try:
            response = await self._page.goto(url, wait_until="domcontentloaded")
        except PlaywrightError as e:
            raise FetchError(url, str(e)) from e
        if response is None:
            raise FetchError(url, "no response")
        if not response.ok:
            raise FetchError(url, f"HTTP {response.status}")
        return await self._page.content()
