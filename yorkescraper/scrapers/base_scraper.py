# yorkescraper/scrapers/base_scraper.py
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from yorkescraper.utils.scraper_utils import random_delay

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

SleepFunction = Callable[[float], Awaitable[None]]


class BaseScraper:
    def __init__(self, platform_name: str, sleep: Optional[SleepFunction] = None):
        self.platform = platform_name
        self.logger = logging.getLogger(f"Scraper-{platform_name}")
        self._sleep = sleep or asyncio.sleep

    async def _pause(self, minimum: float, maximum: float) -> float:
        """Wait a random number of seconds in [minimum, maximum] to pace requests."""
        delay = random_delay(minimum, maximum)
        if delay > 0:
            self.logger.debug(f"Pausing for {delay:.1f} seconds")
            await self._sleep(delay)
        return delay

    async def scrape(self, *args, **kwargs):
        raise NotImplementedError("Subclasses must implement scrape()")

    def run(self, *args, **kwargs):
        return asyncio.run(self.scrape(*args, **kwargs))
