"""Domain errors raised by the scraper."""


class ScraperError(Exception):
    """Base class for scraper failures."""

    error_code = "SCRAPER_ERROR"


class ConfigError(ScraperError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class GazetteerError(ConfigError):
    """Raised when the suburb or hundred name reference lists cannot be loaded."""

    error_code = "GAZETTEER_ERROR"


class FetchError(ScraperError):
    """Raised when a page cannot be retrieved from the register."""

    error_code = "FETCH_ERROR"

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to retrieve {url}: {reason}")
        self.url = url
        self.reason = reason
