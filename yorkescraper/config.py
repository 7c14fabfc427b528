# yorkescraper/config.py
"""Scraper configuration that reads YORKE_* environment variables.

List values must be provided as JSON arrays, for example:
YORKE_LEGACY_INFO_URL_PATTERNS=["https://yorke.sa.gov.au/old/%"]

The proxy may also be supplied through MORPH_PROXY.
"""

from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent
# Reference lists are installed as package data.
DATA_DIR = Path(__file__).resolve().parent / "data"


class ScraperSettings(BaseSettings):
    database_path: Path = Field(default=Path("data.sqlite"))
    suburb_names_path: Path = Field(default=DATA_DIR / "suburbnames.txt")
    hundred_names_path: Path = Field(default=DATA_DIR / "hundrednames.txt")

    max_pages: int = Field(default=100, ge=1)
    page_delay_min: float = Field(default=2.0, ge=0)
    page_delay_max: float = Field(default=7.0, ge=0)
    window_delay_min: float = Field(default=5.0, ge=0)
    window_delay_max: float = Field(default=15.0, ge=0)

    suburb_match_threshold: int = Field(default=1, ge=0)
    max_suburb_tokens: int = Field(default=4, ge=1)

    legacy_info_url_patterns: List[str] = Field(
        default=[
            "https://yorke.sa.gov.au/development/development-information/development-register/entry/%",
        ],
    )

    proxy: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("YORKE_PROXY", "MORPH_PROXY"),
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
    )
    navigation_timeout_ms: int = Field(default=60000)

    # First recorded development application is 16th April 1997.
    epoch_year: int = Field(default=1997)
    epoch_month: int = Field(default=4, ge=1, le=12)
    random_window: bool = Field(default=True)

    schedule_time: str = Field(default="06:00")

    model_config = SettingsConfigDict(env_prefix="YORKE_", populate_by_name=True)


load_dotenv(dotenv_path=PROJECT_ROOT / ".env", override=False)
settings = ScraperSettings()
