from yorkescraper.utils.address_utils import (
    clean_address,
    describe_address,
    normalize_address,
)
from yorkescraper.utils.scraper_utils import (
    build_information_url,
    build_listing_url,
    parse_register_date,
    subtract_months,
)

__all__ = [
    "clean_address",
    "describe_address",
    "normalize_address",
    "build_information_url",
    "build_listing_url",
    "parse_register_date",
    "subtract_months",
]
