"""yorkescraper - Yorke Peninsula Council development application scraper."""

from importlib import import_module

__all__ = [
    "ApplicationDatabase",
    "DevelopmentApplication",
    "Gazetteer",
    "YorkeScraper",
    "normalize_address",
]

_EXPORT_TO_MODULE = {
    "ApplicationDatabase": "yorkescraper.db.application_database",
    "DevelopmentApplication": "yorkescraper.models.application",
    "Gazetteer": "yorkescraper.models.gazetteer",
    "YorkeScraper": "yorkescraper.scrapers.yorke_scraper",
    "normalize_address": "yorkescraper.utils.address_utils",
}


def __getattr__(name: str):
    module_name = _EXPORT_TO_MODULE.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(module_name)
    value = getattr(module, name)
    globals()[name] = value
    return value
