"""
Address normalization against the suburb gazetteer.

Addresses on the register are free text such as
"106 Sultana Point Road EDITHBURGH (Hd Melville)". Normalization recovers the
suburb from the trailing tokens (allowing a small spelling error) and replaces
it with the canonical "SUBURB, STATE POSTCODE" suffix.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from rapidfuzz import process as rf_process
from rapidfuzz.distance import Levenshtein

from yorkescraper.models.gazetteer import Gazetteer

DEFAULT_MATCH_THRESHOLD = 1
DEFAULT_MAX_SUBURB_TOKENS = 4

STATUS_MATCHED = "matched"
STATUS_HUNDRED = "hundred"
STATUS_UNRECOGNISED = "unrecognised"
STATUS_EMPTY = "empty"

_LEADING_DOT = re.compile(r"^\. ")
_ISOLATED_DOT = re.compile(r" \.(?= )")
_HUNDRED_ANNOTATION = re.compile(r"\s*\(Hd.*?\)", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class AddressMatch:
    address: str
    status: str
    suburb: Optional[str] = None


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def clean_address(raw_address: str) -> str:
    """
    Remove formatting artifacts from a raw register address.

    Drops a dot at the start (". HD CLINTON") or an isolated dot in the middle
    ("7 The Esplanade . MARION BAY"), removes a bracketed hundred annotation
    ("(Hd Melville)") and collapses whitespace.
    """
    if not raw_address:
        return ""
    address = _LEADING_DOT.sub(" ", raw_address)
    address = _ISOLATED_DOT.sub(" ", address)
    address = _collapse(address)
    address = _HUNDRED_ANNOTATION.sub("", address)
    return _collapse(address)


def ends_with_hundred_name(address: str, hundred_names: Tuple[str, ...]) -> bool:
    uppercase_address = address.upper()
    for hundred_name in hundred_names:
        marker = "HD " + hundred_name
        if uppercase_address == marker or uppercase_address.endswith(" " + marker):
            return True
    return False


def find_suburb(
    candidate: str,
    gazetteer: Gazetteer,
    threshold: int = DEFAULT_MATCH_THRESHOLD,
) -> Optional[str]:
    """Return the gazetteer key closest to ``candidate`` within ``threshold`` edits.

    Ties go to the key listed first in the gazetteer.
    """
    if not candidate or not gazetteer.suburbs:
        return None
    match = rf_process.extractOne(
        _collapse(candidate).upper(),
        gazetteer.suburb_names,
        scorer=Levenshtein.distance,
        score_cutoff=threshold,
    )
    if match is None:
        return None
    return match[0]


def describe_address(
    raw_address: str,
    gazetteer: Gazetteer,
    threshold: int = DEFAULT_MATCH_THRESHOLD,
    max_suburb_tokens: int = DEFAULT_MAX_SUBURB_TOKENS,
) -> AddressMatch:
    """Normalize an address and report how the result was reached."""
    address = clean_address(raw_address)
    if not address:
        return AddressMatch(address=address, status=STATUS_EMPTY)

    # A hundred name such as "HD CLINTON" would otherwise be read as a suburb.
    if ends_with_hundred_name(address, gazetteer.hundred_names):
        return AddressMatch(address=address, status=STATUS_HUNDRED)

    tokens = address.split(" ")

    # Prefer the longest suburb name, e.g. "PORT CLINTON" over "CLINTON".
    for window in range(min(max_suburb_tokens, len(tokens)), 0, -1):
        suburb = find_suburb(" ".join(tokens[-window:]), gazetteer, threshold=threshold)
        if suburb is None:
            continue
        street_name = " ".join(tokens[:-window]).strip()
        canonical = gazetteer.canonical(suburb)
        formatted = f"{street_name}, {canonical}" if street_name else canonical
        return AddressMatch(address=formatted.strip(), status=STATUS_MATCHED, suburb=suburb)

    return AddressMatch(address=address, status=STATUS_UNRECOGNISED)


def normalize_address(
    raw_address: str,
    gazetteer: Gazetteer,
    threshold: int = DEFAULT_MATCH_THRESHOLD,
    max_suburb_tokens: int = DEFAULT_MAX_SUBURB_TOKENS,
) -> str:
    """
    Format an address so that it ends with a valid suburb name, state and post code.

    Examples:
    - "106 Sultana Point Road EDITHBURGH (Hd Melville)" -> "106 Sultana Point Road, EDITHBURGH, SA 5583"
    - "7 The Esplanade . MARION BAY" -> "7 The Esplanade, MARION BAY, SA 5575"
    - "Lot 5 HD CLINTON" -> "Lot 5 HD CLINTON" (hundred names are left alone)

    Args:
        raw_address: Address text scraped from the register
        gazetteer: Known suburbs and hundred names
        threshold: Maximum edit distance for a suburb match
        max_suburb_tokens: Longest suburb name, in words, that is tried

    Returns:
        The normalized address, or the cleaned input when no suburb is recognised
    """
    return describe_address(
        raw_address,
        gazetteer,
        threshold=threshold,
        max_suburb_tokens=max_suburb_tokens,
    ).address
