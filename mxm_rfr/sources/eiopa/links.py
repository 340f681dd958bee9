"""
Link extraction for EIOPA RFR listing pages.

EIOPA publishes each monthly release of the risk-free interest rate term
structures as a zip archive linked from its listing pages. Qualifying links
carry the class ``related-item file-type-zip`` and an archive name such as
``EIOPA_RFR_20230331.zip``, whose characters 11-18 (1-indexed) are the
release date.

Public API
----------
- extract_links(document, *, css_class, accept, base_url) -> LinkIndex
- has_digit_before_extension(url) -> bool   (default link predicate)
- first_month_end_token(url) -> str | None
- date_key_from_url(url) -> DateKey
"""

from __future__ import annotations

import logging
import posixpath
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from mxm_rfr.common.types import DateKey, LinkIndex, LinkPredicate

logger = logging.getLogger(__name__)

ZIP_LINK_CLASS: str = "related-item file-type-zip"

MONTH_END_TOKENS: tuple[str, ...] = (
    "0131",
    "0228",
    "0229",
    "0331",
    "0430",
    "0531",
    "0630",
    "0731",
    "0831",
    "0930",
    "1031",
    "1130",
    "1231",
)

# Characters 11..18 (1-indexed) of the archive basename, e.g.
# "EIOPA_RFR_20230331.zip" -> "20230331".
DATE_KEY_SLICE: slice = slice(10, 18)

# Length of the file extension (".zip") that follows the date-adjacent digit.
EXTENSION_LENGTH: int = 4


def url_basename(url: str) -> str:
    """Last path component of `url`, ignoring any query string or fragment."""
    return posixpath.basename(urlparse(url).path)


def date_key_from_url(url: str) -> DateKey:
    """Derive the DateKey from the fixed offset in the archive's basename."""
    return url_basename(url)[DATE_KEY_SLICE]


def has_digit_before_extension(url: str) -> bool:
    """True if the character just before the 4-character extension is a digit.

    Excludes zip links on the same page that are not dated releases.
    """
    if len(url) <= EXTENSION_LENGTH:
        return False
    return url[-(EXTENSION_LENGTH + 1)].isdigit()


def first_month_end_token(url: str) -> Optional[str]:
    """Return the first month-end token contained in `url`, or None."""
    for token in MONTH_END_TOKENS:
        if token in url:
            return token
    return None


def _class_value(anchor: Tag) -> str:
    """The anchor's class attribute as written (bs4 splits multi-valued classes)."""
    value = anchor.get("class")
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return " ".join(value)


def extract_links(
    document: BeautifulSoup | str,
    *,
    css_class: str = ZIP_LINK_CLASS,
    accept: LinkPredicate = has_digit_before_extension,
    base_url: Optional[str] = None,
) -> LinkIndex:
    """
    Collect dated release archives linked from a parsed listing page.

    Args:
        document: Parsed HTML (raw markup is parsed with ``html.parser``).
        css_class: Exact class attribute a qualifying anchor must carry.
        accept: Predicate applied to each candidate URL.
        base_url: If given, relative hrefs are resolved against it.

    Returns:
        Mapping DateKey -> archive URL. URLs without a month-end token, or
        whose basename does not carry eight digits at the key offset, are
        dropped.
    """
    soup = (
        BeautifulSoup(document, "html.parser")
        if isinstance(document, str)
        else document
    )

    out: LinkIndex = {}
    for anchor in soup.find_all("a"):
        if not isinstance(anchor, Tag) or _class_value(anchor) != css_class:
            continue
        href = anchor.get("href")
        if not isinstance(href, str) or not href:
            continue
        url = urljoin(base_url, href) if base_url else href
        if not accept(url):
            logger.debug("Rejected by link predicate: %s", url)
            continue
        if first_month_end_token(url) is None:
            logger.debug("No month-end date in link: %s", url)
            continue
        key = date_key_from_url(url)
        if len(key) != 8 or not key.isdigit():
            logger.debug("No date key at basename offset in link: %s", url)
            continue
        out[key] = url
    return out


__all__ = [
    "ZIP_LINK_CLASS",
    "MONTH_END_TOKENS",
    "DATE_KEY_SLICE",
    "url_basename",
    "date_key_from_url",
    "has_digit_before_extension",
    "first_month_end_token",
    "extract_links",
]
