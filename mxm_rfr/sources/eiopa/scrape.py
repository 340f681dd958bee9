"""
Scrape the EIOPA RFR listing pages into a single link index.

Pages are fetched one at a time, in the order given. Each page's links are
merged into the accumulated index; where two pages publish the same release
date, the later page wins. The first failing page aborts the whole scrape.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import requests
from bs4 import BeautifulSoup

from mxm_rfr.common.errors import ScrapeError
from mxm_rfr.common.http_adapter import Fetcher, HttpRequestsAdapter
from mxm_rfr.common.types import LinkIndex
from mxm_rfr.sources.eiopa.links import extract_links

logger = logging.getLogger(__name__)

CURRENT_RFR_URL: str = (
    "https://www.eiopa.europa.eu/tools-and-data/risk-free-interest-rate-term-structures_en"
)
PREVIOUS_RFR_URL: str = (
    "https://www.eiopa.europa.eu/risk-free-rate-previous-releases-and-preparatory-phase"
)
RFR_PAGES: tuple[str, ...] = (CURRENT_RFR_URL, PREVIOUS_RFR_URL)


def fetch_page(url: str, adapter: Fetcher) -> BeautifulSoup:
    """GET one listing page and parse it.

    Raises:
        ScrapeError: On a non-200 status or a transport failure.
    """
    try:
        result = adapter.fetch(url, headers={"Accept": "text/html"})
    except requests.RequestException as exc:
        raise ScrapeError(f"URL could not be scraped: {url} ({exc})") from exc
    if result.status != 200:
        raise ScrapeError(f"URL could not be scraped: {url} (HTTP {result.status})")
    return BeautifulSoup(result.text(), "html.parser")


def scrape_pages(
    urls: Sequence[str] = RFR_PAGES,
    *,
    adapter: Optional[Fetcher] = None,
) -> LinkIndex:
    """
    Fetch each page in `urls` and merge their release links.

    Args:
        urls: Listing pages, in merge-precedence order.
        adapter: HTTP fetcher; a default `HttpRequestsAdapter` is created (and
            closed) for this call if omitted.

    Returns:
        Mapping DateKey -> archive URL across all pages.

    Raises:
        ScrapeError: If any page cannot be fetched. No partial result is
            returned.
    """
    if adapter is None:
        with HttpRequestsAdapter() as own:
            return scrape_pages(urls, adapter=own)

    index: LinkIndex = {}
    for url in urls:
        links = extract_links(fetch_page(url, adapter), base_url=url)
        logger.info("Found %d release archives on %s", len(links), url)
        index.update(links)
    return index


__all__ = [
    "CURRENT_RFR_URL",
    "PREVIOUS_RFR_URL",
    "RFR_PAGES",
    "fetch_page",
    "scrape_pages",
]
