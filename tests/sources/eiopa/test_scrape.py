from __future__ import annotations

from typing import Callable

import pytest

from mxm_rfr.common.errors import ScrapeError
from mxm_rfr.sources.eiopa.scrape import RFR_PAGES, scrape_pages

PAGE_A = "https://rfr.test/current"
PAGE_B = "https://rfr.test/previous"
BASE = "https://rfr.test/files/"


def _html(*hrefs: str) -> bytes:
    anchors = "".join(
        f'<a class="related-item file-type-zip" href="{h}">zip</a>' for h in hrefs
    )
    return f"<html><body>{anchors}</body></html>".encode("utf-8")


def test_end_to_end_single_link(fake_fetcher: Callable) -> None:
    url = BASE + "eiopa_rfr_20230331.zip"
    fetcher = fake_fetcher()
    fetcher.add(PAGE_A, _html(url))

    assert scrape_pages([PAGE_A], adapter=fetcher) == {"20230331": url}
    assert fetcher.calls == [PAGE_A]


def test_pages_merge_later_page_wins(fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    fetcher.add(PAGE_A, _html(BASE + "a/eiopa_rfr_20230331.zip", BASE + "a/eiopa_rfr_20230228.zip"))
    fetcher.add(PAGE_B, _html(BASE + "b/eiopa_rfr_20230331.zip", BASE + "b/eiopa_rfr_20221231.zip"))

    index = scrape_pages([PAGE_A, PAGE_B], adapter=fetcher)

    assert index == {
        "20230331": BASE + "b/eiopa_rfr_20230331.zip",
        "20230228": BASE + "a/eiopa_rfr_20230228.zip",
        "20221231": BASE + "b/eiopa_rfr_20221231.zip",
    }
    assert fetcher.calls == [PAGE_A, PAGE_B]


def test_non_200_raises_scrape_error(fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    fetcher.add(PAGE_A, b"maintenance", status=503)
    with pytest.raises(ScrapeError, match="503"):
        scrape_pages([PAGE_A], adapter=fetcher)


def test_failure_on_later_page_aborts_without_partial_result(fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    fetcher.add(PAGE_A, _html(BASE + "eiopa_rfr_20230331.zip"))
    # PAGE_B not registered -> 404

    with pytest.raises(ScrapeError) as excinfo:
        scrape_pages([PAGE_A, PAGE_B], adapter=fetcher)
    assert PAGE_B in str(excinfo.value)


def test_transport_error_becomes_scrape_error(
    fake_fetcher: Callable, connection_error: Exception
) -> None:
    fetcher = fake_fetcher({PAGE_A: connection_error})
    with pytest.raises(ScrapeError) as excinfo:
        scrape_pages([PAGE_A], adapter=fetcher)
    assert excinfo.value.__cause__ is connection_error


def test_no_pages_gives_empty_index(fake_fetcher: Callable) -> None:
    assert scrape_pages([], adapter=fake_fetcher()) == {}


@pytest.mark.integration
def test_integration_live_eiopa_pages() -> None:
    """Hit the live EIOPA website (slow, network)."""
    index = scrape_pages(RFR_PAGES)
    assert index
    assert all(len(k) == 8 and k.isdigit() for k in index)
    assert all(url.endswith(".zip") for url in index.values())
