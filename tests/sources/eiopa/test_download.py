from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

import mxm_rfr.common.file_io as file_io
from mxm_rfr.common.errors import DirectoryError, DownloadError
from mxm_rfr.sources.eiopa.download import cache_path, ensure_local

URL = "https://rfr.test/files/eiopa_rfr_20230331.zip"
PAYLOAD = b"PK\x03\x04 fake zip payload"


def _leftovers(directory: Path) -> list[str]:
    return sorted(p.name for p in directory.iterdir() if p.name.endswith(".part"))


def test_first_call_downloads_second_call_reuses(tmp_path: Path, fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    fetcher.add(URL, PAYLOAD, content_type="application/zip")
    download_dir = tmp_path / "download"

    first = ensure_local(URL, download_dir, adapter=fetcher)
    second = ensure_local(URL, download_dir, adapter=fetcher)

    assert first == second == download_dir / "eiopa_rfr_20230331.zip"
    assert first.read_bytes() == PAYLOAD
    assert fetcher.calls == [URL]


def test_overwrite_refetches_existing_file(tmp_path: Path, fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    fetcher.add(URL, b"new content")
    (tmp_path / "eiopa_rfr_20230331.zip").write_bytes(b"old content")

    path = ensure_local(URL, tmp_path, overwrite=True, adapter=fetcher)

    assert fetcher.calls == [URL]
    assert path.read_bytes() == b"new content"


def test_existing_file_is_trusted_without_validation(tmp_path: Path, fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    (tmp_path / "eiopa_rfr_20230331.zip").write_bytes(b"whatever is there")

    path = ensure_local(URL, tmp_path, adapter=fetcher)

    assert fetcher.calls == []
    assert path.read_bytes() == b"whatever is there"


def test_missing_directory_is_created(tmp_path: Path, fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    fetcher.add(URL, PAYLOAD)
    target_dir = tmp_path / "a" / "b" / "download"

    path = ensure_local(URL, target_dir, adapter=fetcher)

    assert target_dir.is_dir()
    assert path.parent == target_dir


def test_directory_blocked_by_file_raises(tmp_path: Path, fake_fetcher: Callable) -> None:
    blocker = tmp_path / "download"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(DirectoryError):
        ensure_local(URL, blocker, adapter=fake_fetcher())


def test_http_error_leaves_no_file(tmp_path: Path, fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()  # URL unknown -> 404

    with pytest.raises(DownloadError, match="404"):
        ensure_local(URL, tmp_path, adapter=fetcher)
    assert list(tmp_path.iterdir()) == []


def test_empty_body_is_an_error(tmp_path: Path, fake_fetcher: Callable) -> None:
    fetcher = fake_fetcher()
    fetcher.add(URL, b"")

    with pytest.raises(DownloadError, match="Empty"):
        ensure_local(URL, tmp_path, adapter=fetcher)
    assert not cache_path(URL, tmp_path).exists()


def test_transport_error_becomes_download_error(
    tmp_path: Path, fake_fetcher: Callable, connection_error: Exception
) -> None:
    fetcher = fake_fetcher({URL: connection_error})

    with pytest.raises(DownloadError) as excinfo:
        ensure_local(URL, tmp_path, adapter=fetcher)
    assert excinfo.value.__cause__ is connection_error


def test_failed_write_keeps_previous_file_and_cleans_up(
    tmp_path: Path, fake_fetcher: Callable, monkeypatch: pytest.MonkeyPatch
) -> None:
    fetcher = fake_fetcher()
    fetcher.add(URL, b"new content")
    existing = tmp_path / "eiopa_rfr_20230331.zip"
    existing.write_bytes(b"old content")

    def _boom(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(file_io.os, "replace", _boom)

    with pytest.raises(DownloadError, match="disk full"):
        ensure_local(URL, tmp_path, overwrite=True, adapter=fetcher)
    assert existing.read_bytes() == b"old content"
    assert _leftovers(tmp_path) == []


def test_cache_path_ignores_query_string(tmp_path: Path) -> None:
    assert cache_path(URL + "?download=1", tmp_path) == tmp_path / "eiopa_rfr_20230331.zip"


def test_cache_path_requires_file_name(tmp_path: Path) -> None:
    with pytest.raises(DownloadError):
        cache_path("https://rfr.test/files/", tmp_path)
