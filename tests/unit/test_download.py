from __future__ import annotations

from pathlib import Path

import pytest
import requests

from runlog.core.download import DownloadError, download_image


class _MockResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"\x89PNG", text: str = "") -> None:
        self.status_code = status_code
        self.content = content
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError("request failed", response=self)


def test_download_retries_then_succeeds(monkeypatch, tmp_path: Path) -> None:
    attempts = {"count": 0}

    def fake_get(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise requests.Timeout("timeout")
        return _MockResponse(content=b"image-bytes")

    monkeypatch.setattr("runlog.core.download.requests.get", fake_get)
    monkeypatch.setattr("runlog.core.download.time.sleep", lambda _: None)

    dest = download_image("https://example.com/a.jpg", tmp_path / "nested" / "a.jpg")

    assert dest.read_bytes() == b"image-bytes"
    assert attempts["count"] == 2


def test_download_retries_on_server_error(monkeypatch, tmp_path: Path) -> None:
    responses = [_MockResponse(status_code=503, text="busy"), _MockResponse(content=b"ok")]
    monkeypatch.setattr("runlog.core.download.requests.get", lambda *a, **k: responses.pop(0))
    monkeypatch.setattr("runlog.core.download.time.sleep", lambda _: None)

    dest = download_image("https://example.com/a.jpg", tmp_path / "a.jpg")
    assert dest.read_bytes() == b"ok"


def test_download_gives_up_after_max_retries(monkeypatch, tmp_path: Path) -> None:
    attempts = {"count": 0}
    sleeps = []

    def fake_get(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        raise requests.ConnectionError("offline")

    monkeypatch.setattr("runlog.core.download.requests.get", fake_get)
    monkeypatch.setattr("runlog.core.download.time.sleep", sleeps.append)

    with pytest.raises(DownloadError):
        download_image("https://example.com/a.jpg", tmp_path / "a.jpg", max_retries=3)
    assert attempts["count"] == 3
    assert sleeps == [2, 4]
    assert not (tmp_path / "a.jpg").exists()


def test_download_client_error_fails_without_retry(monkeypatch, tmp_path: Path) -> None:
    attempts = {"count": 0}
    sleeps = []

    def fake_get(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        return _MockResponse(status_code=404, text="not found")

    monkeypatch.setattr("runlog.core.download.requests.get", fake_get)
    monkeypatch.setattr("runlog.core.download.time.sleep", sleeps.append)

    with pytest.raises(DownloadError, match="HTTP 404"):
        download_image("https://example.com/missing.jpg", tmp_path / "a.jpg", max_retries=3)
    assert attempts["count"] == 1
    assert sleeps == []
    assert not (tmp_path / "a.jpg").exists()
