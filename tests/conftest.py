"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from tdg.core.models import CaptionCatalog, CaptionTrack

FIXTURES_DIR = Path(__file__).parent / "fixtures"
VIDEO_ID = "abcdefghijk"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def watch_page(fixtures_dir: Path) -> str:
    return (fixtures_dir / "watch_page.html").read_text(encoding="utf-8")


@pytest.fixture
def legacy_xml(fixtures_dir: Path) -> str:
    return (fixtures_dir / "timedtext_legacy.xml").read_text(encoding="utf-8")


@pytest.fixture
def srv3_xml(fixtures_dir: Path) -> str:
    return (fixtures_dir / "timedtext_srv3.xml").read_text(encoding="utf-8")


@pytest.fixture
def analysis_response(fixtures_dir: Path) -> str:
    return (fixtures_dir / "analysis_response.md").read_text(encoding="utf-8")


def track_url(lang: str, generated: bool = False) -> str:
    url = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang={lang}"
    return url + "&kind=asr" if generated else url


def make_track(lang: str, generated: bool = False, default: bool = False) -> CaptionTrack:
    return CaptionTrack(
        language_code=lang,
        base_url=track_url(lang, generated),
        is_generated=generated,
        is_default=default,
        name=lang,
    )


def make_catalog(*tracks: CaptionTrack, player_response: dict | None = None) -> CaptionCatalog:
    return CaptionCatalog(
        video_id=VIDEO_ID,
        tracks=list(tracks),
        player_response=player_response or {},
    )


def make_watch_page(player_response: dict | None, html_lang: str = "en") -> str:
    """Render a minimal watch page embedding the given player JSON."""
    script = ""
    if player_response is not None:
        script = f"<script>var ytInitialPlayerResponse = {json.dumps(player_response)};</script>"
    return f'<html lang="{html_lang}"><head><title>Test</title></head><body>{script}</body></html>'


def timed_text(*lines: tuple[float, str]) -> str:
    """Render a legacy timed-text document from (start_seconds, text) pairs."""
    body = "".join(f'<text start="{start}" dur="1.5">{text}</text>' for start, text in lines)
    return f'<?xml version="1.0" encoding="utf-8" ?><transcript>{body}</transcript>'


class FakeYouTube:
    """httpx handler serving one watch page and per-URL caption documents.

    Records every request so tests can assert which tracks were fetched.
    """

    def __init__(self, page: str, tracks: dict[str, str | int] | None = None) -> None:
        self.page = page
        self.tracks = tracks or {}  # url -> document, or status code to fail with
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/watch":
            return httpx.Response(200, text=self.page)
        body = self.tracks.get(str(request.url))
        if body is None:
            return httpx.Response(404)
        if isinstance(body, int):
            return httpx.Response(body)
        return httpx.Response(200, text=body)

    @property
    def track_requests(self) -> list[str]:
        return [str(r.url) for r in self.requests if r.url.path != "/watch"]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def fake_youtube() -> Callable[..., FakeYouTube]:
    return FakeYouTube
