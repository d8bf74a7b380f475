"""Caption source adapter: caption catalog and timed-text tracks from YouTube.

The watch page embeds the player configuration as a JavaScript assignment
(``ytInitialPlayerResponse = {...};``). Its ``captions`` section lists every
caption track with a ``baseUrl`` that serves the track as timed-text XML.

Nothing here retries; a failed request surfaces to the strategy chain.
"""

from __future__ import annotations

import html
import json
import re
import xml.etree.ElementTree as ET
from dataclasses import replace
from typing import NamedTuple

import httpx

from tdg.core.config import CaptionsConfig
from tdg.core.errors import NoCaptionsAvailable
from tdg.core.models import CaptionCatalog, CaptionTrack
from tdg.utils.console import console

YOUTUBE = "https://www.youtube.com"
WATCH_URL = f"{YOUTUBE}/watch"

_PLAYER_RESPONSE_START = re.compile(r"ytInitialPlayerResponse\s*=\s*(?=\{)")


class CaptionItem(NamedTuple):
    """One raw caption element as served by the platform."""

    text: str
    start_ms: int | None
    duration_ms: int | None = None


def make_client(config: CaptionsConfig | None = None) -> httpx.AsyncClient:
    """Create an HTTP client with browser-like headers and the consent cookie set."""
    config = config or CaptionsConfig()
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout),
        headers={
            "User-Agent": config.user_agent,
            "Accept-Language": config.accept_language,
        },
        follow_redirects=True,
    )
    # Skips the EU cookie consent interstitial
    client.cookies.set("CONSENT", "YES+1", domain=".youtube.com")
    return client


def extract_player_response(page_html: str) -> dict | None:
    """Pull the embedded player JSON out of a watch page.

    Returns None if the blob is missing or is not valid JSON.
    """
    m = _PLAYER_RESPONSE_START.search(page_html or "")
    if not m:
        return None
    try:
        data, _ = json.JSONDecoder().raw_decode(page_html, m.end())
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _track_name(raw: dict) -> str:
    name = raw.get("name") or {}
    if "simpleText" in name:
        return str(name["simpleText"])
    return "".join(str(run.get("text", "")) for run in name.get("runs", []))


def parse_caption_tracks(player_response: dict) -> list[CaptionTrack]:
    """Build track descriptors from the player JSON, skipping unusable entries."""
    renderer = (player_response.get("captions") or {}).get("playerCaptionsTracklistRenderer") or {}
    raw_tracks = renderer.get("captionTracks") or []

    default_index = None
    for audio_track in renderer.get("audioTracks") or []:
        if "defaultCaptionTrackIndex" in audio_track:
            default_index = audio_track["defaultCaptionTrackIndex"]
            break

    tracks = []
    for i, raw in enumerate(raw_tracks):
        if not isinstance(raw, dict) or not raw.get("baseUrl"):
            continue
        tracks.append(
            CaptionTrack(
                language_code=str(raw.get("languageCode") or ""),
                base_url=str(raw["baseUrl"]),
                is_generated=raw.get("kind") == "asr" or str(raw.get("vssId", "")).startswith("a."),
                is_default=(i == default_index),
                name=_track_name(raw),
            )
        )

    if tracks and not any(t.is_default for t in tracks):
        tracks[0] = replace(tracks[0], is_default=True)
    return tracks


async def fetch_catalog(client: httpx.AsyncClient, video_id: str) -> CaptionCatalog:
    """Fetch the caption catalog for a video.

    Raises:
        NoCaptionsAvailable: If the page cannot be loaded or parsed, or it
            lists no caption tracks.
    """
    try:
        response = await client.get(WATCH_URL, params={"v": video_id, "hl": "en"})
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise NoCaptionsAvailable(video_id, f"watch page request failed ({e})") from e

    page_html = response.text
    player_response = extract_player_response(page_html)
    if player_response is None:
        raise NoCaptionsAvailable(video_id, "player data missing or malformed")

    status = (player_response.get("playabilityStatus") or {}).get("status", "OK")
    if status != "OK":
        console.print(f"[dim]Playability status for {video_id}: {status}[/dim]")

    try:
        tracks = parse_caption_tracks(player_response)
    except (AttributeError, TypeError, ValueError) as e:
        raise NoCaptionsAvailable(video_id, f"caption list malformed ({e})") from e

    if not tracks:
        raise NoCaptionsAvailable(video_id)

    return CaptionCatalog(
        video_id=video_id,
        tracks=tracks,
        player_response=player_response,
        page_html=page_html,
    )


def _ms(value: str | None, scale: float) -> int | None:
    if value is None or value == "":
        return None
    return int(round(float(value) * scale))


def parse_timed_text(document: str) -> list[CaptionItem]:
    """Parse a timed-text document into caption items.

    Supports the legacy ``<text start="1.5" dur="2.0">`` dialect (seconds)
    and format 3 ``<p t="1500" d="2000">`` (milliseconds).

    Raises:
        ValueError: If the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise ValueError(f"Malformed timed-text document: {e}") from e

    items = []
    for elem in root.iter():
        if elem.tag == "text":
            start, dur, scale = elem.get("start"), elem.get("dur"), 1000.0
        elif elem.tag == "p":
            start, dur, scale = elem.get("t"), elem.get("d"), 1.0
        else:
            continue
        # Legacy tracks escape entities twice ("&amp;#39;")
        text = html.unescape("".join(elem.itertext()))
        items.append(CaptionItem(text=text, start_ms=_ms(start, scale), duration_ms=_ms(dur, scale)))
    return items


async def fetch_track(client: httpx.AsyncClient, track: CaptionTrack) -> list[CaptionItem]:
    """Download and parse one caption track."""
    response = await client.get(track.base_url)
    response.raise_for_status()
    if not response.text.strip():
        return []
    return parse_timed_text(response.text)
