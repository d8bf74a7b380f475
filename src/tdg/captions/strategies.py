"""Transcript retrieval strategy chain.

Strategies are tried strictly in order; each one picks a caption track from
the catalog and the driver downloads and normalizes it. A strategy that
raises, selects nothing, or yields an empty transcript is logged and the
next one runs. Strategies never run concurrently: every attempt costs real
requests against the platform.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable

import httpx

from tdg.captions.source import CaptionItem, fetch_catalog, fetch_track, make_client
from tdg.core.config import CaptionsConfig
from tdg.core.errors import TranscriptUnavailable
from tdg.core.languages import primary_subtag
from tdg.core.models import CaptionCatalog, CaptionTrack, Transcript, TranscriptLine
from tdg.utils.console import console


@dataclass
class LanguagePreferences:
    """Language precedence used when picking a track."""

    default_language: str = CaptionsConfig().default_language
    preferred: list[str] = field(default_factory=lambda: CaptionsConfig().preferred_languages)
    fallback: list[str] = field(default_factory=lambda: CaptionsConfig().fallback_languages)

    @classmethod
    def from_config(cls, config: CaptionsConfig) -> LanguagePreferences:
        return cls(
            default_language=config.default_language,
            preferred=list(config.preferred_languages),
            fallback=list(config.fallback_languages),
        )


SelectFn = Callable[[CaptionCatalog, LanguagePreferences], CaptionTrack | None]


@dataclass(frozen=True)
class Strategy:
    name: str
    select: SelectFn


def pick_preferred(tracks: list[CaptionTrack], languages: list[str]) -> CaptionTrack | None:
    """Return the first track in the earliest preferred language, else the first track.

    Language codes are compared by primary subtag, so "en-US" matches "en".
    """
    for lang in languages:
        wanted = primary_subtag(lang)
        for track in tracks:
            if primary_subtag(track.language_code) == wanted:
                return track
    return tracks[0] if tracks else None


def select_direct(catalog: CaptionCatalog, prefs: LanguagePreferences) -> CaptionTrack | None:
    """Platform default: a track in the default language, else the flagged default."""
    wanted = primary_subtag(prefs.default_language)
    for track in catalog.tracks:
        if primary_subtag(track.language_code) == wanted:
            return track
    return catalog.default_track


def select_manual(catalog: CaptionCatalog, prefs: LanguagePreferences) -> CaptionTrack | None:
    return pick_preferred([t for t in catalog.tracks if not t.is_generated], prefs.preferred)


def select_generated(catalog: CaptionCatalog, prefs: LanguagePreferences) -> CaptionTrack | None:
    return pick_preferred([t for t in catalog.tracks if t.is_generated], prefs.preferred)


def select_any(catalog: CaptionCatalog, prefs: LanguagePreferences) -> CaptionTrack | None:
    return pick_preferred(list(catalog.tracks), prefs.fallback)


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    Strategy("direct", select_direct),
    Strategy("manual", select_manual),
    Strategy("generated", select_generated),
    Strategy("any", select_any),
)


def normalize_items(items: list[CaptionItem]) -> list[TranscriptLine]:
    """Convert raw caption items to transcript lines.

    Whitespace-only items are dropped and inner whitespace is collapsed.
    The start offset is floored to whole seconds; items without one keep
    only their text.
    """
    lines = []
    for item in items:
        text = " ".join((item.text or "").split())
        if not text:
            continue
        start = None
        if item.start_ms is not None and item.start_ms >= 0:
            start = float(math.floor(item.start_ms / 1000))
        lines.append(TranscriptLine(text=text, start=start))
    return lines


async def _run_strategy(
    client: httpx.AsyncClient,
    catalog: CaptionCatalog,
    strategy: Strategy,
    prefs: LanguagePreferences,
) -> Transcript | None:
    track = strategy.select(catalog, prefs)
    if track is None:
        return None
    items = await fetch_track(client, track)
    lines = normalize_items(items)
    if not lines:
        return None
    return Transcript(
        lines=lines,
        language_hint=primary_subtag(track.language_code) or None,
        source=strategy.name,
    )


async def transcript_from_catalog(
    client: httpx.AsyncClient,
    catalog: CaptionCatalog,
    prefs: LanguagePreferences | None = None,
    strategies: tuple[Strategy, ...] = DEFAULT_STRATEGIES,
) -> Transcript:
    """Run the strategy chain over an already fetched catalog.

    Raises:
        TranscriptUnavailable: If every strategy fails.
    """
    prefs = prefs or LanguagePreferences()
    attempted: list[str] = []
    failures: dict[str, str] = {}

    for strategy in strategies:
        attempted.append(strategy.name)
        try:
            transcript = await _run_strategy(client, catalog, strategy, prefs)
        except Exception as e:
            failures[strategy.name] = str(e)
            console.print(f"[yellow]Transcript strategy '{strategy.name}' failed:[/yellow] {e}")
            continue

        if transcript is None:
            failures[strategy.name] = "no usable track"
            console.print(f"[dim]Transcript strategy '{strategy.name}' found nothing.[/dim]")
            continue

        console.print(
            f"[green]Transcript via '{strategy.name}':[/green] "
            f"{len(transcript.lines)} lines ({transcript.language_hint or 'unknown language'})"
        )
        return transcript

    raise TranscriptUnavailable(catalog.video_id, attempted, failures)


async def acquire_transcript(
    video_id: str,
    client: httpx.AsyncClient | None = None,
    config: CaptionsConfig | None = None,
) -> Transcript:
    """Fetch the caption catalog for a video and run the strategy chain.

    Args:
        video_id: YouTube video id.
        client: HTTP client to use. A temporary one is created and closed
            if omitted.
        config: Caption settings (language precedence, timeouts).

    Raises:
        NoCaptionsAvailable: The video lists no caption tracks. No strategy
            is attempted.
        TranscriptUnavailable: Every strategy failed.
    """
    config = config or CaptionsConfig()
    prefs = LanguagePreferences.from_config(config)

    if client is None:
        async with make_client(config) as own_client:
            catalog = await fetch_catalog(own_client, video_id)
            return await transcript_from_catalog(own_client, catalog, prefs)

    catalog = await fetch_catalog(client, video_id)
    return await transcript_from_catalog(client, catalog, prefs)
