"""Heuristic language detection for a video page.

Signals are checked in a fixed order and the first confident one wins:

1. caption track hints in the player data (code prefix or display name)
2. the catalog's default track language
3. script ranges in the title and description
4. the document's ``lang`` attribute
5. locale meta tags
6. the configured default

Each step treats its own errors as "no signal". Detection never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup, Tag

from tdg.core.languages import primary_subtag
from tdg.core.models import CaptionCatalog, PageSignals
from tdg.utils.console import console


@dataclass(frozen=True)
class LanguageProfile:
    """How to recognise one target language in page signals."""

    code: str
    keywords: tuple[str, ...] = ()  # Lower-case fragments of track display names
    script: re.Pattern | None = None  # Characters unique to the language's script


PROFILES: dict[str, LanguageProfile] = {
    "ar": LanguageProfile(
        code="ar",
        keywords=("arabic", "العربية"),
        script=re.compile(
            r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]"
        ),
    ),
    "de": LanguageProfile(code="de", keywords=("german", "deutsch")),
    "he": LanguageProfile(code="he", keywords=("hebrew",), script=re.compile(r"[\u0590-\u05FF]")),
    "ru": LanguageProfile(code="ru", keywords=("russian",), script=re.compile(r"[\u0400-\u04FF]")),
    "ja": LanguageProfile(code="ja", keywords=("japanese",), script=re.compile(r"[\u3040-\u30FF]")),
    "ko": LanguageProfile(code="ko", keywords=("korean",), script=re.compile(r"[\uAC00-\uD7AF]")),
}

DEFAULT_TARGETS: tuple[str, ...] = ("ar", "de")


def profiles_for(codes: list[str] | tuple[str, ...]) -> list[LanguageProfile]:
    """Resolve configured target codes to profiles, keeping their order.

    Codes without a registered profile still match by code prefix.
    """
    return [PROFILES.get(code, LanguageProfile(code=code)) for code in codes]


def _matches_prefix(value: str | None, profile: LanguageProfile) -> bool:
    return bool(value) and primary_subtag(value) == profile.code


def signal_caption_hints(
    catalog: CaptionCatalog | None, signals: PageSignals, profiles: list[LanguageProfile]
) -> str | None:
    """Caption tracks in the player data whose code or name names a target."""
    player = signals.player_response or (catalog.player_response if catalog else {})
    renderer = (player.get("captions") or {}).get("playerCaptionsTracklistRenderer") or {}
    tracks = renderer.get("captionTracks") or []
    for profile in profiles:
        for track in tracks:
            code = str(track.get("languageCode") or "")
            name = track.get("name") or {}
            runs = "".join(r.get("text", "") for r in name.get("runs", []))
            label = str(name.get("simpleText") or runs).lower()
            if _matches_prefix(code, profile):
                return profile.code
            if any(keyword in label for keyword in profile.keywords):
                return profile.code
    return None


def signal_default_track(
    catalog: CaptionCatalog | None, signals: PageSignals, profiles: list[LanguageProfile]
) -> str | None:
    """Primary subtag of the catalog's default (or first) track."""
    if catalog is None:
        return None
    track = catalog.default_track
    if track is None:
        return None
    return primary_subtag(track.language_code) or None


def signal_script(
    catalog: CaptionCatalog | None, signals: PageSignals, profiles: list[LanguageProfile]
) -> str | None:
    """Target-specific script characters in the title or description."""
    text = f"{signals.title}\n{signals.description}"
    for profile in profiles:
        if profile.script is not None and profile.script.search(text):
            return profile.code
    return None


def signal_html_lang(
    catalog: CaptionCatalog | None, signals: PageSignals, profiles: list[LanguageProfile]
) -> str | None:
    for profile in profiles:
        if _matches_prefix(signals.html_lang, profile):
            return profile.code
    return None


def signal_meta_locale(
    catalog: CaptionCatalog | None, signals: PageSignals, profiles: list[LanguageProfile]
) -> str | None:
    for profile in profiles:
        for locale in signals.meta_locales:
            if _matches_prefix(locale, profile):
                return profile.code
    return None


Signal = Callable[[CaptionCatalog | None, PageSignals, list[LanguageProfile]], str | None]

SIGNALS: tuple[tuple[str, Signal], ...] = (
    ("caption hints", signal_caption_hints),
    ("default track", signal_default_track),
    ("script", signal_script),
    ("html lang", signal_html_lang),
    ("meta locale", signal_meta_locale),
)


def detect_language(
    catalog: CaptionCatalog | None,
    signals: PageSignals | None = None,
    targets: list[str] | tuple[str, ...] = DEFAULT_TARGETS,
    default: str = "en",
) -> str:
    """Determine the video's language from page signals.

    Args:
        catalog: Caption catalog, or None if fetching it failed.
        signals: Page signals. Derived from the catalog's page when omitted.
        targets: Target language codes, in precedence order.
        default: Returned when no signal is conclusive.

    Returns:
        A lower-case language code. Never raises.
    """
    profiles = profiles_for(targets)
    if signals is None:
        try:
            signals = (
                extract_page_signals(catalog.page_html, catalog.player_response)
                if catalog is not None
                else PageSignals()
            )
        except Exception as e:
            console.print(f"[dim]Page signals unavailable: {e}[/dim]")
            signals = PageSignals()

    for name, signal in SIGNALS:
        try:
            code = signal(catalog, signals, profiles)
        except Exception as e:
            console.print(f"[dim]Language signal '{name}' skipped: {e}[/dim]")
            continue
        if code:
            console.print(f"[dim]Language from {name}:[/dim] {code}")
            return code

    return default


# --- Page signal extraction ---

_LOCALE_KEYS = {"og:locale", "inlanguage", "content-language", "language"}
_KEY_ATTRS = ("property", "itemprop", "http-equiv", "name")


def _meta_key(tag: Tag) -> str:
    for attr in _KEY_ATTRS:
        value = tag.get(attr)
        if value:
            return str(value).strip().lower()
    return ""


def extract_page_signals(page_html: str, player_response: dict | None = None) -> PageSignals:
    """Collect language hints from a watch page and its player data.

    Title and description come from the player's ``videoDetails`` when
    present, falling back to the HTML ``<title>`` and description meta tag.
    """
    player_response = player_response or {}
    details = player_response.get("videoDetails") or {}
    soup = BeautifulSoup(page_html or "", "html.parser")

    title = str(details.get("title") or "")
    if not title and soup.title is not None:
        title = soup.title.get_text(strip=True)

    description = str(details.get("shortDescription") or "")
    locales = []
    for tag in soup.find_all("meta"):
        key = _meta_key(tag)
        content = str(tag.get("content") or "").strip()
        if not content:
            continue
        if key == "description" and not description:
            description = content
        elif key in _LOCALE_KEYS:
            locales.append(content)

    html_lang = None
    if soup.html is not None and soup.html.get("lang"):
        html_lang = str(soup.html["lang"]).strip() or None

    return PageSignals(
        player_response=player_response,
        title=title,
        description=description,
        html_lang=html_lang,
        meta_locales=locales,
    )
