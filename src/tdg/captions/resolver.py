"""Resolve user input (watch URL, short link or bare id) to a video id."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

_VIDEO_ID = re.compile(r"[A-Za-z0-9_-]{11}")


def is_url(value: str) -> bool:
    """Check if the input looks like a URL."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https")


def parse_video_id(value: str) -> str:
    """Extract the 11-character video id from a URL or bare id.

    Accepts youtube.com/watch?v=, youtu.be/, /shorts/, /embed/ and /live/ URLs.

    Raises:
        ValueError: If no video id can be found.
    """
    s = (value or "").strip()
    if _VIDEO_ID.fullmatch(s):
        return s

    parsed = urlparse(s if is_url(s) else f"https://{s}")
    host = (parsed.netloc or "").lower()
    candidate = ""
    if host.endswith("youtu.be"):
        candidate = parsed.path.strip("/").split("/")[0]
    elif "youtube.com" in host:
        qs = parse_qs(parsed.query)
        if qs.get("v"):
            candidate = qs["v"][0]
        else:
            parts = parsed.path.strip("/").split("/")
            if len(parts) >= 2 and parts[0] in ("shorts", "embed", "live", "v"):
                candidate = parts[1]

    if _VIDEO_ID.fullmatch(candidate):
        return candidate
    raise ValueError(f"Could not find a YouTube video id in: {value!r}")
