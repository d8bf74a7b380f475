"""Flatten transcript lines to text and read them back."""

from __future__ import annotations

import re

from tdg.core.models import TranscriptLine

_TIMESTAMPED = re.compile(r"^\[(\d+):([0-5]\d)\]\s?(.*)$")


def format_timestamp(seconds: float) -> str:
    """Format seconds as m:ss (minutes are not wrapped into hours)."""
    total = int(seconds)
    return f"{total // 60}:{total % 60:02d}"


def format_transcript(lines: list[TranscriptLine]) -> str:
    """Render lines as ``[m:ss] text``, or bare text when a line has no start."""
    rendered = []
    for line in lines:
        if line.start is not None:
            rendered.append(f"[{format_timestamp(line.start)}] {line.text}")
        else:
            rendered.append(line.text)
    return "\n".join(rendered)


def parse_transcript_text(text: str) -> list[TranscriptLine]:
    """Parse text produced by format_transcript back into lines.

    Blank lines are skipped. Lines without a timestamp prefix come back
    with ``start=None``.
    """
    lines = []
    for raw in text.splitlines():
        raw = raw.strip()
        if not raw:
            continue
        m = _TIMESTAMPED.match(raw)
        if m:
            minutes, seconds, body = m.groups()
            body = body.strip()
            if body:
                lines.append(TranscriptLine(text=body, start=float(int(minutes) * 60 + int(seconds))))
            continue
        lines.append(TranscriptLine(text=raw))
    return lines
