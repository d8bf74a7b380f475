"""Parse the model's free-text analysis into an AnalysisResult.

Models rarely follow a template exactly, so every field is looked up with two
patterns in order:

- decorated heading: ``**Abstract:**``, ``**Abstract**:``, ``## Abstract`` or
  ``### **1. Abstract**``; the section runs to the next decorated heading or
  the end of the text.
- plain heading: ``Abstract:``; the section runs to the next line that starts
  with any known heading keyword, or the end of the text.

The first pattern with a non-empty capture wins. Only the summary is
mandatory.
"""

from __future__ import annotations

import re

from tdg.core.errors import MalformedResponse
from tdg.core.models import AnalysisResult

MIN_ABSTRACT_LENGTH = 10
MIN_SUMMARY_LENGTH = 50

FIELD_HEADINGS: dict[str, tuple[str, ...]] = {
    "abstract": ("Abstract",),
    "key_points": ("Key Concepts", "Key Points"),
    "category": ("Category",),
    "summary": ("Detailed Summary", "Summary"),
}

BULLET_MARKERS = ("•", "-")

_ALL_KEYWORDS = "|".join(
    re.escape(heading) for headings in FIELD_HEADINGS.values() for heading in headings
)
# Optional "1." / "2)" numbering in front of a heading
_NUMBERING = r"(?:\d+[.)][ \t]*)?"
_HASHES = r"\#{1,6}[ \t]*"
_DECORATED_START = rf"^[ \t]*{_NUMBERING}(?:\*\*|{_HASHES})"
_FLAGS = re.MULTILINE | re.DOTALL | re.IGNORECASE


def _decorated_pattern(headings: tuple[str, ...]) -> re.Pattern:
    names = rf"{_NUMBERING}(?:{'|'.join(re.escape(h) for h in headings)})"
    bold = rf"(?:{_HASHES})?{_NUMBERING}\*\*[ \t]*{names}[ \t]*:?[ \t]*\*\*[ \t]*:?"
    hashed = rf"{_HASHES}{names}[ \t]*:?"
    return re.compile(
        rf"^[ \t]*{_NUMBERING}(?:{bold}|{hashed})"
        rf"(.*?)(?={_DECORATED_START}|\Z)",
        _FLAGS,
    )


def _plain_pattern(headings: tuple[str, ...]) -> re.Pattern:
    names = "|".join(re.escape(h) for h in headings)
    return re.compile(
        rf"^[ \t]*{_NUMBERING}(?:{names})[ \t]*:"
        rf"(.*?)(?=^[ \t]*{_NUMBERING}[*# \t]*{_NUMBERING}(?:{_ALL_KEYWORDS})\b|\Z)",
        _FLAGS,
    )


_PATTERNS: dict[str, tuple[re.Pattern, re.Pattern]] = {
    field: (_decorated_pattern(headings), _plain_pattern(headings))
    for field, headings in FIELD_HEADINGS.items()
}


def extract_section(text: str, field: str) -> str:
    """Return the stripped section body for a field, or "" if not found."""
    for pattern in _PATTERNS[field]:
        m = pattern.search(text)
        if m:
            body = m.group(1).strip()
            if body:
                return body
    return ""


def extract_bullets(section: str) -> list[str]:
    """Keep only bullet lines, without their markers."""
    points = []
    for line in section.splitlines():
        line = line.strip()
        if not line.startswith(BULLET_MARKERS):
            continue
        point = line[1:].strip()
        if point:
            points.append(point)
    return points


def parse_analysis(raw_text: str) -> AnalysisResult:
    """Turn a model reply into an AnalysisResult.

    Abstract, key points and category are optional; an abstract shorter
    than MIN_ABSTRACT_LENGTH is dropped.

    Raises:
        MalformedResponse: If the summary is missing or shorter than
            MIN_SUMMARY_LENGTH, or the text cannot be processed at all.
            The raw text is attached for diagnostics.
    """
    try:
        abstract = extract_section(raw_text, "abstract")
        key_points = extract_bullets(extract_section(raw_text, "key_points"))
        category = extract_section(raw_text, "category")
        summary = extract_section(raw_text, "summary")
    except Exception as e:
        raise MalformedResponse(f"Failed to parse AI response: {e}", raw_text) from e

    if len(summary) < MIN_SUMMARY_LENGTH:
        raise MalformedResponse(
            f"Failed to parse AI response: summary missing or shorter than "
            f"{MIN_SUMMARY_LENGTH} characters",
            raw_text,
        )

    if len(abstract) < MIN_ABSTRACT_LENGTH:
        abstract = ""

    return AnalysisResult(
        abstract=abstract,
        key_points=key_points,
        category=category,
        summary=summary,
    )


def fallback_key_points(summary: str, limit: int = 3) -> list[str]:
    """Derive key points from the summary when the reply had no bullet list.

    Takes the first ``limit`` sentences longer than 20 characters.
    """
    sentences = [s.strip() for s in summary.split(".")]
    return [f"{s}." for s in sentences if len(s) > 20][:limit]
