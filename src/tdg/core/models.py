"""Shared data models for TubeDigest."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TranscriptLine:
    """One caption line. ``start`` is whole seconds, None if the source had no offset."""

    text: str
    start: float | None = None


@dataclass
class Transcript:
    """A normalized transcript produced by one retrieval strategy."""

    lines: list[TranscriptLine]
    language_hint: str | None = None
    source: str | None = None  # Name of the strategy that produced it

    @property
    def text(self) -> str:
        """Timestamped transcript, one ``[m:ss] text`` line per caption."""
        from tdg.captions.formatter import format_transcript

        return format_transcript(self.lines)

    @property
    def plain_text(self) -> str:
        return " ".join(line.text for line in self.lines)

    def is_empty(self) -> bool:
        return not any(line.text.strip() for line in self.lines)


@dataclass(frozen=True)
class CaptionTrack:
    """One caption track offered by the video platform."""

    language_code: str
    base_url: str
    is_generated: bool = False
    is_default: bool = False
    name: str = ""


@dataclass
class CaptionCatalog:
    """All caption tracks of one video, plus the page data they came from."""

    video_id: str
    tracks: list[CaptionTrack]
    player_response: dict = field(default_factory=dict)
    page_html: str = ""

    @property
    def default_track(self) -> CaptionTrack | None:
        for track in self.tracks:
            if track.is_default:
                return track
        return self.tracks[0] if self.tracks else None


@dataclass
class PageSignals:
    """Language hints scraped from the video page."""

    player_response: dict = field(default_factory=dict)
    title: str = ""
    description: str = ""
    html_lang: str | None = None
    meta_locales: list[str] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Structured analysis parsed from the model's reply."""

    summary: str
    abstract: str = ""
    key_points: list[str] = field(default_factory=list)
    category: str = ""

    def to_dict(self) -> dict:
        return {
            "abstract": self.abstract,
            "key_points": list(self.key_points),
            "category": self.category,
            "summary": self.summary,
        }


@dataclass
class VideoAnalysis:
    """Output of the full pipeline for one video."""

    video_id: str
    language: str
    transcript: Transcript
    result: AnalysisResult
    model_used: str = ""
