"""Error types raised by TubeDigest."""

from __future__ import annotations


class TDGError(Exception):
    """Base class for all TubeDigest errors."""


class NoCaptionsAvailable(TDGError):
    """The video has no caption catalog, or its page could not be parsed."""

    def __init__(self, video_id: str, reason: str = "no caption tracks found") -> None:
        self.video_id = video_id
        self.reason = reason
        super().__init__(f"No captions available for {video_id}: {reason}")


class TranscriptUnavailable(TDGError):
    """Every retrieval strategy was tried and none produced a transcript."""

    def __init__(self, video_id: str, attempted: list[str], failures: dict[str, str] | None = None):
        self.video_id = video_id
        self.attempted = list(attempted)
        self.failures = dict(failures or {})
        super().__init__(
            f"No transcript available for {video_id} "
            f"(tried: {', '.join(self.attempted) or 'nothing'})"
        )


class MalformedResponse(TDGError):
    """The model's reply could not be turned into a valid analysis."""

    def __init__(self, message: str, raw_text: str) -> None:
        self.raw_text = raw_text
        super().__init__(message)


class AnalysisRequestError(TDGError):
    """The chat-completion request itself failed."""
