"""Pipeline orchestrator — captions, language, prompt, model call, parse."""

from __future__ import annotations

import asyncio

import httpx

from tdg.captions.resolver import parse_video_id
from tdg.captions.source import fetch_catalog, make_client
from tdg.captions.strategies import LanguagePreferences, transcript_from_catalog
from tdg.core.config import DetectionConfig, TDGConfig
from tdg.core.events import EventCallback, PipelineEvent
from tdg.core.models import CaptionCatalog, Transcript, VideoAnalysis
from tdg.detection.language import detect_language
from tdg.llm.client import complete
from tdg.llm.parser import parse_analysis
from tdg.llm.prompts import build_messages
from tdg.utils.console import console


async def _detect(catalog: CaptionCatalog, config: DetectionConfig, forced: str | None) -> str:
    if forced:
        return forced
    try:
        return detect_language(catalog, targets=config.targets, default=config.default_language)
    except Exception as e:
        console.print(f"[yellow]Language detection failed, using default:[/yellow] {e}")
        return config.default_language


async def analyze_video(
    video: str,
    config: TDGConfig,
    on_event: EventCallback | None = None,
    client: httpx.AsyncClient | None = None,
    language: str | None = None,
) -> VideoAnalysis:
    """Run the full analysis for one video.

    Transcript retrieval and language detection run concurrently once the
    caption catalog is in; the model call starts only after both finish.
    Nothing is kept between calls.

    Args:
        video: Watch URL, short link or bare video id.
        config: Full application config.
        on_event: Optional callback for streaming progress events.
        client: HTTP client for the caption requests. A temporary one is
            created and closed if omitted.
        language: Force the response language instead of detecting it.

    Returns:
        VideoAnalysis with the transcript, language and parsed result.

    Raises:
        ValueError: If no video id can be found in ``video``.
        NoCaptionsAvailable: The video lists no captions.
        TranscriptUnavailable: Every retrieval strategy failed.
        AnalysisRequestError: The model call failed.
        MalformedResponse: The reply could not be parsed.
    """

    def emit(stage: str, progress: float, message: str, data: dict | None = None) -> None:
        if on_event:
            on_event(PipelineEvent(stage=stage, progress=progress, message=message, data=data))

    video_id = parse_video_id(video)
    prefs = LanguagePreferences.from_config(config.captions)

    # Step 1: Catalog, then transcript and language side by side
    emit("captions", 0.0, f"Fetching caption list for {video_id}")
    if client is None:
        async with make_client(config.captions) as own_client:
            transcript, language = await _captions_and_language(
                own_client, video_id, prefs, config, language
            )
    else:
        transcript, language = await _captions_and_language(
            client, video_id, prefs, config, language
        )
    emit("captions", 1.0, "Transcript ready", {"source": transcript.source})
    emit("language", 1.0, f"Language: {language}", {"language": language})

    # Step 2: Prompt
    emit("prompt", 0.0, "Building prompt")
    messages = build_messages(transcript.text, language)
    emit("prompt", 1.0, "Prompt ready", {"characters": len(messages[0]["content"])})

    # Step 3: Model call
    emit("llm", 0.0, f"Asking {config.llm.model}")
    console.print(f"[bold]Analyzing with:[/bold] {config.llm.model}")
    raw = await complete(messages, config.llm)
    emit("llm", 1.0, "Response received")

    # Step 4: Parse
    emit("parse", 0.0, "Parsing response")
    result = parse_analysis(raw)
    emit("parse", 1.0, "Analysis complete")

    return VideoAnalysis(
        video_id=video_id,
        language=language,
        transcript=transcript,
        result=result,
        model_used=config.llm.model,
    )


async def _captions_and_language(
    client: httpx.AsyncClient,
    video_id: str,
    prefs: LanguagePreferences,
    config: TDGConfig,
    language: str | None,
) -> tuple[Transcript, str]:
    catalog = await fetch_catalog(client, video_id)
    console.print(f"[dim]{len(catalog.tracks)} caption track(s) listed for {video_id}[/dim]")
    transcript, language = await asyncio.gather(
        transcript_from_catalog(client, catalog, prefs),
        _detect(catalog, config.detection, language),
    )
    return transcript, language
