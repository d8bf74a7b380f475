"""tdg analyze command — transcript analysis of a YouTube video."""

from __future__ import annotations

import asyncio
import json
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.text import Text

from tdg.core.config import load_config
from tdg.core.errors import MalformedResponse, TDGError
from tdg.core.languages import language_name, text_direction
from tdg.core.models import VideoAnalysis
from tdg.llm.parser import fallback_key_points
from tdg.utils.console import console


def render_analysis(analysis: VideoAnalysis) -> None:
    """Print an analysis as Rich panels."""
    result = analysis.result
    direction = text_direction(analysis.language)

    console.print(
        f"[bold]Video:[/bold] {analysis.video_id}   "
        f"[bold]Language:[/bold] {language_name(analysis.language)}   "
        f"[bold]Transcript:[/bold] {len(analysis.transcript.lines)} lines "
        f"via '{analysis.transcript.source}'"
    )
    if direction == "rtl":
        console.print("[dim]Right-to-left text; terminal rendering may reorder characters.[/dim]")

    points = result.key_points or fallback_key_points(result.summary)
    bullets = "\n".join(f"• {point}" for point in points) or "No key points available"
    justify = "right" if direction == "rtl" else "left"

    sections = [
        ("Abstract", result.abstract or "No abstract available"),
        ("Key Concepts", bullets),
        ("Category", result.category or "Uncategorized"),
        ("Detailed Summary", result.summary or "No detailed summary available"),
    ]
    for title, body in sections:
        console.print(Panel(Text(body, justify=justify), title=f"[bold]{title}[/bold]", expand=True))


def analyze(
    video: Annotated[
        str,
        typer.Argument(help="YouTube URL or 11-character video id."),
    ],
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="LiteLLM model string (e.g. deepseek/deepseek-chat)."),
    ] = None,
    language: Annotated[
        Optional[str],
        typer.Option("--language", "-l", help="Answer in this language instead of detecting it."),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option(help="Model request timeout in seconds."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON on stdout."),
    ] = False,
) -> None:
    """Fetch a video's transcript and analyze it with a chat model."""
    from tdg.core.pipeline import analyze_video

    overrides = {"llm.model": model, "llm.timeout": timeout}
    config = load_config(**overrides)

    try:
        analysis = asyncio.run(analyze_video(video, config, language=language))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except MalformedResponse as e:
        console.print(f"[red]{e}[/red]")
        console.print(Panel(e.raw_text or "", title="Raw response", border_style="dim"))
        raise typer.Exit(1)
    except TDGError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if as_json:
        payload = {
            "video_id": analysis.video_id,
            "language": analysis.language,
            "direction": text_direction(analysis.language),
            "model": analysis.model_used,
            **analysis.result.to_dict(),
        }
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    render_analysis(analysis)
