"""tdg transcript command — print or save a video's transcript."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from tdg.captions.resolver import parse_video_id
from tdg.core.config import load_config
from tdg.core.errors import TDGError
from tdg.utils.console import console


def transcript(
    video: Annotated[
        str,
        typer.Argument(help="YouTube URL or 11-character video id."),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the transcript to this file."),
    ] = None,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Omit [m:ss] timestamps."),
    ] = False,
) -> None:
    """Fetch a video's transcript using the caption fallback chain."""
    from tdg.captions.strategies import acquire_transcript

    try:
        video_id = parse_video_id(video)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    config = load_config()
    try:
        result = asyncio.run(acquire_transcript(video_id, config=config.captions))
    except TDGError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    text = result.plain_text if plain else result.text
    if output is None:
        typer.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Saved:[/green] {output}")
