"""TubeDigest CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from tdg import __version__
from tdg.cli.analyze import analyze
from tdg.cli.languages import languages
from tdg.cli.transcript import transcript

app = typer.Typer(
    name="tdg",
    help="TubeDigest — Transcript-based analysis of YouTube videos.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tdg {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """TubeDigest — Transcript-based analysis of YouTube videos."""
    # Load .env file for API keys (DEEPSEEK_API_KEY, OPENAI_API_KEY, etc.)
    # Does not override existing env vars; shell exports take precedence
    load_dotenv(override=False)


app.command("analyze")(analyze)
app.command("transcript")(transcript)
app.command("languages")(languages)
