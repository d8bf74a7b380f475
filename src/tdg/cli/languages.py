"""tdg languages command — list languages with tuned prompts and detection."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from tdg.core.config import load_config
from tdg.core.languages import DISPLAY_NAMES, text_direction
from tdg.detection.language import PROFILES

console = Console()


def languages() -> None:
    """List the languages the prompt names and the detector recognises."""
    config = load_config()
    targets = config.detection.targets

    table = Table(title="Languages")
    table.add_column("Code", style="bold cyan", width=5)
    table.add_column("Name", width=12)
    table.add_column("Detected", width=9)
    table.add_column("Script scan", width=11)
    table.add_column("Direction", width=9)

    for code in sorted(set(DISPLAY_NAMES) | set(PROFILES) | set(targets)):
        profile = PROFILES.get(code)
        table.add_row(
            code,
            DISPLAY_NAMES.get(code, "-"),
            "yes" if code in targets else "-",
            "yes" if profile is not None and profile.script is not None else "-",
            text_direction(code),
        )

    console.print(table)
    console.print(
        f"\n[dim]Detection order: {', '.join(targets) or 'none'}; "
        f"fallback {config.detection.default_language}. "
        "Set detection.targets in tdg.toml to change it.[/dim]"
    )
