"""Pipeline event system for streaming progress to external consumers.

Provides a lightweight callback mechanism that the pipeline emits events through.
Consumers (CLI status spinners, a web UI) register a callback to receive
real-time updates without modifying pipeline logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class PipelineEvent:
    """A progress event emitted during pipeline execution.

    Attributes:
        stage: Pipeline stage name (captions, language, prompt, llm, parse).
        progress: Progress within this stage, 0.0 to 1.0.
        message: Human-readable status message.
        data: Optional payload (e.g. strategy name, detected language).
    """

    stage: str
    progress: float
    message: str
    data: dict | None = field(default=None)


EventCallback = Callable[[PipelineEvent], None]
