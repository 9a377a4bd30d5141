from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pocketllm.models.model_info import PerformanceMetrics


@dataclass
class SummarizeRequest:
    text: str
    max_length: Optional[int] = None
    min_length: Optional[int] = None


@dataclass
class SummarizeResponse:
    summary: str
    metrics: PerformanceMetrics
    input_tokens: int
    output_tokens: int


@dataclass
class SystemContext:
    """Host description embedded in command prompts. `kernel` is accepted for
    client compatibility and not used in prompts."""

    os: str = "Unknown"
    arch: str = "Unknown"
    shell: str = "Unknown"
    current_directory: str = "Unknown"
    installed_tools: List[str] = field(default_factory=list)
    kernel: Optional[str] = None


@dataclass
class CommandRequest:
    """`task` and `output_format` are accepted for client compatibility; the
    prompt wording is fixed per model family."""

    goal: str
    system: SystemContext = field(default_factory=SystemContext)
    task: str = "Task: Terminal command suggestion"
    output_format: str = "Provide 1-3 terminal commands only."


@dataclass
class CommandResponse:
    commands: List[str]
    metrics: PerformanceMetrics
    input_tokens: int
    output_tokens: int
