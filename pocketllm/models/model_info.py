from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from pocketllm.models.enums import ModelFamily


@dataclass(frozen=True)
class CandidateModel:
    model_id: str
    family: ModelFamily


@dataclass(frozen=True)
class ModelConfig:
    name: str
    size: str
    context_window: int
    max_tokens: int
    model_url: str
    candidates: Tuple[CandidateModel, ...] = field(default_factory=tuple)


@dataclass
class ModelStatus:
    loaded: bool = False
    loading: bool = False
    error: Optional[str] = None
    progress: int = 0


@dataclass
class PerformanceMetrics:
    load_time: float = 0.0
    inference_time: float = 0.0
    memory_usage: int = 0
    tokens_per_second: float = 0.0
