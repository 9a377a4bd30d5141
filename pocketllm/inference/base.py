from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from pocketllm.models.model_info import CandidateModel

ProgressCallback = Callable[[float], None]


class BaseInferenceEngine(ABC):
    def __init__(self, candidate: CandidateModel):
        self.candidate = candidate

    @property
    def model_id(self) -> str:
        return self.candidate.model_id

    @abstractmethod
    def load(self, progress_callback: Optional[ProgressCallback] = None) -> None:
        pass

    @abstractmethod
    def unload(self) -> None:
        pass

    @abstractmethod
    def generate(self, inputs: Any, params: Dict[str, Any]) -> str:
        """Run the pipeline and return the raw generated text."""
