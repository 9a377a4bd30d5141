from typing import Any, Dict, List, Optional

import pytest

from pocketllm.config import Settings
from pocketllm.inference.base import BaseInferenceEngine
from pocketllm.models.model_info import CandidateModel


class FakeEngine(BaseInferenceEngine):
    def __init__(self, candidate: CandidateModel, fail: bool = False, output: Any = ""):
        super().__init__(candidate)
        self.fail = fail
        self.output = output
        self.load_calls = 0
        self.unload_calls = 0
        self.calls: List[Dict[str, Any]] = []

    def load(self, progress_callback=None) -> None:
        self.load_calls += 1
        if self.fail:
            raise RuntimeError(f"cannot load {self.model_id}")
        if progress_callback is not None:
            progress_callback(0.5)
            progress_callback(1.0)

    def unload(self) -> None:
        self.unload_calls += 1

    def generate(self, inputs: Any, params: Dict[str, Any]) -> str:
        self.calls.append({"inputs": inputs, "params": params})
        if callable(self.output):
            return self.output(inputs)
        return self.output


class FakeEngineFactory:
    def __init__(self, failing: Optional[List[str]] = None, output: Any = ""):
        self.failing = set(failing or [])
        self.output = output
        self.engines: List[FakeEngine] = []

    def __call__(self, candidate: CandidateModel) -> FakeEngine:
        engine = FakeEngine(candidate, fail=candidate.model_id in self.failing, output=self.output)
        self.engines.append(engine)
        return engine


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, model_cache_dir="/tmp/pocketllm-test-models")


@pytest.fixture
def engine_factory():
    return FakeEngineFactory()


@pytest.fixture
def make_engine_factory():
    return FakeEngineFactory
