from __future__ import annotations

import asyncio
import math
from dataclasses import replace
from typing import Callable, Optional, Sequence

from pocketllm.inference.base import BaseInferenceEngine
from pocketllm.models.model_info import CandidateModel, ModelStatus, PerformanceMetrics
from pocketllm.utils.exceptions import ModelLoadError, ModelNotLoadedError
from pocketllm.utils.logger import logger
from pocketllm.utils.performance import PerformanceMonitor

EngineFactory = Callable[[CandidateModel], BaseInferenceEngine]


def _to_percent(fraction: float) -> int:
    percent = math.floor(fraction * 100 + 0.5)
    return max(0, min(100, percent))


class ModelLoader:
    """Holds at most one loaded engine and tries candidates in order to get one."""

    def __init__(
        self,
        name: str,
        engine_factory: EngineFactory,
        monitor: Optional[PerformanceMonitor] = None,
    ):
        self.name = name
        self._engine_factory = engine_factory
        self._monitor = monitor or PerformanceMonitor()
        self._engine: Optional[BaseInferenceEngine] = None
        self._current_key = ""
        self._current_candidate: Optional[CandidateModel] = None
        self._status = ModelStatus()
        self.load_metrics: Optional[PerformanceMetrics] = None
        self._lock = asyncio.Lock()

    @property
    def current_key(self) -> str:
        return self._current_key

    @property
    def current_candidate(self) -> Optional[CandidateModel]:
        return self._current_candidate

    def get_status(self) -> ModelStatus:
        return replace(self._status)

    def _on_progress(self, fraction: float) -> None:
        self._status.progress = _to_percent(fraction)

    async def load(
        self, model_key: str, candidates: Sequence[CandidateModel]
    ) -> CandidateModel:
        async with self._lock:
            return await self._load_locked(model_key, candidates)

    async def _load_locked(
        self, model_key: str, candidates: Sequence[CandidateModel]
    ) -> CandidateModel:
        if self._engine is not None and self._current_key == model_key:
            return self._current_candidate

        self._status = ModelStatus(loading=True)
        try:
            self._monitor.start_measurement()
            engine = await self._load_first_available(candidates)
        except Exception as e:
            self._drop_engine()
            self._status = ModelStatus(error=str(e))
            logger.error(f"Failed to load {self.name} model: {e}")
            raise

        self._drop_engine()
        self._engine = engine
        self._current_key = model_key
        self._current_candidate = engine.candidate

        metrics = self._monitor.end_measurement()
        metrics.load_time = metrics.inference_time
        self.load_metrics = metrics

        self._status = ModelStatus(loaded=True, progress=100)
        logger.info(
            f"{self.name} model loaded: {engine.model_id} "
            f"(key={model_key}, {metrics.load_time:.0f}ms)"
        )
        return engine.candidate

    async def _load_first_available(
        self, candidates: Sequence[CandidateModel]
    ) -> BaseInferenceEngine:
        if not candidates:
            raise ModelLoadError(f"Failed to load any {self.name} model")

        last_index = len(candidates) - 1
        for index, candidate in enumerate(candidates):
            logger.info(f"Trying to load {self.name} model: {candidate.model_id}")
            engine = self._engine_factory(candidate)
            try:
                await asyncio.to_thread(engine.load, self._on_progress)
            except Exception as e:
                logger.warning(f"Failed to load model {candidate.model_id}: {e}")
                if index == last_index:
                    raise
                continue
            return engine

    def _drop_engine(self) -> None:
        if self._engine is not None:
            self._engine.unload()
        self._engine = None
        self._current_key = ""
        self._current_candidate = None

    def require_engine(self) -> BaseInferenceEngine:
        if self._engine is None:
            raise ModelNotLoadedError()
        return self._engine

    def unload(self) -> None:
        if self._engine is not None:
            logger.info(f"Unloading {self.name} model: {self._engine.model_id}")
        self._drop_engine()
        self._status = ModelStatus()
