from __future__ import annotations

import asyncio
from typing import Dict, Optional

from pocketllm.config import Settings, settings as default_settings
from pocketllm.core.model_loader import EngineFactory, ModelLoader
from pocketllm.inference.decoding import summary_decoding_params
from pocketllm.inference.llm_engine import TransformersEngine
from pocketllm.inference.prompts import format_summary_prompt
from pocketllm.models.model_info import CandidateModel, ModelConfig, ModelStatus
from pocketllm.models.registry import SUMMARY_MODELS
from pocketllm.models.requests import SummarizeRequest, SummarizeResponse
from pocketllm.utils.exceptions import UnknownModelError
from pocketllm.utils.logger import logger
from pocketllm.utils.performance import PerformanceMonitor
from pocketllm.utils.tokenizer import estimate_tokens, truncate_text, validate_token_limits


class SummarizationService:
    def __init__(
        self,
        config: Optional[Settings] = None,
        engine_factory: Optional[EngineFactory] = None,
        monitor: Optional[PerformanceMonitor] = None,
    ):
        self._settings = config or default_settings
        self._monitor = monitor or PerformanceMonitor()
        factory = engine_factory or (
            lambda candidate: TransformersEngine(candidate, self._settings)
        )
        self._loader = ModelLoader("summarization", factory, self._monitor)

    def get_status(self) -> ModelStatus:
        return self._loader.get_status()

    @property
    def default_model(self) -> str:
        return self._settings.default_summary_model

    def available_models(self) -> Dict[str, ModelConfig]:
        return dict(SUMMARY_MODELS)

    async def load_model(self, model_key: Optional[str] = None) -> CandidateModel:
        model_key = model_key or self.default_model
        config = SUMMARY_MODELS.get(model_key)
        if config is None:
            raise UnknownModelError(model_key)
        return await self._loader.load(model_key, config.candidates)

    async def summarize(self, request: SummarizeRequest) -> SummarizeResponse:
        engine = self._loader.require_engine()

        text = request.text
        if not validate_token_limits(
            text, self._settings.input_token_min, self._settings.input_token_max
        ):
            text = truncate_text(text, self._settings.input_token_max)

        prompt = format_summary_prompt(text)
        params = summary_decoding_params(
            self._settings.output_token_max,
            max_length=request.max_length,
            min_length=request.min_length,
        )

        self._monitor.start_measurement()
        try:
            generated = await asyncio.to_thread(engine.generate, prompt, params)
        except Exception as e:
            logger.error(f"Summarization failed: {e}")
            raise
        metrics = self._monitor.end_measurement()

        if engine.candidate.family.echoes_prompt:
            generated = generated.replace(prompt, "", 1)
        summary = generated.strip()

        output_tokens = estimate_tokens(summary)
        metrics.tokens_per_second = self._monitor.calculate_tokens_per_second(
            output_tokens, metrics.inference_time
        )
        return SummarizeResponse(
            summary=summary,
            metrics=metrics,
            input_tokens=estimate_tokens(text),
            output_tokens=output_tokens,
        )

    async def unload_model(self) -> None:
        self._loader.unload()
