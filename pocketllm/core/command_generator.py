from __future__ import annotations

import asyncio
import json
from typing import Dict, Optional

from pocketllm.config import Settings, settings as default_settings
from pocketllm.core.model_loader import EngineFactory, ModelLoader
from pocketllm.inference.decoding import command_decoding_params
from pocketllm.inference.guardrails import apply_output_guardrails
from pocketllm.inference.llm_engine import TransformersEngine
from pocketllm.inference.prompts import build_command_input
from pocketllm.models.model_info import CandidateModel, ModelConfig, ModelStatus
from pocketllm.models.registry import COMMAND_MODELS
from pocketllm.models.requests import CommandRequest, CommandResponse
from pocketllm.utils.exceptions import UnknownModelError
from pocketllm.utils.logger import logger
from pocketllm.utils.performance import PerformanceMonitor
from pocketllm.utils.tokenizer import estimate_tokens


class CommandGenerationService:
    """Suggests up to three terminal commands for a goal on a described system."""

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
        self._loader = ModelLoader("command", factory, self._monitor)

    def get_status(self) -> ModelStatus:
        return self._loader.get_status()

    @property
    def default_model(self) -> str:
        return self._settings.default_command_model

    def available_models(self) -> Dict[str, ModelConfig]:
        return dict(COMMAND_MODELS)

    async def load_model(self, model_key: Optional[str] = None) -> CandidateModel:
        model_key = model_key or self.default_model
        config = COMMAND_MODELS.get(model_key)
        if config is None:
            raise UnknownModelError(model_key)
        return await self._loader.load(model_key, config.candidates)

    async def generate_commands(self, request: CommandRequest) -> CommandResponse:
        engine = self._loader.require_engine()
        family = engine.candidate.family

        model_input = build_command_input(request, family)
        if isinstance(model_input, str):
            input_tokens = estimate_tokens(model_input)
        else:
            input_tokens = estimate_tokens(
                json.dumps(model_input, separators=(",", ":"), ensure_ascii=False)
            )
        params = command_decoding_params(family)

        self._monitor.start_measurement()
        try:
            generated = await asyncio.to_thread(engine.generate, model_input, params)
        except Exception as e:
            logger.error(f"Command generation failed: {e}")
            raise
        metrics = self._monitor.end_measurement()

        if family.echoes_prompt:
            generated = generated.replace(model_input, "", 1)
        commands = apply_output_guardrails(generated.strip())

        output_tokens = estimate_tokens("\n".join(commands))
        metrics.tokens_per_second = self._monitor.calculate_tokens_per_second(
            output_tokens, metrics.inference_time
        )
        return CommandResponse(
            commands=commands,
            metrics=metrics,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    async def unload_model(self) -> None:
        self._loader.unload()
