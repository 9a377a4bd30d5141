from typing import Dict, List

from fastapi import HTTPException, Request

from pocketllm.api.v1.schemas import ModelEntry
from pocketllm.core.command_generator import CommandGenerationService
from pocketllm.core.summarizer import SummarizationService
from pocketllm.models.model_info import ModelConfig
from pocketllm.utils.exceptions import DownloadError, ModelNotLoadedError, UnknownModelError


def get_summarizer(request: Request) -> SummarizationService:
    return request.app.state.summarizer


def get_command_generator(request: Request) -> CommandGenerationService:
    return request.app.state.command_generator


def to_model_entries(configs: Dict[str, ModelConfig]) -> List[ModelEntry]:
    return [
        ModelEntry(
            key=key,
            name=config.name,
            size=config.size,
            context_window=config.context_window,
            max_tokens=config.max_tokens,
            model_url=config.model_url,
            candidates=[c.model_id for c in config.candidates],
        )
        for key, config in configs.items()
    ]


def to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, ModelNotLoadedError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, (UnknownModelError, DownloadError)):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
