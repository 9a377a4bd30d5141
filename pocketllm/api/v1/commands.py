from dataclasses import asdict

from fastapi import APIRouter, Depends

from pocketllm.api.v1.deps import get_command_generator, to_http_exception, to_model_entries
from pocketllm.api.v1.schemas import (
    AvailableModelsResponse,
    CommandRequestSchema,
    CommandResponseSchema,
    ErrorResponse,
    LoadRequest,
    LoadResponse,
    MessageResponse,
    ModelStatusResponse,
)
from pocketllm.core.command_generator import CommandGenerationService
from pocketllm.models.requests import CommandRequest, SystemContext

router = APIRouter()


@router.get(
    "/commands/models",
    response_model=AvailableModelsResponse,
    summary="List command generation models",
)
async def list_command_models(
    service: CommandGenerationService = Depends(get_command_generator),
):
    return AvailableModelsResponse(
        models=to_model_entries(service.available_models()),
        default=service.default_model,
    )


@router.get(
    "/commands/status",
    response_model=ModelStatusResponse,
    summary="Command model status",
)
async def command_status(
    service: CommandGenerationService = Depends(get_command_generator),
):
    return ModelStatusResponse(**asdict(service.get_status()))


@router.post(
    "/commands/load",
    response_model=LoadResponse,
    summary="Load a command generation model",
    description=(
        "Tries Qwen2.5-Coder (chat), then T5-Small (text-to-text), then DistilGPT-2 "
        "(continuation) for the default key, stopping at the first that loads."
    ),
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def load_command_model(
    request: LoadRequest,
    service: CommandGenerationService = Depends(get_command_generator),
):
    try:
        candidate = await service.load_model(request.model_key)
    except Exception as e:
        raise to_http_exception(e)
    return LoadResponse(
        model_key=request.model_key or service.default_model,
        model_id=candidate.model_id,
        family=candidate.family.value,
        status=ModelStatusResponse(**asdict(service.get_status())),
    )


@router.post(
    "/commands",
    response_model=CommandResponseSchema,
    summary="Suggest terminal commands",
    description=(
        "Generates up to three shell commands for the goal. Lines that look like "
        "explanations or markdown are filtered out; if nothing survives a single "
        "fallback hint is returned."
    ),
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_commands(
    request: CommandRequestSchema,
    service: CommandGenerationService = Depends(get_command_generator),
):
    command_request = CommandRequest(
        goal=request.goal,
        system=SystemContext(**request.system.model_dump()),
        task=request.task,
        output_format=request.output_format,
    )
    try:
        result = await service.generate_commands(command_request)
    except Exception as e:
        raise to_http_exception(e)
    return CommandResponseSchema(**asdict(result))


@router.delete(
    "/commands/model",
    response_model=MessageResponse,
    summary="Unload the command model",
)
async def unload_command_model(
    service: CommandGenerationService = Depends(get_command_generator),
):
    await service.unload_model()
    return MessageResponse(message="Command model unloaded")
