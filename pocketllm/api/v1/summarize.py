from dataclasses import asdict

from fastapi import APIRouter, Depends

from pocketllm.api.v1.deps import get_summarizer, to_http_exception, to_model_entries
from pocketllm.api.v1.schemas import (
    AvailableModelsResponse,
    ErrorResponse,
    LoadRequest,
    LoadResponse,
    MessageResponse,
    ModelStatusResponse,
    SummarizeRequestSchema,
    SummarizeResponseSchema,
)
from pocketllm.core.summarizer import SummarizationService
from pocketllm.models.requests import SummarizeRequest

router = APIRouter()


@router.get(
    "/summarize/models",
    response_model=AvailableModelsResponse,
    summary="List summarization models",
)
async def list_summary_models(service: SummarizationService = Depends(get_summarizer)):
    return AvailableModelsResponse(
        models=to_model_entries(service.available_models()),
        default=service.default_model,
    )


@router.get(
    "/summarize/status",
    response_model=ModelStatusResponse,
    summary="Summarization model status",
    description="Poll this while a load is running to follow its progress.",
)
async def summary_status(service: SummarizationService = Depends(get_summarizer)):
    return ModelStatusResponse(**asdict(service.get_status()))


@router.post(
    "/summarize/load",
    response_model=LoadResponse,
    summary="Load a summarization model",
    description=(
        "Tries each candidate of the selected model table entry in order until one "
        "loads. Loading the key that is already loaded returns immediately."
    ),
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def load_summary_model(
    request: LoadRequest, service: SummarizationService = Depends(get_summarizer)
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
    "/summarize",
    response_model=SummarizeResponseSchema,
    summary="Summarize text",
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def summarize(
    request: SummarizeRequestSchema,
    service: SummarizationService = Depends(get_summarizer),
):
    try:
        result = await service.summarize(SummarizeRequest(**request.model_dump()))
    except Exception as e:
        raise to_http_exception(e)
    return SummarizeResponseSchema(**asdict(result))


@router.delete(
    "/summarize/model",
    response_model=MessageResponse,
    summary="Unload the summarization model",
)
async def unload_summary_model(service: SummarizationService = Depends(get_summarizer)):
    await service.unload_model()
    return MessageResponse(message="Summarization model unloaded")
