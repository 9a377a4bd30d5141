from contextlib import asynccontextmanager

from fastapi import FastAPI

from pocketllm.api.v1 import commands as commands_module
from pocketllm.api.v1 import summarize as summarize_module
from pocketllm.api.v1.schemas import SystemRequirementsResponse
from pocketllm.config import settings
from pocketllm.core.command_generator import CommandGenerationService
from pocketllm.core.summarizer import SummarizationService
from pocketllm.utils.gpu_utils import initialize_gpu
from pocketllm.utils.logger import logger
from pocketllm.utils.performance import PerformanceMonitor

TAGS_METADATA = [
    {
        "name": "health",
        "description": "Server health and host requirements.",
    },
    {
        "name": "summarize",
        "description": (
            "Summarize free text with a small continuation model "
            "(DistilGPT-2, falling back to GPT-2 and GPT-2 Medium)."
        ),
    },
    {
        "name": "commands",
        "description": (
            "Suggest up to three terminal commands for a goal and a description "
            "of the host system."
        ),
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("pocketllm starting up...")
    settings.device = initialize_gpu()

    app.state.summarizer = SummarizationService(settings)
    app.state.command_generator = CommandGenerationService(settings)

    logger.info(f"pocketllm ready on device={settings.device}")
    yield

    logger.info("pocketllm shutting down, unloading models...")
    await app.state.summarizer.unload_model()
    await app.state.command_generator.unload_model()
    logger.info("pocketllm shutdown complete")


app = FastAPI(
    title="pocketllm",
    version="0.1.0",
    summary="Summarization and terminal-command suggestion with small local language models",
    openapi_tags=TAGS_METADATA,
    lifespan=lifespan,
)

app.include_router(summarize_module.router, prefix="/v1", tags=["summarize"])
app.include_router(commands_module.router, prefix="/v1", tags=["commands"])


@app.get("/health", tags=["health"], summary="Health check")
async def health():
    return {"status": "ok", "device": settings.device}


@app.get(
    "/v1/system/requirements",
    tags=["health"],
    response_model=SystemRequirementsResponse,
    summary="Host requirements for running the bundled models",
)
async def system_requirements():
    return SystemRequirementsResponse(**PerformanceMonitor.get_system_requirements())
