from typing import List, Optional

from pydantic import BaseModel, Field


class PerformanceMetricsSchema(BaseModel):
    load_time: float = Field(0.0, description="Model load time in milliseconds (0 for inference calls)")
    inference_time: float = Field(..., description="Wall-clock time of the measured call in milliseconds")
    memory_usage: int = Field(..., description="Memory delta in bytes across the measured call")
    tokens_per_second: float = Field(..., description="Estimated output tokens per second")


class ModelStatusResponse(BaseModel):
    loaded: bool = Field(..., description="Whether a model is ready for inference")
    loading: bool = Field(..., description="Whether a load is in progress")
    error: Optional[str] = Field(None, description="Message of the last failed load, if any")
    progress: int = Field(..., ge=0, le=100, description="Load progress percentage")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"loaded": True, "loading": False, "error": None, "progress": 100},
                {"loaded": False, "loading": True, "error": None, "progress": 42},
            ]
        }
    }


class LoadRequest(BaseModel):
    model_key: Optional[str] = Field(
        None,
        description="Key from the service's model table; the configured default when omitted",
        json_schema_extra={"examples": ["distilgpt2", "qwen2.5-coder"]},
    )


class LoadResponse(BaseModel):
    model_key: str = Field(..., description="Model table key that is now loaded")
    model_id: str = Field(..., description="Candidate model that loaded successfully")
    family: str = Field(..., description="Model family: continuation, text2text or chat")
    status: ModelStatusResponse


class ModelEntry(BaseModel):
    key: str = Field(..., description="Key accepted by the load endpoint")
    name: str
    size: str = Field(..., description="Approximate download size")
    context_window: int
    max_tokens: int
    model_url: str = Field(..., description="Hugging Face repository of the primary model")
    candidates: List[str] = Field(..., description="Model IDs tried in order when loading this key")


class AvailableModelsResponse(BaseModel):
    models: List[ModelEntry]
    default: str = Field(..., description="Key used when none is given")


class SummarizeRequestSchema(BaseModel):
    text: str = Field(..., description="Text to summarize; truncated to the input token limit")
    max_length: Optional[int] = Field(None, gt=0, description="Maximum new tokens to generate")
    min_length: Optional[int] = Field(None, gt=0, description="Minimum new tokens to generate")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "text": "The quarterly report shows revenue grew 12% while costs stayed flat.",
                    "max_length": 60,
                }
            ]
        }
    }


class SummarizeResponseSchema(BaseModel):
    summary: str = Field(..., description="Generated summary with the prompt removed")
    metrics: PerformanceMetricsSchema
    input_tokens: int = Field(..., description="Estimated tokens of the (truncated) input")
    output_tokens: int = Field(..., description="Estimated tokens of the summary")


class SystemContextSchema(BaseModel):
    os: str = Field("Unknown", description="Operating system name")
    kernel: Optional[str] = Field(None, description="Kernel version")
    arch: str = Field("Unknown", description="CPU architecture")
    shell: str = Field("Unknown", description="Shell the commands will run in")
    current_directory: str = Field("Unknown", description="Working directory")
    installed_tools: List[str] = Field(default_factory=list, description="Tools available on PATH")


class CommandRequestSchema(BaseModel):
    goal: str = Field(..., description="What the user wants to accomplish")
    system: SystemContextSchema = Field(default_factory=SystemContextSchema)
    task: str = Field("Task: Terminal command suggestion", description="Task label")
    output_format: str = Field(
        "Provide 1-3 terminal commands only.", description="Output format hint"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "goal": "find the five largest files in this directory",
                    "system": {
                        "os": "Linux",
                        "arch": "x86_64",
                        "shell": "bash",
                        "current_directory": "/home/user",
                        "installed_tools": ["find", "du", "sort"],
                    },
                }
            ]
        }
    }


class CommandResponseSchema(BaseModel):
    commands: List[str] = Field(..., max_length=3, description="Up to three suggested commands")
    metrics: PerformanceMetricsSchema
    input_tokens: int = Field(..., description="Estimated tokens of the model input")
    output_tokens: int = Field(..., description="Estimated tokens of the returned commands")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "commands": ["du -ah . | sort -rh | head -n 5"],
                    "metrics": {
                        "load_time": 0.0,
                        "inference_time": 812.4,
                        "memory_usage": 1048576,
                        "tokens_per_second": 9.8,
                    },
                    "input_tokens": 64,
                    "output_tokens": 8,
                }
            ]
        }
    }


class SystemRequirementsResponse(BaseModel):
    min_ram: str
    recommended_ram: str
    min_storage: str
    supported_runtimes: List[str]


class MessageResponse(BaseModel):
    message: str = Field(..., description="Confirmation message")


class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Error description")

    model_config = {
        "json_schema_extra": {
            "examples": [{"detail": "No model loaded. Please load a model first."}]
        }
    }
