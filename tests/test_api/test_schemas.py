import pytest
from pydantic import ValidationError

from pocketllm.api.v1.schemas import (
    CommandRequestSchema,
    CommandResponseSchema,
    LoadRequest,
    ModelStatusResponse,
    SummarizeRequestSchema,
)


def test_summarize_request_valid():
    req = SummarizeRequestSchema(text="hello", max_length=50)
    assert req.text == "hello"
    assert req.min_length is None


def test_summarize_request_missing_text():
    with pytest.raises(ValidationError):
        SummarizeRequestSchema()


def test_summarize_request_rejects_non_positive_length():
    with pytest.raises(ValidationError):
        SummarizeRequestSchema(text="hello", max_length=0)


def test_command_request_defaults():
    req = CommandRequestSchema(goal="list files")
    assert req.system.os == "Unknown"
    assert req.system.installed_tools == []
    assert req.task == "Task: Terminal command suggestion"


def test_command_response_caps_commands():
    metrics = {"inference_time": 1.0, "memory_usage": 0, "tokens_per_second": 0.0}
    with pytest.raises(ValidationError):
        CommandResponseSchema(
            commands=["a", "b", "c", "d"], metrics=metrics, input_tokens=1, output_tokens=1
        )


def test_load_request_optional_key():
    assert LoadRequest().model_key is None


def test_status_progress_bounds():
    with pytest.raises(ValidationError):
        ModelStatusResponse(loaded=False, loading=True, progress=101)
