from typing import Dict

from pocketllm.models.enums import ModelFamily
from pocketllm.models.model_info import CandidateModel, ModelConfig

SUMMARY_MODELS: Dict[str, ModelConfig] = {
    "distilgpt2": ModelConfig(
        name="DistilGPT-2",
        size="124MB",
        context_window=1024,
        max_tokens=100,
        model_url="distilgpt2",
        candidates=(
            CandidateModel("distilgpt2", ModelFamily.CONTINUATION),
            CandidateModel("gpt2", ModelFamily.CONTINUATION),
            CandidateModel("gpt2-medium", ModelFamily.CONTINUATION),
        ),
    ),
}

COMMAND_MODELS: Dict[str, ModelConfig] = {
    "qwen2.5-coder": ModelConfig(
        name="Qwen2.5-Coder-0.5B-Instruct",
        size="1GB",
        context_window=32768,
        max_tokens=60,
        model_url="Qwen/Qwen2.5-Coder-0.5B-Instruct",
        candidates=(
            CandidateModel("Qwen/Qwen2.5-Coder-0.5B-Instruct", ModelFamily.CHAT),
            CandidateModel("t5-small", ModelFamily.TEXT2TEXT),
            CandidateModel("distilgpt2", ModelFamily.CONTINUATION),
        ),
    ),
    "t5-small": ModelConfig(
        name="T5-Small",
        size="242MB",
        context_window=512,
        max_tokens=50,
        model_url="t5-small",
        candidates=(CandidateModel("t5-small", ModelFamily.TEXT2TEXT),),
    ),
}
