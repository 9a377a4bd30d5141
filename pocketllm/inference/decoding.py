"""Fixed decoding presets keyed by model family."""
from typing import Any, Dict, Optional

from pocketllm.models.enums import ModelFamily

_COMMAND_PRESETS: Dict[ModelFamily, Dict[str, Any]] = {
    ModelFamily.CHAT: {
        "max_new_tokens": 60,
        "temperature": 0.1,
        "do_sample": True,
        "top_p": 0.9,
        "repetition_penalty": 1.1,
    },
    ModelFamily.TEXT2TEXT: {
        "max_new_tokens": 50,
        "temperature": 0.3,
        "do_sample": True,
        "num_beams": 3,
        "early_stopping": True,
    },
    # temperature 0.0 means greedy; transformers rejects a zero temperature
    # when sampling so it is expressed through do_sample=False alone.
    ModelFamily.CONTINUATION: {
        "max_new_tokens": 60,
        "do_sample": False,
        "repetition_penalty": 1.0,
    },
}


def command_decoding_params(family: ModelFamily) -> Dict[str, Any]:
    return dict(_COMMAND_PRESETS[family])


def summary_decoding_params(
    default_max_tokens: int,
    max_length: Optional[int] = None,
    min_length: Optional[int] = None,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "max_new_tokens": max_length or default_max_tokens,
        "do_sample": False,
        "repetition_penalty": 1.2,
    }
    if min_length:
        params["min_new_tokens"] = min_length
    return params
