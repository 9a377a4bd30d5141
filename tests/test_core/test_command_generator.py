import asyncio
import json

import pytest

from pocketllm.core.command_generator import CommandGenerationService
from pocketllm.inference.guardrails import FALLBACK_COMMAND
from pocketllm.inference.prompts import format_command_messages, format_command_prompt
from pocketllm.models.enums import ModelFamily
from pocketllm.models.model_info import ModelStatus
from pocketllm.models.requests import CommandRequest, SystemContext
from pocketllm.utils.exceptions import ModelNotLoadedError
from pocketllm.utils.tokenizer import estimate_tokens

QWEN = "Qwen/Qwen2.5-Coder-0.5B-Instruct"


def _request():
    return CommandRequest(
        goal="show disk usage",
        system=SystemContext(os="Linux", arch="arm64", shell="zsh", installed_tools=["df", "du"]),
    )


def _service(settings, factory):
    return CommandGenerationService(settings, engine_factory=factory)


def _compact_json(value):
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def test_generate_before_load(test_settings, engine_factory):
    service = _service(test_settings, engine_factory)
    with pytest.raises(ModelNotLoadedError):
        asyncio.run(service.generate_commands(_request()))


def test_chat_model_uses_messages(test_settings, make_engine_factory):
    factory = make_engine_factory(output="df -h\ndu -sh *\nThis will show usage")
    service = _service(test_settings, factory)
    candidate = asyncio.run(service.load_model())
    assert candidate.model_id == QWEN
    assert candidate.family is ModelFamily.CHAT

    response = asyncio.run(service.generate_commands(_request()))

    call = factory.engines[0].calls[-1]
    assert call["inputs"] == format_command_messages(_request())
    assert call["params"]["temperature"] == 0.1
    assert response.commands == ["df -h", "du -sh *"]
    assert response.input_tokens == estimate_tokens(_compact_json(call["inputs"]))
    assert response.output_tokens == estimate_tokens("df -h\ndu -sh *")


def test_text2text_fallback(test_settings, make_engine_factory):
    factory = make_engine_factory(failing=[QWEN], output="df -h")
    service = _service(test_settings, factory)
    candidate = asyncio.run(service.load_model())
    assert candidate.family is ModelFamily.TEXT2TEXT

    response = asyncio.run(service.generate_commands(_request()))

    call = factory.engines[-1].calls[-1]
    prompt = format_command_prompt(_request())
    assert call["inputs"] == prompt
    assert call["params"]["num_beams"] == 3
    assert response.commands == ["df -h"]
    assert response.input_tokens == estimate_tokens(prompt)


def test_continuation_fallback_strips_prompt(test_settings, make_engine_factory):
    factory = make_engine_factory(
        failing=[QWEN, "t5-small"],
        output=lambda prompt: prompt + "\ndf -h\n# done",
    )
    service = _service(test_settings, factory)
    candidate = asyncio.run(service.load_model())
    assert candidate.model_id == "distilgpt2"

    response = asyncio.run(service.generate_commands(_request()))

    assert factory.engines[-1].calls[-1]["params"]["do_sample"] is False
    assert response.commands == ["df -h"]


def test_all_lines_filtered_returns_fallback(test_settings, make_engine_factory):
    factory = make_engine_factory(output="```\n# comment\n```")
    service = _service(test_settings, factory)
    asyncio.run(service.load_model())
    response = asyncio.run(service.generate_commands(_request()))
    assert response.commands == [FALLBACK_COMMAND]


def test_load_same_key_twice_loads_once(test_settings, engine_factory):
    service = _service(test_settings, engine_factory)
    asyncio.run(service.load_model())
    asyncio.run(service.load_model())
    assert len(engine_factory.engines) == 1


def test_load_failure_sets_error(test_settings, make_engine_factory):
    factory = make_engine_factory(failing=[QWEN, "t5-small", "distilgpt2"])
    service = _service(test_settings, factory)
    with pytest.raises(RuntimeError):
        asyncio.run(service.load_model())
    status = service.get_status()
    assert status.loaded is False
    assert status.error == "cannot load distilgpt2"


def test_unload(test_settings, engine_factory):
    service = _service(test_settings, engine_factory)
    asyncio.run(service.load_model())
    asyncio.run(service.unload_model())
    assert service.get_status() == ModelStatus()
    with pytest.raises(ModelNotLoadedError):
        asyncio.run(service.generate_commands(_request()))


def test_generation_error_propagates(test_settings, make_engine_factory):
    def explode(_):
        raise RuntimeError("generation crashed")

    service = _service(test_settings, make_engine_factory(output=explode))
    asyncio.run(service.load_model())
    with pytest.raises(RuntimeError, match="generation crashed"):
        asyncio.run(service.generate_commands(_request()))


def test_chat_input_tokens_use_compact_unescaped_json(test_settings, make_engine_factory):
    factory = make_engine_factory(output="ls -lt")
    service = _service(test_settings, factory)
    asyncio.run(service.load_model())

    request = CommandRequest(goal="lister les fichiers créés aujourd'hui")
    response = asyncio.run(service.generate_commands(request))

    messages = factory.engines[0].calls[-1]["inputs"]
    assert "créés" in _compact_json(messages)
    assert response.input_tokens == estimate_tokens(_compact_json(messages))
    assert response.input_tokens < estimate_tokens(json.dumps(messages))
