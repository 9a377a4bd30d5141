from typing import Dict, List, Union

from pocketllm.models.enums import ModelFamily
from pocketllm.models.requests import CommandRequest

ChatMessages = List[Dict[str, str]]

COMMAND_SYSTEM_INSTRUCTION = (
    "You are a terminal command assistant. Reply with 1-3 executable shell "
    "commands, one per line. Do not add explanations, comments or markdown."
)


def format_summary_prompt(text: str) -> str:
    return f"Text: {text}\n\nSummary:"


def format_command_prompt(request: CommandRequest) -> str:
    system = request.system
    return (
        f"Task: {request.goal}\n"
        f"\n"
        f"System: {system.os} {system.arch}\n"
        f"Shell: {system.shell}\n"
        f"Available tools: {', '.join(system.installed_tools)}\n"
        f"\n"
        f"Generate 1-3 executable shell commands for this task. "
        f"Output ONLY the commands, one per line.\n"
        f"\n"
        f"Commands:"
    )


def format_command_messages(request: CommandRequest) -> ChatMessages:
    system = request.system
    tools = "\n".join(system.installed_tools)
    user_content = (
        f"Goal: {request.goal}\n"
        f"Operating system: {system.os}\n"
        f"Architecture: {system.arch}\n"
        f"Shell: {system.shell}\n"
        f"Current directory: {system.current_directory}\n"
        f"Installed tools:\n{tools}"
    )
    return [
        {"role": "system", "content": COMMAND_SYSTEM_INSTRUCTION},
        {"role": "user", "content": user_content},
    ]


def build_command_input(
    request: CommandRequest, family: ModelFamily
) -> Union[str, ChatMessages]:
    if family is ModelFamily.CHAT:
        return format_command_messages(request)
    return format_command_prompt(request)
