from typing import List

FALLBACK_COMMAND = "# Check available tools and system documentation"
MAX_COMMANDS = 3

# Substring match against the lowercased line, so "to " also hits "into ".
EXPLANATION_MARKERS = ("because", "to ", "this will", "you can")


def _is_command_line(line: str) -> bool:
    lowered = line.lower()
    if any(marker in lowered for marker in EXPLANATION_MARKERS):
        return False
    if "#" in line or line.startswith("```"):
        return False
    return True


def apply_output_guardrails(output: str) -> List[str]:
    """Reduce raw generated text to at most three command lines."""
    lines = [line.strip() for line in output.split("\n")]
    lines = [line for line in lines if line and _is_command_line(line)]
    lines = lines[:MAX_COMMANDS]
    if not lines:
        return [FALLBACK_COMMAND]
    return lines
