from enum import Enum


class ModelFamily(str, Enum):
    CONTINUATION = "continuation"
    TEXT2TEXT = "text2text"
    CHAT = "chat"

    @property
    def pipeline_task(self) -> str:
        if self is ModelFamily.TEXT2TEXT:
            return "text2text-generation"
        return "text-generation"

    @property
    def echoes_prompt(self) -> bool:
        return self is ModelFamily.CONTINUATION
