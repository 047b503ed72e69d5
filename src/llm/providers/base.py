from __future__ import annotations
from abc import ABC, abstractmethod

class LLMProvider(ABC):
    name: str = "base"

    @abstractmethod
    def generate(self, *, prompt: str, max_tokens: int) -> str:
        """
        Must return the model output as TEXT (parsing/validation happens in the interpreters).
        Any failure may be raised as-is; LLMClient turns it into RemoteCallError.
        """
        raise NotImplementedError
