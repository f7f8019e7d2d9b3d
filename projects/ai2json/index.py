from typing import Any
from abc import ABC, abstractmethod

# Unified interface for AI command-line tools that answer a prompt with a single JSON object
class AI2JSON(ABC):
    @abstractmethod
    def ai(self) -> str:
        # Constant provider identifier, e.g. 'codex', 'claude'
        pass

    @abstractmethod
    def init(self, system_prompt: str, user_prompt: str, timeout: int = 0) -> tuple[list[str], str | None, int]:
        # Build the CLI invocation: (argument list, stdin content, timeout in seconds)
        # timeout>0 is used as is; 0 derives it from prompt size; <0 uses abs(timeout) as the per-KB budget
        pass

    @abstractmethod
    def exec(self, args: list[str], timeout: int, stdin_prompt: str | None = None) -> tuple[Any, str | None]:
        # Run the CLI and return (parsed JSON dict, None) or (None, error message)
        pass

    @staticmethod
    def create(ai: str, tmp: str | None = None) -> "AI2JSON":
        # ai: 'codex' or 'claude'; tmp: optional directory receiving raw stdout dumps
        from .ai2json import TheAI2JSON
        return TheAI2JSON.create(ai, tmp)
