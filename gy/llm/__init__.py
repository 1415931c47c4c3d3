"""LLM Client Package"""

from gy.llm.base import LLMResponse, LLMError, SYSTEM_PROMPT, VALIDATION_SYSTEM_PROMPT
from gy.llm.claude import ClaudeClient

__all__ = [
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "SYSTEM_PROMPT",
    "VALIDATION_SYSTEM_PROMPT",
]
