"""LLM Shared Types and Prompt"""

from dataclasses import dataclass

from gy import COMMIT_TYPE_NAMES


SYSTEM_PROMPT = (
    "You are a git commit message generator. Given a git diff, produce a single "
    "conventional commit message (type: description). Use lowercase. Be concise. "
    "Output ONLY the commit message, nothing else. If the diff includes multiple "
    "logical changes, use the most significant one for the type. "
    f"Types: {', '.join(COMMIT_TYPE_NAMES)}."
)

VALIDATION_SYSTEM_PROMPT = "Reply with ok"


@dataclass
class LLMResponse:
    """Structured response from the API."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass
