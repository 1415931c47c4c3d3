"""Claude (Anthropic) LLM Client"""

from anthropic import Anthropic, APIConnectionError, APIStatusError, AuthenticationError

from gy.config import DEFAULT_MODEL
from gy.llm.base import LLMResponse, LLMError, SYSTEM_PROMPT, VALIDATION_SYSTEM_PROMPT


def _api_error_message(e: APIStatusError) -> str:
    """Prefer the error.message field of the JSON error body."""
    body = e.body
    if isinstance(body, dict):
        detail = body.get("error")
        if isinstance(detail, dict) and detail.get("message"):
            return detail["message"]
    return e.message


class ClaudeClient:
    """Single-shot Messages API client. One request per call, no retries."""

    DEFAULT_MODEL = DEFAULT_MODEL
    MAX_TOKENS = 256
    VALIDATION_MAX_TOKENS = 10

    def __init__(self, api_key: str, model: str | None = None, client=None):
        if not api_key:
            raise LLMError(
                "No API key found. Set ANTHROPIC_API_KEY environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self._client = client or Anthropic(api_key=api_key, max_retries=0)

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def _create(self, **kwargs):
        try:
            return self._client.messages.create(**kwargs)
        except AuthenticationError as e:
            raise LLMError(f"Invalid API key: {_api_error_message(e)}")
        except APIStatusError as e:
            raise LLMError(f"API error: {_api_error_message(e)}")
        except APIConnectionError as e:
            raise LLMError(f"API request failed: {e}")

    def generate(self, diff: str) -> LLMResponse:
        """Draft a commit message for the given diff text."""
        response = self._create(
            model=self.model,
            max_tokens=self.MAX_TOKENS,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": diff}],
        )

        for block in response.content:
            if getattr(block, "type", None) == "text":
                content = block.text.strip()
                break
        else:
            raise LLMError("Empty response from API")

        usage = getattr(response, "usage", None)
        tokens = (usage.input_tokens + usage.output_tokens) if usage else 0
        return LLMResponse(content=content, model=self.model, tokens_used=tokens)

    def validate(self) -> None:
        """Round-trip a tiny request to check the key. Raises LLMError."""
        self._create(
            model=self.DEFAULT_MODEL,
            max_tokens=self.VALIDATION_MAX_TOKENS,
            system=VALIDATION_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": "test"}],
        )
