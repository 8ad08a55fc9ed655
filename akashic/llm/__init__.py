"""LLM client interface for the Archive assistants."""

from .base import LLMClient, LLMResponse, Message

__all__ = [
    "LLMClient",
    "LLMResponse",
    "Message",
    "MockLLMClient",
]


# -----------------------------------------------------------------------------
# Mock Client for Testing
# -----------------------------------------------------------------------------

class MockLLMClient(LLMClient):
    """
    Mock LLM client for testing.

    Allows configuring responses without actual API calls.
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        model_name: str = "mock-model",
        error: Exception | None = None,
    ):
        """
        Initialize mock client.

        Args:
            responses: List of responses to return in order.
                       Cycles through if more calls than responses.
            model_name: Name to report as model_name property.
            error: If set, every chat() call raises it.
        """
        self._responses = responses or ["Mock response"]
        self._call_count = 0
        self._model_name = model_name
        self.error = error
        self.calls: list[dict] = []  # Record of all calls made

    @property
    def model_name(self) -> str:
        return self._model_name

    def chat(
        self,
        messages: list[Message],
        system: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 300,
    ) -> LLMResponse:
        """Return next mock response."""
        self.calls.append({
            "messages": messages,
            "system": system,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        response_text = self._responses[self._call_count % len(self._responses)]
        self._call_count += 1
        return LLMResponse(content=response_text)

    def set_responses(self, responses: list[str]) -> None:
        """Update the list of responses."""
        self._responses = responses
        self._call_count = 0

    def reset(self) -> None:
        """Reset call count and recorded calls."""
        self._call_count = 0
        self.calls.clear()
