"""
Base LLM client abstraction.

Defines the interface the Archive assistants talk to. Concrete vendor
backends live outside this package; anything implementing LLMClient works.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal


@dataclass
class Message:
    """A message in the conversation."""
    role: Literal["system", "user", "assistant"]
    content: str


@dataclass
class LLMResponse:
    """Response from the LLM."""
    content: str
    finish_reason: str = "stop"


class LLMClient(ABC):
    """
    Abstract base class for LLM backends.

    All backends must implement:
    - model_name: The model identifier
    - chat(): Send messages and get a response
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """The model identifier."""
        pass

    @abstractmethod
    def chat(
        self,
        messages: list[Message],
        system: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 300,
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: Conversation history
            system: System prompt
            temperature: Sampling temperature
            max_tokens: Max tokens in response

        Returns:
            LLMResponse with the generated content
        """
        pass
