"""
The Oracle and the Keeper.

Both assistants answer a single user message, grounding the reply in lore
from the retriever when any is relevant. They differ in where the lore goes:
the Oracle puts it in front of the user's message, the Keeper appends it to
its own system prompt. Neither ever raises to the caller - a missing or
failing backend produces an in-character fallback reply.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .llm.base import LLMClient, Message
from .lore.retriever import LoreRetriever, get_default_retriever
from .prompts.loader import PromptLoader


logger = logging.getLogger(__name__)


# Oracle replies when generation isn't possible
ORACLE_UNAVAILABLE = (
    "The Oracle's connection to the cosmic wisdom is temporarily unavailable. "
    "Please try again soon."
)
ORACLE_SILENT = "The Oracle is silent for now. Try asking another question."
ORACLE_IN_FLUX = (
    "The cosmic energies are in flux. The Oracle cannot provide a clear response "
    "at this moment. Please try again later."
)

KEEPER_CONTEMPLATING = "The Keeper is contemplating your question. Please try asking again."
KEEPER_RECALIBRATING = (
    "The Archive is recalibrating. The Keeper cannot access the knowledge at this moment. "
    "Please return shortly."
)

# Keeper fallbacks, picked at random when the backend fails
KEEPER_LORE_FALLBACKS = [
    "The Archive holds knowledge of what you seek. In the ancient tablets, it speaks of "
    "these matters through symbols and riddles. I sense you are ready to receive this fragment.",
    "Yes, the Seeded have asked of this before. The records speak of such things in the time "
    "before the last Great Cycle ended. Listen carefully to what has been preserved.",
    "I have found mentions of this in the deeper chambers of the Archive. The Way teaches "
    "that such knowledge must be approached with reverence.",
    "This query awakens ancient records within the Archive. The patterns align with what "
    "was written during the time of remembering.",
    "The Tablets contain passages about this very question. From the time before the waters "
    "came, the keepers preserved this wisdom.",
]

KEEPER_NO_LORE_FALLBACKS = [
    "That scroll has not yet been translated.",
    "Some doors open only with time.",
    "The stars have not aligned for that answer.",
    "I find no record of this in the current Archive. Perhaps it belongs to knowledge "
    "yet to be recovered.",
    "The Archive is silent on this matter. The Way teaches patience when seeking what "
    "is not yet revealed.",
]


@dataclass
class PreparedChat:
    """Everything needed for one generation call."""
    system: str
    messages: list[Message]
    temperature: float
    max_tokens: int
    has_lore: bool = False


class Assistant(ABC):
    """
    Base class for a lore-grounded assistant.

    Subclasses decide how lore context is combined with the prompt
    (prepare()) and what to say when generation fails.
    """

    persona: str = ""
    temperature: float = 0.7
    max_tokens: int = 300

    def __init__(
        self,
        client: LLMClient | None = None,
        retriever: LoreRetriever | None = None,
        prompts: PromptLoader | None = None,
    ):
        self.client = client
        self._retriever = retriever
        self.prompts = prompts or PromptLoader()

    @property
    def retriever(self) -> LoreRetriever:
        if self._retriever is None:
            self._retriever = get_default_retriever()
        return self._retriever

    @property
    def system_prompt(self) -> str:
        return self.prompts.load(self.persona)

    @abstractmethod
    def prepare(self, message: str) -> PreparedChat:
        """Assemble the system prompt and messages for one reply."""
        pass

    @abstractmethod
    def respond(self, message: str) -> str:
        """Answer a user message. Never raises."""
        pass

    def _generate(self, chat: PreparedChat) -> str:
        """Run the backend. Exceptions propagate to the caller."""
        response = self.client.chat(
            chat.messages,
            system=chat.system,
            temperature=chat.temperature,
            max_tokens=chat.max_tokens,
        )
        return (response.content or "").strip()


class Oracle(Assistant):
    """Concise, contemplative answers; lore goes in front of the question."""

    persona = "oracle"
    temperature = 0.7

    def prepare(self, message: str) -> PreparedChat:
        context = self.retriever.get_context(message)
        content = f"{context}\n\nUser Query: {message}" if context else message
        return PreparedChat(
            system=self.system_prompt,
            messages=[Message(role="user", content=content)],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            has_lore=bool(context),
        )

    def respond(self, message: str) -> str:
        if self.client is None:
            logger.error("No LLM backend configured for the Oracle")
            return ORACLE_UNAVAILABLE

        try:
            chat = self.prepare(message)
            content = self._generate(chat)
        except Exception:
            logger.exception("Error generating Oracle response")
            return ORACLE_IN_FLUX

        return content or ORACLE_SILENT


class Keeper(Assistant):
    """Guardian of the Archive; lore is appended to the system prompt."""

    persona = "keeper"
    temperature = 0.6

    def __init__(
        self,
        client: LLMClient | None = None,
        retriever: LoreRetriever | None = None,
        prompts: PromptLoader | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(client, retriever, prompts)
        self.rng = rng or random.Random()

    def prepare(self, message: str) -> PreparedChat:
        context = self.retriever.get_context(message)
        system = self.system_prompt
        if context:
            system = f"{system}\n\n{context}"
        return PreparedChat(
            system=system,
            messages=[Message(role="user", content=message)],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            has_lore=bool(context),
        )

    def fallback(self, has_lore: bool) -> str:
        """In-character reply for when the backend can't answer."""
        choices = KEEPER_LORE_FALLBACKS if has_lore else KEEPER_NO_LORE_FALLBACKS
        return self.rng.choice(choices)

    def respond(self, message: str) -> str:
        try:
            chat = self.prepare(message)
        except Exception:
            logger.exception("Error preparing Keeper response")
            return KEEPER_RECALIBRATING

        if self.client is None:
            logger.error("No LLM backend configured for the Keeper")
            return self.fallback(chat.has_lore)

        try:
            content = self._generate(chat)
        except Exception:
            logger.exception("LLM backend error in Keeper response")
            return self.fallback(chat.has_lore)

        return content or KEEPER_CONTEMPLATING


def create_assistant(
    persona: str,
    client: LLMClient | None = None,
    retriever: LoreRetriever | None = None,
    prompts: PromptLoader | None = None,
) -> Assistant:
    """Create the assistant for a persona name."""
    persona = persona.lower()
    if persona == "oracle":
        return Oracle(client, retriever, prompts)
    if persona == "keeper":
        return Keeper(client, retriever, prompts)
    raise ValueError(f"Unknown persona: {persona}")
