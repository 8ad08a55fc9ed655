"""
Lore retriever for the Akashic Archive.

Finds lore entries relevant to a user's message and formats them for
injection into an assistant prompt. Plain substring matching over a small
in-memory corpus - no index, no external services.
"""

import logging
import math
import threading
from pathlib import Path
from typing import Iterable, Sequence

from .corpus import LoreEntry, load_corpus


logger = logging.getLogger(__name__)

# Score weights
TITLE_WEIGHT = 10
KEYWORD_WEIGHT = 5
PARTIAL_KEYWORD_WEIGHT = 3
SUMMARY_WORD_WEIGHT = 1

# Shorter words are ignored for partial keyword and summary matching
MIN_WORD_LEN = 5

DEFAULT_LIMIT = 3

CONTEXT_PREAMBLE = "Reference the following Archive entries when formulating your response:\n\n"


def score_entry(query: str, entry: LoreEntry) -> int:
    """
    Score how relevant an entry is to a query.

    All matching is case-insensitive substring containment against the query:
    - title contained: +10
    - each keyword contained: +5
    - each multi-word keyword with at least half its long words contained: +3
    - each long summary word contained: +1 (repeats count again)

    Returns 0 when nothing matches.
    """
    text = query.lower()
    score = 0

    if entry.title.lower() in text:
        score += TITLE_WEIGHT

    for keyword in entry.keywords:
        if keyword.lower() in text:
            score += KEYWORD_WEIGHT

    # Partial matching for phrases, on top of the full-phrase check above
    for keyword in entry.keywords:
        words = keyword.lower().split()
        if len(words) > 1:
            matched = sum(1 for w in words if len(w) >= MIN_WORD_LEN and w in text)
            if matched >= math.ceil(len(words) / 2):
                score += PARTIAL_KEYWORD_WEIGHT

    for word in entry.summary.lower().split():
        if len(word) >= MIN_WORD_LEN and word in text:
            score += SUMMARY_WORD_WEIGHT

    return score


def rank_entries(
    query: str,
    corpus: Sequence[LoreEntry],
    limit: int = DEFAULT_LIMIT,
) -> list[tuple[LoreEntry, int]]:
    """Score, filter and order entries. Returns (entry, score) pairs."""
    if not corpus or limit <= 0:
        return []

    scored = [(entry, score_entry(query, entry)) for entry in corpus]
    scored = [pair for pair in scored if pair[1] > 0]
    # sorted() is stable, so ties keep corpus order
    scored = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return scored[:limit]


def select_relevant(
    query: str,
    corpus: Sequence[LoreEntry],
    limit: int = DEFAULT_LIMIT,
) -> list[LoreEntry]:
    """Return up to ``limit`` matching entries, most relevant first."""
    return [entry for entry, _ in rank_entries(query, corpus, limit)]


def format_context(entries: Sequence[LoreEntry]) -> str:
    """
    Format entries into a context block for a prompt.

    Returns an empty string for no entries; callers should then leave the
    context block out entirely.
    """
    if not entries:
        return ""

    parts = [CONTEXT_PREAMBLE]
    for i, entry in enumerate(entries, start=1):
        parts.append(f"ENTRY {i}: {entry.title}\n")
        parts.append(f"{entry.context_text}\n\n")
    return "".join(parts)


class LoreRetriever:
    """
    Serves lore context from a cached corpus.

    The corpus is loaded on first use and kept as an immutable tuple, so any
    number of callers can read it concurrently. ``reload()`` builds a fresh
    tuple and swaps the reference in one step.
    """

    def __init__(
        self,
        candidates: Iterable[Path | str] | None = None,
        limit: int = DEFAULT_LIMIT,
    ):
        """
        Args:
            candidates: Corpus locations in priority order (None for defaults)
            limit: Default number of entries to return
        """
        self.candidates = None if candidates is None else [Path(c) for c in candidates]
        self.limit = limit
        self._corpus: tuple[LoreEntry, ...] | None = None
        self._load_lock = threading.Lock()

    @property
    def corpus(self) -> tuple[LoreEntry, ...]:
        """Lazy-load the corpus."""
        corpus = self._corpus
        if corpus is None:
            with self._load_lock:
                if self._corpus is None:
                    self._corpus = load_corpus(self.candidates)
                corpus = self._corpus
        return corpus

    def reload(self) -> tuple[LoreEntry, ...]:
        """Re-read the corpus and replace the cached one."""
        with self._load_lock:
            fresh = load_corpus(self.candidates)
            self._corpus = fresh
        return fresh

    @property
    def entry_count(self) -> int:
        return len(self.corpus)

    def retrieve(self, query: str, limit: int | None = None) -> list[LoreEntry]:
        """Entries relevant to the query, most relevant first."""
        return select_relevant(query, self.corpus, self.limit if limit is None else limit)

    def rank(self, query: str, limit: int | None = None) -> list[tuple[LoreEntry, int]]:
        """Like retrieve(), but keeps the scores."""
        return rank_entries(query, self.corpus, self.limit if limit is None else limit)

    def get_context(self, query: str, limit: int | None = None) -> str:
        """Formatted lore context for the query, or "" if nothing is relevant."""
        context = format_context(self.retrieve(query, limit))
        if context:
            logger.info(f"Found relevant lore for query: {query!r}")
        else:
            logger.info(f"No relevant lore found for query: {query!r}")
        return context


def create_retriever(config: dict | None = None) -> LoreRetriever:
    """
    Create a lore retriever from configuration.

    Args:
        config: Loaded config (see akashic.config); None reads it from disk
    """
    from ..config import load_config, corpus_candidates

    if config is None:
        config = load_config()
    return LoreRetriever(
        candidates=corpus_candidates(config),
        limit=config.get("limit", DEFAULT_LIMIT),
    )


_default_retriever: LoreRetriever | None = None
_default_lock = threading.Lock()


def get_default_retriever() -> LoreRetriever:
    """Process-wide retriever, created on first use."""
    global _default_retriever
    if _default_retriever is None:
        with _default_lock:
            if _default_retriever is None:
                _default_retriever = create_retriever()
    return _default_retriever


def set_default_retriever(retriever: LoreRetriever | None) -> None:
    """Replace the process-wide retriever (None resets it)."""
    global _default_retriever
    with _default_lock:
        _default_retriever = retriever


def get_context(query: str) -> str:
    """Lore context for a user message, using the process-wide retriever."""
    return get_default_retriever().get_context(query)


def reload() -> tuple[LoreEntry, ...]:
    """Reload the process-wide retriever's corpus."""
    return get_default_retriever().reload()
