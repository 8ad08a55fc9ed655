"""Lore retrieval for the Akashic Archive assistants."""

from .corpus import (
    LoreEntry,
    CorpusError,
    parse_corpus,
    load_corpus_file,
    load_corpus,
    first_available,
    DEFAULT_CORPUS_PATHS,
    BUNDLED_CORPUS_PATH,
)
from .retriever import (
    LoreRetriever,
    score_entry,
    rank_entries,
    select_relevant,
    format_context,
    create_retriever,
    get_default_retriever,
    set_default_retriever,
    get_context,
    reload,
    DEFAULT_LIMIT,
)

__all__ = [
    # Corpus
    "LoreEntry",
    "CorpusError",
    "parse_corpus",
    "load_corpus_file",
    "load_corpus",
    "first_available",
    "DEFAULT_CORPUS_PATHS",
    "BUNDLED_CORPUS_PATH",
    # Retriever
    "LoreRetriever",
    "score_entry",
    "rank_entries",
    "select_relevant",
    "format_context",
    "create_retriever",
    "get_default_retriever",
    "set_default_retriever",
    "get_context",
    "reload",
    "DEFAULT_LIMIT",
]
