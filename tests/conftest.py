"""
Pytest fixtures for Akashic lore tests.

Provides sample corpora, corpus files on disk and a clean environment.
"""

import json
import pytest
from pathlib import Path

# Add the project root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from akashic.lore import LoreEntry, LoreRetriever, set_default_retriever
from akashic.config import ENV_LORE_PATH, ENV_LORE_LIMIT


SAMPLE_ENTRIES = [
    {
        "id": "1",
        "title": "Origins",
        "summary": "The first tablet of creation, revealing how the world began",
    },
    {
        "id": "2",
        "title": "Celestial Cycles",
        "summary": "The movements of the heavenly bodies",
        "keywords": ["celestial alignment", "stars"],
    },
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the caller's environment and global retriever."""
    for var in (ENV_LORE_PATH, ENV_LORE_LIMIT, "KEEPER_SYSTEM_PROMPT", "ORACLE_SYSTEM_PROMPT"):
        monkeypatch.delenv(var, raising=False)
    set_default_retriever(None)
    yield
    set_default_retriever(None)


@pytest.fixture
def origins():
    """Entry matched by title."""
    return LoreEntry(**SAMPLE_ENTRIES[0])


@pytest.fixture
def celestial():
    """Entry matched by keyword."""
    return LoreEntry(**SAMPLE_ENTRIES[1])


@pytest.fixture
def sample_corpus(origins, celestial):
    return (origins, celestial)


@pytest.fixture
def write_corpus(tmp_path):
    """Write a corpus document to a JSON file and return its path."""
    def _write(entries, name: str = "lore.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"entries": entries}), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def corpus_file(write_corpus):
    """Sample corpus on disk."""
    return write_corpus(SAMPLE_ENTRIES)


@pytest.fixture
def retriever(corpus_file):
    """Retriever reading only the sample corpus file."""
    return LoreRetriever(candidates=[corpus_file])
