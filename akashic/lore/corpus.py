"""
Lore corpus loading for the Akashic Archive.

Reads hand-authored lore entries from JSON or YAML files. Several candidate
locations are tried in priority order; the first one that parses wins.
A missing or broken corpus is never fatal - callers get an empty corpus.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Bundled sample corpus shipped with the package
BUNDLED_CORPUS_PATH = Path(__file__).parent.parent / "data" / "lore.json"

# Checked in order; the corpus has lived in each of these over time
DEFAULT_CORPUS_PATHS: list[Path] = [
    Path("config/lore.json"),
    Path("server/config/lore.json"),
    BUNDLED_CORPUS_PATH,
]

YAML_SUFFIXES = {".yaml", ".yml"}


class CorpusError(Exception):
    """A corpus source could not be read or parsed."""


class LoreEntry(BaseModel):
    """One unit of lore knowledge."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    summary: str = ""
    keywords: tuple[str, ...] = Field(default_factory=tuple)
    passage: str | None = None
    source: str | None = None  # provenance only, never scored

    @field_validator("id", "title", mode="before")
    @classmethod
    def _require_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("summary", mode="before")
    @classmethod
    def _summary_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("keywords", mode="before")
    @classmethod
    def _clean_keywords(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        # Blank keywords would match every query
        return tuple(k for k in value if not isinstance(k, str) or k.strip())

    @property
    def context_text(self) -> str:
        """Text emitted into prompts: the passage when present, else the summary."""
        return self.passage if self.passage else self.summary


def parse_corpus(data: Any, source: str = "<memory>") -> tuple[LoreEntry, ...]:
    """
    Build entries from a decoded corpus document.

    The document must be a mapping with an ``entries`` sequence. Individual
    entries that fail validation are skipped with a warning.
    """
    if not isinstance(data, dict):
        raise CorpusError(f"{source}: expected an object with an 'entries' list")

    raw_entries = data.get("entries")
    if raw_entries is None:
        raise CorpusError(f"{source}: missing 'entries'")
    if not isinstance(raw_entries, list):
        raise CorpusError(f"{source}: 'entries' must be a list")

    entries = []
    for i, raw in enumerate(raw_entries):
        try:
            entries.append(LoreEntry.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed lore entry #{i} in {source}: "
                f"{e.error_count()} validation error(s)"
            )
    return tuple(entries)


def load_corpus_file(path: Path | str) -> tuple[LoreEntry, ...]:
    """Load one corpus file. Raises CorpusError on any read or parse failure."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusError(f"{path}: {e}") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CorpusError(f"{path}: {e}") from e

    return parse_corpus(data, source=str(path))


def first_available(loaders: Iterable[Callable[[], T]]) -> T | None:
    """Return the result of the first loader that doesn't raise CorpusError."""
    for loader in loaders:
        try:
            return loader()
        except CorpusError as e:
            logger.debug(f"Lore source unavailable: {e}")
    return None


def _file_loader(path: Path) -> Callable[[], tuple[LoreEntry, ...]]:
    def load() -> tuple[LoreEntry, ...]:
        entries = load_corpus_file(path)
        logger.info(f"Loaded {len(entries)} lore entries from {path}")
        return entries
    return load


def load_corpus(
    candidates: Iterable[Path | str] | None = None,
) -> tuple[LoreEntry, ...]:
    """
    Load the corpus from the first candidate location that works.

    Args:
        candidates: Paths in priority order (defaults to DEFAULT_CORPUS_PATHS)

    Returns:
        Tuple of entries, empty if every candidate failed.
    """
    paths = [Path(p) for p in (DEFAULT_CORPUS_PATHS if candidates is None else candidates)]
    entries = first_available(_file_loader(p) for p in paths)
    if entries is None:
        logger.warning(
            f"No lore corpus could be loaded (tried {len(paths)} location(s))"
        )
        return ()
    return entries
