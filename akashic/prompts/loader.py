"""
Hot-reloadable persona prompt loader.

Resolves an assistant's system prompt from, in order: an environment
variable, a markdown file in the prompts directory, the built-in default.
File prompts are cached by modification time so edits apply without restart.
"""

import os
from pathlib import Path

from .defaults import DEFAULT_PROMPTS


PERSONAS = tuple(DEFAULT_PROMPTS)


def env_var_for(persona: str) -> str:
    """Environment variable that overrides a persona prompt."""
    return f"{persona.upper()}_SYSTEM_PROMPT"


class PromptLoader:
    """
    Hot-reloadable persona prompt loader.

    Watches file modification times to enable hot-reload without restart.
    """

    def __init__(self, prompts_dir: Path | str | None = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir is not None else None
        self._cache: dict[str, str] = {}
        self._cache_times: dict[str, float] = {}

    def _load_file(self, persona: str) -> str:
        """Load a persona prompt file, using cache if file unchanged."""
        if self.prompts_dir is None:
            return ""

        path = self.prompts_dir / f"{persona}.md"
        if not path.exists():
            return ""

        mtime = path.stat().st_mtime

        # Check cache
        if persona in self._cache and self._cache_times.get(persona) == mtime:
            return self._cache[persona]

        # Load fresh
        content = path.read_text(encoding="utf-8").strip()
        self._cache[persona] = content
        self._cache_times[persona] = mtime

        return content

    def load(self, persona: str) -> str:
        """System prompt for a persona ("keeper" or "oracle")."""
        persona = persona.lower()
        if persona not in DEFAULT_PROMPTS:
            raise ValueError(f"Unknown persona: {persona}")

        override = os.environ.get(env_var_for(persona))
        if override:
            return override

        return self._load_file(persona) or DEFAULT_PROMPTS[persona]
