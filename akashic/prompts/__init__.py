"""Persona prompts for the Archive assistants."""

from .defaults import KEEPER_PROMPT, ORACLE_PROMPT, DEFAULT_PROMPTS
from .loader import PromptLoader, PERSONAS, env_var_for

__all__ = [
    "KEEPER_PROMPT",
    "ORACLE_PROMPT",
    "DEFAULT_PROMPTS",
    "PromptLoader",
    "PERSONAS",
    "env_var_for",
]
