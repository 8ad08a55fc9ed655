"""
Akashic Archive lore matcher.

Finds lore entries relevant to a user's message and formats them as context
for the Archive's assistants (the Oracle and the Keeper).
"""

from .lore import LoreEntry, LoreRetriever, get_context

__all__ = ["LoreEntry", "LoreRetriever", "get_context"]
