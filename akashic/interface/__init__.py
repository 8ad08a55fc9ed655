"""Command-line interface for the Akashic lore matcher."""

from .cli import main, build_parser

__all__ = ["main", "build_parser"]
