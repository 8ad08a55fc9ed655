"""
Command-line interface for the Akashic lore matcher.

Search the corpus, preview lore context blocks and assembled assistant
prompts without calling any LLM backend.
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.markup import escape
from rich.text import Text

from ..assistants import create_assistant
from ..config import load_config, set_lore_path, corpus_candidates, get_config_path
from ..lore.retriever import LoreRetriever, format_context
from ..prompts.loader import PromptLoader, PERSONAS


# Shared console instance
console = Console()

THEME = {
    "primary": "bold magenta",
    "accent": "cyan",
    "dim": "dim",
    "warning": "yellow",
}


def _retriever_from_args(args: argparse.Namespace) -> LoreRetriever:
    config = load_config(args.config_dir)
    if args.lore:
        config["lore_paths"] = list(args.lore) + list(config.get("lore_paths", []))
    return LoreRetriever(
        candidates=corpus_candidates(config),
        limit=config.get("limit", 3),
    )


def _limit(args: argparse.Namespace, retriever: LoreRetriever) -> int:
    return retriever.limit if args.limit is None else args.limit


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_search(args: argparse.Namespace) -> int:
    retriever = _retriever_from_args(args)
    ranked = retriever.rank(args.query, _limit(args, retriever))

    if not ranked:
        console.print(f"[{THEME['dim']}]No relevant lore.[/{THEME['dim']}]")
        return 0

    table = Table(title=Text(f"Lore for: {args.query}"), title_style=THEME["primary"])
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right", style=THEME["accent"])
    table.add_column("ID")
    table.add_column("Title")
    for rank, (entry, score) in enumerate(ranked, start=1):
        table.add_row(str(rank), str(score), Text(entry.id), Text(entry.title))
    console.print(table)
    return 0


def cmd_context(args: argparse.Namespace) -> int:
    retriever = _retriever_from_args(args)
    context = format_context(retriever.retrieve(args.query, _limit(args, retriever)))

    if not context:
        console.print(f"[{THEME['dim']}]No relevant lore.[/{THEME['dim']}]")
        return 0

    # Plain text, no markup
    console.print(Text(context.rstrip("\n")))
    return 0


def cmd_entries(args: argparse.Namespace) -> int:
    retriever = _retriever_from_args(args)
    corpus = retriever.corpus

    if not corpus:
        console.print(f"[{THEME['warning']}]No lore corpus could be loaded.[/{THEME['warning']}]")
        return 1

    table = Table(title=f"Lore corpus ({len(corpus)} entries)", title_style=THEME["primary"])
    table.add_column("ID")
    table.add_column("Title", style=THEME["accent"])
    table.add_column("Keywords")
    table.add_column("Source", style=THEME["dim"])
    for entry in corpus:
        table.add_row(
            Text(entry.id),
            Text(entry.title),
            Text(", ".join(entry.keywords)),
            Text(entry.source or ""),
        )
    console.print(table)
    return 0


def cmd_prompt(args: argparse.Namespace) -> int:
    retriever = _retriever_from_args(args)
    assistant = create_assistant(
        args.persona,
        retriever=retriever,
        prompts=PromptLoader(args.prompts_dir),
    )
    chat = assistant.prepare(args.message)

    lore_note = "with lore" if chat.has_lore else "no lore"
    console.print(Panel(
        Text(chat.system),
        title=f"{args.persona} system prompt ({lore_note})",
        border_style=THEME["primary"],
    ))
    for message in chat.messages:
        console.print(Panel(Text(message.content), title=message.role, border_style=THEME["accent"]))
    return 0


def cmd_use(args: argparse.Namespace) -> int:
    path = Path(args.path)
    if not path.exists():
        console.print(f"[{THEME['warning']}]Warning: {escape(str(path))} does not exist yet[/{THEME['warning']}]")
    if not set_lore_path(path, args.config_dir):
        console.print(f"[{THEME['warning']}]Could not write {get_config_path(args.config_dir)}[/{THEME['warning']}]")
        return 1
    console.print(f"Lore corpus set to [{THEME['accent']}]{escape(str(path))}[/{THEME['accent']}]")
    return 0


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="akashic-lore",
        description="Akashic Archive lore matcher",
    )
    parser.add_argument(
        "--lore",
        action="append",
        metavar="PATH",
        help="Corpus file to try first (repeatable)",
    )
    parser.add_argument(
        "--config-dir",
        default=".",
        metavar="DIR",
        help="Directory holding .akashic_config.json",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    ps = sub.add_parser("search", help="Rank lore entries for a query")
    ps.add_argument("query")
    ps.add_argument("--limit", "-k", type=int, default=None)
    ps.set_defaults(func=cmd_search)

    pc = sub.add_parser("context", help="Print the lore context block for a query")
    pc.add_argument("query")
    pc.add_argument("--limit", "-k", type=int, default=None)
    pc.set_defaults(func=cmd_context)

    pe = sub.add_parser("entries", help="List the loaded corpus")
    pe.set_defaults(func=cmd_entries)

    pp = sub.add_parser("prompt", help="Show the assembled prompt for an assistant")
    pp.add_argument("persona", choices=PERSONAS)
    pp.add_argument("message")
    pp.add_argument("--prompts-dir", default=None, help="Directory with <persona>.md overrides")
    pp.set_defaults(func=cmd_prompt)

    pu = sub.add_parser("use", help="Save a preferred corpus location")
    pu.add_argument("path")
    pu.set_defaults(func=cmd_use)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else load_config(args.config_dir).get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(message)s',
        stream=sys.stderr,
    )

    return args.func(args)
