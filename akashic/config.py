"""
User configuration persistence.

Stores settings like the preferred lore corpus location in a JSON file.
Environment variables override the saved values.
"""

import json
import logging
import os
from pathlib import Path
from typing import TypedDict

from .lore.corpus import DEFAULT_CORPUS_PATHS


logger = logging.getLogger(__name__)


CONFIG_FILENAME = ".akashic_config.json"

ENV_LORE_PATH = "AKASHIC_LORE_PATH"  # one or more paths, os.pathsep separated
ENV_LORE_LIMIT = "AKASHIC_LORE_LIMIT"


class Config(TypedDict, total=False):
    """User configuration."""
    lore_paths: list[str]  # Tried before the default locations
    limit: int  # Max lore entries per context block
    log_level: str


DEFAULT_CONFIG: Config = {
    "lore_paths": [],
    "limit": 3,
    "log_level": "INFO",
}


def _defaults() -> Config:
    config = DEFAULT_CONFIG.copy()
    config["lore_paths"] = list(DEFAULT_CONFIG["lore_paths"])
    return config


def get_config_path(base_dir: Path | str = ".") -> Path:
    """Get path to config file."""
    return Path(base_dir) / CONFIG_FILENAME


def _apply_env(config: Config) -> Config:
    env_paths = os.environ.get(ENV_LORE_PATH, "")
    paths = [p for p in env_paths.split(os.pathsep) if p.strip()]
    if paths:
        config["lore_paths"] = paths + list(config.get("lore_paths", []))

    env_limit = os.environ.get(ENV_LORE_LIMIT)
    if env_limit:
        try:
            config["limit"] = int(env_limit)
        except ValueError:
            pass  # Keep the saved/default limit
    return config


def _load_saved(base_dir: Path | str) -> Config:
    """Saved config merged over defaults, without env overrides."""
    path = get_config_path(base_dir)
    config = _defaults()

    if not path.exists():
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, IOError):
        logger.warning(f"Ignoring unreadable config file {path}")
        return config

    # Merge with defaults to handle missing keys
    if isinstance(saved, dict):
        config.update(saved)
    return _validate(config, path)


def _validate(config: Config, source: Path) -> Config:
    """Replace hand-edited values of the wrong type with defaults."""
    limit = config.get("limit")
    if not isinstance(limit, int) or isinstance(limit, bool):
        logger.warning(f"{source}: 'limit' must be an integer, using {DEFAULT_CONFIG['limit']}")
        config["limit"] = DEFAULT_CONFIG["limit"]

    paths = config.get("lore_paths")
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        logger.warning(f"{source}: 'lore_paths' must be a list of paths, ignoring it")
        config["lore_paths"] = list(DEFAULT_CONFIG["lore_paths"])

    if not isinstance(config.get("log_level"), str):
        logger.warning(f"{source}: 'log_level' must be a string, using {DEFAULT_CONFIG['log_level']}")
        config["log_level"] = DEFAULT_CONFIG["log_level"]

    return config


def load_config(base_dir: Path | str = ".") -> Config:
    """Load config from file, or return defaults if not found."""
    return _apply_env(_load_saved(base_dir))


def save_config(config: Config, base_dir: Path | str = ".") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(base_dir)

    # Ensure directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except IOError:
        return False


def set_lore_path(lore_path: Path | str, base_dir: Path | str = ".") -> bool:
    """Save a preferred corpus location, ahead of any previously saved ones."""
    config = _load_saved(base_dir)
    lore_path = str(lore_path)
    others = [p for p in config.get("lore_paths", []) if p != lore_path]
    config["lore_paths"] = [lore_path] + others
    return save_config(config, base_dir)


def corpus_candidates(config: Config) -> list[Path]:
    """Configured corpus paths followed by the defaults, without duplicates."""
    candidates: list[Path] = []
    for p in [*config.get("lore_paths", []), *DEFAULT_CORPUS_PATHS]:
        path = Path(p)
        if path not in candidates:
            candidates.append(path)
    return candidates
