"""
Configuration and path management.

Resolves the user's documents directory once and derives the fixed Studio
layout under it. The content store never looks anything up itself; it is
handed the pages root built here.

Resolution order for the documents directory:
  1. STUDIO_DOCUMENTS_DIR environment variable (highest priority)
  2. Global config file (~/.config/studio/config.yaml) documents_dir key
  3. ~/Documents
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

ENV_DOCUMENTS_DIR = "STUDIO_DOCUMENTS_DIR"


@dataclass(frozen=True)
class StudioPaths:
    """Standard paths for the Studio workspace."""

    documents: Path
    studio: Path
    src: Path

    # Content directories
    pages: Path
    layouts: Path

    # Global config (outside the workspace)
    config_file: Path


def get_global_config_path() -> Path:
    """Return the path to the global studio config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/studio/config.yaml.

    Returns:
        Path to global config file (may not exist).
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "studio" / "config.yaml"


def load_global_config() -> dict:
    """Load the global studio configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    config_path = get_global_config_path()
    if not config_path.is_file():
        return {}
    try:
        text = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        if isinstance(data, dict):
            return data
        return {}
    except (OSError, yaml.YAMLError):
        return {}


def find_documents_dir() -> Path:
    """Find the documents directory using 3-tier resolution.

    Returns:
        Path to the documents directory (may not exist yet)
    """
    # Tier 1: environment variable
    env_dir = os.environ.get(ENV_DOCUMENTS_DIR)
    if env_dir:
        return Path(env_dir).expanduser().resolve()

    # Tier 2: global config file
    documents_dir = load_global_config().get("documents_dir")
    if documents_dir:
        return Path(str(documents_dir)).expanduser().resolve()

    # Tier 3: platform default
    return Path.home() / "Documents"


@lru_cache(maxsize=1)
def get_documents_dir() -> Path:
    """Get the cached documents directory."""
    return find_documents_dir()


def get_starter_template_dir() -> Path | None:
    """Return the configured starter template directory, if any.

    Read from the global config's starter_template key. None means the
    packaged starter site is used.
    """
    value = load_global_config().get("starter_template")
    if not value:
        return None
    return Path(str(value)).expanduser()


def get_paths(documents_dir: Path | None = None) -> StudioPaths:
    """Get all standard paths for the workspace.

    Args:
        documents_dir: Documents directory (uses cached default if not provided)

    Returns:
        StudioPaths dataclass with all paths
    """
    if documents_dir is None:
        documents_dir = get_documents_dir()

    documents_dir = Path(documents_dir)
    studio = documents_dir / "studio"

    return StudioPaths(
        documents=documents_dir,
        studio=studio,
        src=studio / "src",
        pages=studio / "src" / "pages",
        layouts=studio / "src" / "layouts",
        config_file=get_global_config_path(),
    )
