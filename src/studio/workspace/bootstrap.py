"""Workspace bootstrap: create <documents>/studio from the starter site."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from studio.core.config import StudioPaths
from studio.core.errors import NotFoundError, StorageIOError

logger = logging.getLogger(__name__)


@dataclass
class WorkspaceInitResult:
    """Outcome of initializing the workspace."""

    success: bool
    message: str
    is_first_time: bool
    copied: list[str] = field(default_factory=list)


def get_starter_site() -> Traversable:
    """Get the packaged starter site tree."""
    return resources.files("studio.workspace") / "data" / "starter-site"


def copy_tree(source: Traversable | Path, dest: Path, prefix: str = "") -> list[str]:
    """Recursively copy source into dest, never overwriting a file.

    Args:
        source: Directory to copy from (package data or a plain path)
        dest: Destination directory (created if missing)
        prefix: Relative path of dest, used in the returned names

    Returns:
        Relative paths of the files written
    """
    copied: list[str] = []
    dest.mkdir(parents=True, exist_ok=True)

    for item in sorted(source.iterdir(), key=lambda i: i.name):
        rel = f"{prefix}{item.name}"
        target = dest / item.name
        if item.is_dir():
            copied.extend(copy_tree(item, target, prefix=f"{rel}/"))
        elif not target.exists():
            target.write_bytes(item.read_bytes())
            copied.append(rel)
        else:
            logger.debug("Keeping existing %s", target)

    return copied


def initialize_workspace(
    paths: StudioPaths,
    force: bool = False,
    template_dir: Path | None = None,
) -> WorkspaceInitResult:
    """Create the Studio workspace on first run.

    Args:
        paths: Workspace paths
        force: Copy the starter site into an existing workspace too
            (missing files only)
        template_dir: Starter tree to use instead of the packaged one

    Returns:
        WorkspaceInitResult

    Raises:
        NotFoundError: If template_dir does not exist
        StorageIOError: If creating or copying fails
    """
    is_first_time = not paths.studio.exists()

    if not is_first_time and not force:
        return WorkspaceInitResult(
            success=True,
            message=f"Studio workspace found at {paths.studio}. Existing setup preserved.",
            is_first_time=False,
        )

    if template_dir is not None:
        if not template_dir.is_dir():
            raise NotFoundError(f"Starter template not found: {template_dir}")
        source: Traversable | Path = template_dir
    else:
        source = get_starter_site()

    try:
        paths.studio.mkdir(parents=True, exist_ok=True)
        copied = copy_tree(source, paths.studio)
        paths.pages.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageIOError(f"Failed to create studio workspace: {e}") from e

    logger.debug("Copied %d starter files into %s", len(copied), paths.studio)

    if is_first_time:
        message = (
            f"Studio workspace created at {paths.studio}. "
            "Run `npm install && npm run dev` there to preview the site."
        )
    else:
        message = f"Starter files refreshed in {paths.studio} ({len(copied)} added)."

    return WorkspaceInitResult(
        success=True,
        message=message,
        is_first_time=is_first_time,
        copied=copied,
    )
