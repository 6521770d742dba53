"""
Atomic file replacement.

Writes go to a dot-prefixed sibling temp file, are flushed and fsynced, and
only then renamed over the target. Readers see either the old content or the
new content, never a partial write.
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def temp_path_for(target: Path) -> Path:
    """Return the temp path used when replacing target.

    The name is dot-prefixed and ends in .tmp so directory scans that look
    for content extensions never pick it up.
    """
    target = Path(target)
    return target.parent / f".{target.name}.tmp"


def atomic_replace(target: Path, data: bytes) -> None:
    """Replace target's content with data atomically.

    Args:
        target: File to replace (its directory must exist)
        data: New file content

    Raises:
        OSError: If any step fails. The target is untouched unless the
            final rename succeeded.
    """
    target = Path(target)
    temp_path = temp_path_for(target)

    # A leftover temp file (or a link planted in its place) is never written through
    with contextlib.suppress(FileNotFoundError):
        temp_path.unlink()
    fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        # Same directory, same filesystem: the rename is atomic
        os.replace(temp_path, target)
    except Exception:
        with contextlib.suppress(OSError):
            temp_path.unlink()
        raise

    logger.debug("Atomically replaced %s (%d bytes)", target, len(data))


def atomic_write_text(target: Path, text: str, encoding: str = "utf-8") -> None:
    """Encode text and replace target's content atomically."""
    atomic_replace(target, text.encode(encoding))
