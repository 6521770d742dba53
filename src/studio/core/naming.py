"""
Name sanitizing.

Turns user-typed names into identifiers that are safe to use as directory
names, file names, and URL path segments.

Two modes:
  - project: spaces become hyphens, letters/digits/hyphens/underscores are
    kept, everything else becomes a hyphen; then lowercase.
  - slug: lowercase first; spaces and underscores become hyphens, anything
    that is not a letter, digit, or hyphen becomes a hyphen.

Both modes then collapse hyphen runs and trim hyphens from the ends. Letters
are judged with str.isalnum(), so non-ASCII letters survive and are
lowercased by their own case mapping.
"""

from __future__ import annotations

from typing import Literal

Mode = Literal["project", "slug"]

PROJECT = "project"
SLUG = "slug"


def _map_project_char(c: str) -> str:
    if c == " ":
        return "-"
    if c.isalnum() or c in "-_":
        return c
    return "-"


def _map_slug_char(c: str) -> str:
    if c in " _":
        return "-"
    if c.isalnum() or c == "-":
        return c
    return "-"


def _collapse_hyphens(text: str) -> str:
    """Split on hyphens, drop empty segments, rejoin with single hyphens."""
    return "-".join(part for part in text.split("-") if part)


def sanitize_project_name(name: str) -> str:
    """Sanitize a display name into a project folder name.

    "My Blog!" -> "my-blog"
    """
    mapped = "".join(_map_project_char(c) for c in name).lower()
    # Lowercasing can emit combining marks (e.g. "İ" -> "i̇"); map again so
    # the result is stable under a second pass.
    mapped = "".join(_map_project_char(c) for c in mapped)
    return _collapse_hyphens(mapped)


def sanitize_slug(title: str) -> str:
    """Sanitize a post title into a slug.

    "Hello World" -> "hello-world"
    """
    mapped = "".join(_map_slug_char(c) for c in title.lower())
    return _collapse_hyphens(mapped)


def sanitize(text: str, mode: Mode = SLUG) -> str:
    """Sanitize text in the given mode. May return an empty string.

    Args:
        text: Arbitrary user input
        mode: "project" or "slug"

    Returns:
        Sanitized identifier ("" if the input has no letters or digits)
    """
    if mode == PROJECT:
        return sanitize_project_name(text)
    if mode == SLUG:
        return sanitize_slug(text)
    raise ValueError(f"Unknown sanitize mode: {mode!r}")


def humanize_slug(slug: str) -> str:
    """Turn a slug back into a readable title.

    "my-first_post" -> "My First Post"
    """
    words = slug.replace("-", " ").replace("_", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def is_path_segment(name: str) -> bool:
    """Check that a name is a single, non-special path segment."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and "\x00" not in name
