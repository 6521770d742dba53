"""
Content module for the Studio site.

Provides tools for:
- Reading and rewriting front matter fields without a YAML parser
- Resolving post titles
- Generating project layout, listing, and post files
- Project and post lifecycle operations (ContentStore)
"""

from studio.content.frontmatter import (
    extract_field,
    find_block,
    resolve_title,
    upsert_fields,
)
from studio.content.store import ContentStore, Post, Project

__all__ = [
    "ContentStore",
    "Project",
    "Post",
    "find_block",
    "extract_field",
    "upsert_fields",
    "resolve_title",
]
