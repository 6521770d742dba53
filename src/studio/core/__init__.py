"""Core utilities for studio."""

from studio.core.atomic import atomic_replace, atomic_write_text
from studio.core.config import StudioPaths, get_documents_dir, get_paths
from studio.core.errors import (
    AlreadyExistsError,
    MalformedMetadataError,
    NotFoundError,
    StorageIOError,
    StoreError,
    ValidationError,
)
from studio.core.naming import (
    humanize_slug,
    sanitize,
    sanitize_project_name,
    sanitize_slug,
)

__all__ = [
    # Atomic writes
    "atomic_replace",
    "atomic_write_text",
    # Config
    "StudioPaths",
    "get_documents_dir",
    "get_paths",
    # Errors
    "StoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "ValidationError",
    "StorageIOError",
    "MalformedMetadataError",
    # Naming
    "sanitize",
    "sanitize_project_name",
    "sanitize_slug",
    "humanize_slug",
]
