"""
Errors raised by the content store.

Every store operation reports failure with one of these. Callers can catch
StoreError to handle them all, or a subclass to react to one kind.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for content store errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(StoreError):
    """A project, post, or directory does not exist."""
    pass


class AlreadyExistsError(StoreError):
    """The target directory or file name is already taken."""
    pass


class ValidationError(StoreError):
    """Input is unusable, e.g. a name that sanitizes to nothing."""
    pass


class StorageIOError(StoreError):
    """Reading, writing, renaming, or syncing failed on disk."""
    pass


class MalformedMetadataError(StoreError):
    """A metadata update targeted a file without a frontmatter block."""
    pass
