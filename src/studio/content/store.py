"""
Content store for Studio projects and posts.

Layout under the pages root:

    <pages>/<folder_name>/_layout.astro   generated, embeds folder_name
    <pages>/<folder_name>/index.astro     generated, embeds display and folder name
    <pages>/<folder_name>/<slug>.md       post: front matter + Markdown body

Nothing is cached. Every call re-reads the filesystem, and no call locks
against another: concurrent writers to one post race at the final rename and
the last one wins.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from studio.content.frontmatter import read_field, resolve_title, update_text
from studio.content.templates import (
    LAYOUT_FILENAME,
    LISTING_FILENAME,
    POST_SUFFIX,
    render_layout,
    render_listing,
    render_post,
)
from studio.core.atomic import atomic_write_text
from studio.core.errors import (
    AlreadyExistsError,
    NotFoundError,
    StorageIOError,
    ValidationError,
)
from studio.core.naming import is_path_segment, sanitize_project_name, sanitize_slug

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """A site section backed by one directory."""

    folder_name: str
    display_name: str
    path: Path


@dataclass
class Post:
    """A Markdown post inside a project.

    content is empty in listings.
    """

    filename: str
    slug: str
    title: str
    content: str = ""


class ContentStore:
    """Project and post operations over a pages root directory."""

    def __init__(self, pages_root: Path):
        """Initialize store.

        Args:
            pages_root: The <studio>/src/pages directory
        """
        self.pages_root = Path(pages_root)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _project_path(self, folder_name: str) -> Path:
        if not is_path_segment(folder_name):
            raise ValidationError(f"Invalid project folder name: {folder_name!r}")
        return self.pages_root / folder_name

    def _post_path(self, folder_name: str, slug: str) -> Path:
        if not is_path_segment(slug):
            raise ValidationError(f"Invalid post slug: {slug!r}")
        return self._project_path(folder_name) / f"{slug}{POST_SUFFIX}"

    def _require_project(self, folder_name: str) -> Path:
        project_path = self._project_path(folder_name)
        if not project_path.is_dir():
            raise NotFoundError(f"Project '{folder_name}' does not exist")
        return project_path

    def _require_post(self, folder_name: str, slug: str) -> Path:
        post_path = self._post_path(folder_name, slug)
        if not post_path.is_file():
            raise NotFoundError(f"Post '{slug}' does not exist")
        return post_path

    def _display_name(self, project_path: Path) -> str:
        """Display name from the listing file, else the folder name."""
        listing = project_path / LISTING_FILENAME
        try:
            display_name = read_field(listing.read_text(encoding="utf-8"), "displayName")
        except (OSError, UnicodeDecodeError):
            logger.debug("No readable listing file in %s", project_path)
            return project_path.name
        return display_name or project_path.name

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def list_projects(self) -> list[Project]:
        """List projects sorted by display name.

        A missing pages root means no projects.
        """
        if not self.pages_root.exists():
            return []

        try:
            entries = list(self.pages_root.iterdir())
        except OSError as e:
            raise StorageIOError(f"Failed to read pages directory: {e}") from e

        projects = []
        for entry in entries:
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                logger.debug("Skipping unreadable entry %s", entry)
                continue
            projects.append(
                Project(
                    folder_name=entry.name,
                    display_name=self._display_name(entry),
                    path=entry,
                )
            )

        projects.sort(key=lambda p: (p.display_name, p.folder_name))
        return projects

    def create_project(self, display_name: str) -> Project:
        """Create a project directory with its generated files.

        Args:
            display_name: Name as typed by the user

        Raises:
            ValidationError: If the name sanitizes to nothing
            AlreadyExistsError: If the folder is taken
            StorageIOError: If writing fails
        """
        folder_name = sanitize_project_name(display_name)
        if not folder_name:
            raise ValidationError("Project name cannot be empty after sanitization")

        project_path = self.pages_root / folder_name
        if project_path.exists():
            raise AlreadyExistsError(f"Project '{folder_name}' already exists")

        try:
            project_path.mkdir(parents=True)
        except FileExistsError as e:
            raise AlreadyExistsError(f"Project '{folder_name}' already exists") from e
        except OSError as e:
            raise StorageIOError(f"Failed to create project directory: {e}") from e

        try:
            (project_path / LAYOUT_FILENAME).write_text(
                render_layout(folder_name), encoding="utf-8"
            )
        except OSError as e:
            raise StorageIOError(f"Failed to create layout file: {e}") from e

        try:
            (project_path / LISTING_FILENAME).write_text(
                render_listing(display_name, folder_name), encoding="utf-8"
            )
        except OSError as e:
            raise StorageIOError(f"Failed to create index file: {e}") from e

        logger.debug("Created project %s (%r)", folder_name, display_name)
        return Project(folder_name=folder_name, display_name=display_name, path=project_path)

    def rename_project(self, old_folder_name: str, new_display_name: str) -> Project:
        """Rename a project's display name, and its folder if that changes.

        Order: the listing metadata is rewritten while the directory still
        has its old name; then the directory is renamed; then the layout's
        folder reference is patched at the new path. A failure between the
        first two steps leaves new metadata in the old folder.

        Raises:
            ValidationError: If the new name sanitizes to nothing
            NotFoundError: If the project does not exist
            AlreadyExistsError: If the new folder name is taken
            MalformedMetadataError: If a generated file has no front matter
            StorageIOError: If a read, write, or rename fails
        """
        new_folder_name = sanitize_project_name(new_display_name)
        if not new_folder_name:
            raise ValidationError("Project name cannot be empty after sanitization")

        old_path = self._require_project(old_folder_name)
        new_path = self.pages_root / new_folder_name
        changing = new_folder_name != old_folder_name

        if changing and new_path.exists():
            raise AlreadyExistsError(f"Project '{new_folder_name}' already exists")

        listing = old_path / LISTING_FILENAME
        if not listing.is_file():
            raise NotFoundError(f"Project '{old_folder_name}' has no {LISTING_FILENAME}")
        try:
            text = listing.read_text(encoding="utf-8")
            atomic_write_text(
                listing,
                update_text(
                    text,
                    {"title": new_display_name, "displayName": new_display_name},
                    assignments={
                        "projectName": new_folder_name,
                        "folderName": new_folder_name,
                    },
                ),
            )
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(f"Failed to update {LISTING_FILENAME}: {e}") from e

        if not changing:
            return Project(folder_name=old_folder_name, display_name=new_display_name, path=old_path)

        try:
            os.rename(old_path, new_path)
        except OSError as e:
            logger.debug(
                "Listing for %s already names %s but the folder was not renamed",
                old_folder_name,
                new_folder_name,
            )
            raise StorageIOError(
                f"Failed to rename project directory '{old_folder_name}' to "
                f"'{new_folder_name}': {e}"
            ) from e
        logger.debug("Renamed project folder %s -> %s", old_folder_name, new_folder_name)

        layout = new_path / LAYOUT_FILENAME
        if layout.is_file():
            try:
                text = layout.read_text(encoding="utf-8")
                atomic_write_text(
                    layout,
                    update_text(text, {}, assignments={"projectName": new_folder_name}),
                )
            except (OSError, UnicodeDecodeError) as e:
                raise StorageIOError(f"Failed to update {LAYOUT_FILENAME}: {e}") from e
        else:
            logger.debug("No %s in %s to patch", LAYOUT_FILENAME, new_path)

        return Project(folder_name=new_folder_name, display_name=new_display_name, path=new_path)

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def list_posts(self, folder_name: str) -> list[Post]:
        """List a project's posts, sorted by filename, without content."""
        project_path = self._require_project(folder_name)

        try:
            entries = list(project_path.iterdir())
        except OSError as e:
            raise StorageIOError(f"Failed to read project directory: {e}") from e

        posts = []
        for entry in entries:
            if entry.suffix != POST_SUFFIX:
                continue
            try:
                if not entry.is_file():
                    continue
                content = entry.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                # Deleted or replaced since the scan
                logger.debug("Skipping unreadable post %s", entry)
                continue
            slug = entry.name[: -len(POST_SUFFIX)]
            posts.append(
                Post(filename=entry.name, slug=slug, title=resolve_title(content, slug))
            )

        posts.sort(key=lambda p: p.filename)
        return posts

    def create_post(self, folder_name: str, title: str, date: str | None = None) -> Post:
        """Create a post with a unique slug derived from its title.

        A taken slug gets -1, -2, ... appended; existing files are never
        overwritten.

        Args:
            folder_name: Project folder
            title: Post title
            date: Creation date YYYY-MM-DD (default: today, UTC)
        """
        project_path = self._require_project(folder_name)

        base_slug = sanitize_slug(title)
        if not base_slug:
            raise ValidationError("Post title cannot be empty after sanitization")

        if date is None:
            date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        content = render_post(title, date)

        slug = base_slug
        counter = 1
        while True:
            post_path = project_path / f"{slug}{POST_SUFFIX}"
            if not post_path.exists():
                try:
                    with open(post_path, "x", encoding="utf-8") as f:
                        f.write(content)
                    break
                except FileExistsError:
                    logger.debug("%s appeared concurrently, trying next suffix", post_path)
                except OSError as e:
                    raise StorageIOError(f"Failed to create post file: {e}") from e
            slug = f"{base_slug}-{counter}"
            counter += 1

        logger.debug("Created post %s/%s", folder_name, post_path.name)
        return Post(filename=post_path.name, slug=slug, title=title, content=content)

    def read_post(self, folder_name: str, slug: str) -> Post:
        """Read a post with its full content."""
        post_path = self._require_post(folder_name, slug)
        try:
            content = post_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(f"Failed to read post file: {e}") from e
        return Post(
            filename=post_path.name,
            slug=slug,
            title=resolve_title(content, slug),
            content=content,
        )

    def update_post(self, folder_name: str, slug: str, content: str) -> Post:
        """Replace a post's content atomically.

        Content is written verbatim; front matter is not checked. Update never
        creates a post.
        """
        post_path = self._require_post(folder_name, slug)
        try:
            atomic_write_text(post_path, content)
        except OSError as e:
            raise StorageIOError(f"Failed to replace post file: {e}") from e
        return Post(
            filename=post_path.name,
            slug=slug,
            title=resolve_title(content, slug),
            content=content,
        )

    def delete_post(self, folder_name: str, slug: str) -> None:
        """Delete a post file. There is no trash."""
        post_path = self._require_post(folder_name, slug)
        try:
            post_path.unlink()
        except OSError as e:
            raise StorageIOError(f"Failed to delete post file: {e}") from e
        logger.debug("Deleted post %s/%s", folder_name, post_path.name)
