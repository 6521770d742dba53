"""
Main CLI dispatcher for studio.

Usage:
    studio init                              # Create ~/Documents/studio on first run
    studio projects [list|create|rename]
    studio posts [list|create|read|update|delete]
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from studio import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, documents_dir: Path | None = None):
        self.verbose = verbose
        self.documents_dir = documents_dir
        self.console = console

    def paths(self):
        from studio.core.config import get_paths

        return get_paths(self.documents_dir)

    def store(self):
        """Build a ContentStore rooted at the workspace's pages directory."""
        from studio.content.store import ContentStore

        return ContentStore(self.paths().pages)


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="studio")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--documents-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Documents directory holding studio/ (default: from config)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, documents_dir: Path | None) -> None:
    """Studio content tools.

    Manage projects and Markdown posts for the Studio site.
    """
    ctx.obj = Context(verbose=verbose, documents_dir=documents_dir)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@main.command()
@click.option("--force", "-f", is_flag=True, help="Copy missing starter files into an existing workspace")
@pass_context
def init(ctx: Context, force: bool) -> None:
    """Initialize the studio workspace.

    Creates <documents>/studio from the starter site on first run.
    """
    from studio.core.config import get_starter_template_dir
    from studio.core.errors import StoreError
    from studio.workspace.bootstrap import initialize_workspace

    paths = ctx.paths()

    try:
        result = initialize_workspace(
            paths,
            force=force,
            template_dir=get_starter_template_dir(),
        )
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if result.is_first_time:
        console.print(f"[cyan]Initializing studio workspace at {paths.studio}[/cyan]")
    for rel in result.copied:
        console.print(f"  [green]Created[/green] {rel}")

    console.print()
    if result.is_first_time:
        console.print(f"[green]Done![/green] {result.message}")
    else:
        console.print(f"[yellow]{result.message}[/yellow]")
        if not force:
            console.print("[dim]Use --force to copy missing starter files.[/dim]")


# Import and register command groups (imports after main definition intentional)
from studio.posts.commands import posts  # noqa: E402
from studio.projects.commands import projects  # noqa: E402

main.add_command(projects)
main.add_command(posts)


if __name__ == "__main__":
    main()
