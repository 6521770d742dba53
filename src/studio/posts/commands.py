"""CLI commands for post management.

Posts are <slug>.md files directly inside a project folder.
"""

from __future__ import annotations

import json as json_module
import re
import sys
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from studio.core.errors import StoreError

console = Console()


def _validate_date(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    """Click callback: accept only YYYY-MM-DD."""
    if value is None:
        return None
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        raise click.BadParameter(f"Invalid date: {value}. Use YYYY-MM-DD.")
    return value


@click.group(name="posts")
def posts() -> None:
    """Manage posts inside a project."""
    pass


# ---------------------------------------------------------------------------
# studio posts list
# ---------------------------------------------------------------------------


@posts.command(name="list")
@click.argument("folder")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON array")
@click.pass_obj
def list_posts(ctx, folder: str, as_json: bool) -> None:
    """List posts in project FOLDER, sorted by file name."""
    try:
        items = ctx.store().list_posts(folder)
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if as_json:
        output = [{"filename": p.filename, "slug": p.slug, "title": p.title} for p in items]
        click.echo(json_module.dumps(output, indent=2))
        return

    if not items:
        console.print(f"[yellow]No posts in {folder}.[/yellow]")
        return

    table = Table(title=f"Posts in {folder} ({len(items)})")
    table.add_column("Slug", style="cyan")
    table.add_column("Title", no_wrap=False)

    for p in items:
        table.add_row(p.slug, p.title)

    console.print(table)


# ---------------------------------------------------------------------------
# studio posts create
# ---------------------------------------------------------------------------


@posts.command(name="create")
@click.argument("folder")
@click.argument("title")
@click.option(
    "--date",
    default=None,
    callback=_validate_date,
    help="Post date YYYY-MM-DD (default: today)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def create_post(ctx, folder: str, title: str, date: str | None, as_json: bool) -> None:
    """Create a post titled TITLE in project FOLDER.

    The slug comes from the title; -1, -2, ... is appended if it is taken.
    """
    try:
        post = ctx.store().create_post(folder, title, date=date)
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json_module.dumps(asdict(post), indent=2))
        return

    console.print(f"[green]Created:[/green] {folder}/{post.filename}")


# ---------------------------------------------------------------------------
# studio posts read
# ---------------------------------------------------------------------------


@posts.command(name="read")
@click.argument("folder")
@click.argument("slug")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def read_post(ctx, folder: str, slug: str, as_json: bool) -> None:
    """Print the raw content of post SLUG in project FOLDER."""
    try:
        post = ctx.store().read_post(folder, slug)
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json_module.dumps(asdict(post), indent=2))
        return

    click.echo(post.content, nl=False)


# ---------------------------------------------------------------------------
# studio posts update
# ---------------------------------------------------------------------------


@posts.command(name="update")
@click.argument("folder")
@click.argument("slug")
@click.option(
    "--file",
    "source",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read new content from this file (default: stdin)",
)
@click.pass_obj
def update_post(ctx, folder: str, slug: str, source: Path | None) -> None:
    """Replace the full content of post SLUG in project FOLDER.

    \b
    Examples:
        studio posts update my-blog hello-world --file draft.md
        cat draft.md | studio posts update my-blog hello-world
    """
    try:
        if source is not None:
            content = source.read_text(encoding="utf-8")
        else:
            content = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Failed to read new content: {e}[/red]")
        raise SystemExit(1)

    try:
        post = ctx.store().update_post(folder, slug, content)
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    console.print(f"[green]Updated[/green] [cyan]{folder}/{post.filename}[/cyan]")


# ---------------------------------------------------------------------------
# studio posts delete
# ---------------------------------------------------------------------------


@posts.command(name="delete")
@click.argument("folder")
@click.argument("slug")
@click.option("-y", "--yes", is_flag=True, help="Delete without confirmation")
@click.pass_obj
def delete_post(ctx, folder: str, slug: str, yes: bool) -> None:
    """Delete post SLUG from project FOLDER. There is no undo."""
    if not yes and not Confirm.ask(f"Delete {folder}/{slug}.md?", default=False):
        console.print("[dim]Cancelled.[/dim]")
        return

    try:
        ctx.store().delete_post(folder, slug)
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    console.print(f"[green]Deleted[/green] [cyan]{folder}/{slug}.md[/cyan]")
