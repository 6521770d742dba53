"""CLI commands for project management."""

from __future__ import annotations

import json as json_module
from dataclasses import asdict

import click
from rich.console import Console
from rich.table import Table

from studio.content.store import Project
from studio.core.errors import StoreError

console = Console()


def _project_dict(project: Project) -> dict[str, str]:
    data = asdict(project)
    data["path"] = str(project.path)
    return data


@click.group(name="projects")
def projects() -> None:
    """Manage projects (site sections).

    Each project is a folder under src/pages with generated
    _layout.astro and index.astro files.
    """
    pass


@projects.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON array")
@click.pass_obj
def list_projects(ctx, as_json: bool) -> None:
    """List projects sorted by display name."""
    try:
        items = ctx.store().list_projects()
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json_module.dumps([_project_dict(p) for p in items], indent=2))
        return

    if not items:
        console.print("[yellow]No projects found.[/yellow]")
        console.print("[dim]Create one with: studio projects create \"My Blog\"[/dim]")
        return

    table = Table(title=f"Projects ({len(items)})")
    table.add_column("Name", no_wrap=False)
    table.add_column("Folder", style="cyan")

    for p in items:
        table.add_row(p.display_name, p.folder_name)

    console.print(table)


@projects.command(name="create")
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def create_project(ctx, name: str, as_json: bool) -> None:
    """Create a project from a display NAME.

    \b
    Examples:
        studio projects create "My Blog!"     # folder: my-blog
    """
    try:
        project = ctx.store().create_project(name)
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json_module.dumps(_project_dict(project), indent=2))
        return

    console.print(f"[green]Created:[/green] {project.display_name} [cyan]({project.folder_name})[/cyan]")
    console.print(f"[dim]{project.path}[/dim]")


@projects.command(name="rename")
@click.argument("folder")
@click.argument("new_name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def rename_project(ctx, folder: str, new_name: str, as_json: bool) -> None:
    """Rename project FOLDER to NEW_NAME.

    The folder is renamed too when NEW_NAME sanitizes to a different
    folder name.
    """
    try:
        project = ctx.store().rename_project(folder, new_name)
    except StoreError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(json_module.dumps(_project_dict(project), indent=2))
        return

    if project.folder_name != folder:
        console.print(
            f"[green]Renamed[/green] [cyan]{folder}[/cyan] -> "
            f"[cyan]{project.folder_name}[/cyan] ({project.display_name})"
        )
    else:
        console.print(
            f"[green]Renamed[/green] [cyan]{folder}[/cyan] to {project.display_name} "
            "[dim](folder unchanged)[/dim]"
        )
