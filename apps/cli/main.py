"""CLI application for wsprobe."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from wsprobe.config import ConfigError, load_config
from wsprobe.detect import Workspaces, get_workspaces, parse_kind
from wsprobe.errors import WorkspaceError
from wsprobe.logging import configure_logging
from wsprobe.models import Missing, WorkspaceInfo

console = Console()


def format_json_output(info: WorkspaceInfo | None, workspaces: Workspaces) -> str:
    """Format JSON output."""
    if info is not None:
        return json.dumps({"status": "found", "workspace": info.as_dict()}, indent=2)

    broken = workspaces.broken()
    if broken:
        return json.dumps(
            {
                "status": "broken",
                "manifest_path": str(broken[0].manifest_path),
                "cause": str(broken[0].cause),
            },
            indent=2,
        )

    causes = [str(search.cause) for search in workspaces.searches.values() if isinstance(search, Missing)]
    return json.dumps({"status": "missing", "causes": causes}, indent=2)


def render_workspace(info: WorkspaceInfo) -> None:
    """Print a found workspace as a table of its packages."""
    console.print(f"[bold]{info.kind.value}[/bold] workspace at {info.workspace_dir}")
    console.print(f"manifest: {info.manifest_path}")
    if info.repository_url:
        console.print(f"repository: {info.repository_url}")

    table = Table()
    table.add_column("Package")
    table.add_column("Version")
    table.add_column("Binaries")
    table.add_column("License")
    for package in info.package_info.values():
        table.add_row(
            package.name,
            str(package.version) if package.version else "-",
            ", ".join(package.binaries) or "-",
            package.license or "-",
        )
    console.print(table)

    for warning in info.warnings:
        console.print(f"warning: {warning}", style="yellow")


app = typer.Typer(
    name="wsprobe",
    help="wsprobe - Find and describe the workspace a directory belongs to",
    add_completion=False,
)


@app.command()
def discover(
    path: str = typer.Argument(".", help="Directory to start searching from (dist.toml, package.json)"),
    clamp: str | None = typer.Option(None, "--clamp", "-c", help="Never search above this directory"),
    kind: list[str] | None = typer.Option(None, "--kind", "-k", help="Only probe these ecosystems"),
    format_type: str = typer.Option("text", "--format", help="Output format: text or json"),
    config_path: str | None = typer.Option(None, "--config", help="Config file (default: .wsprobe.toml in PATH)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every step of the search"),
) -> None:
    """Find the workspace PATH belongs to and describe its packages.

    Exits 0 when a workspace is found, 2 when none exists, and 1 when a
    manifest was found but is broken.
    """
    try:
        start_dir = Path(path)
        if not start_dir.is_dir():
            console.print(f"Error: Directory {path} not found", style="red")
            raise typer.Exit(1)

        config = load_config(Path(config_path) if config_path else start_dir)
        configure_logging(verbose=verbose or config.verbose)

        kinds = [parse_kind(item) for item in kind] if kind else config.kinds or None
        clamp_dir = Path(clamp) if clamp else config.clamp_dir

        workspaces = get_workspaces(start_dir, clamp_dir, kinds)
        try:
            info = workspaces.best()
        except WorkspaceError:
            if format_type == "json":
                typer.echo(format_json_output(None, workspaces))
            else:
                console.print(f"Error: {workspaces.broken()[0]}", style="red")
            raise typer.Exit(1)

        if format_type == "json":
            typer.echo(format_json_output(info, workspaces))
        elif info is None:
            console.print("No workspace found")
        else:
            render_workspace(info)

        if info is None:
            raise typer.Exit(2)  # Nothing to describe exit code

    except typer.Exit:
        # Re-raise typer exits (like Exit(2) for nothing found)
        raise
    except (ConfigError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
