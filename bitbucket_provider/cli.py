"""
Bitbucket Provider CLI - Inspect and manage workspace groups directly.

Runs the same operations the Pulumi engine drives, without a stack. Handy for
checking credentials, looking up slugs before an import, or cleaning up.
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .client import BitbucketClient
from .models import GroupConfig, GroupState, parse_group_id
from .pulumi_providers.group import GroupProvider
from .settings import get_settings

# Setup
app = typer.Typer(
    name="bitbucket-groups",
    help="Manage Bitbucket workspace groups",
    add_completion=False,
)
console = Console()


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Configure logging on module import
configure_logging()


def _get_provider() -> GroupProvider:
    """Build a provider with a client configured from settings."""
    return GroupProvider(client=BitbucketClient.from_settings())


def _print_group(state: GroupState, title: str) -> None:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("id", state.id)
    table.add_row("workspace", state.workspace)
    table.add_row("slug", state.slug)
    table.add_row("name", state.name)
    table.add_row("auto_add", str(state.auto_add).lower())
    table.add_row("permission", state.permission or "-")
    console.print(table)


def _handle_command_error(e: Exception, command_type: str) -> None:
    """Handle command errors with appropriate formatting.

    Args:
        e: Exception that occurred
        command_type: Type of command (for error message context)

    Raises:
        SystemExit: Always exits with code 1
    """
    console.print(
        f"\n[bold red]✗ {command_type.capitalize()} failed:[/bold red] {escape(str(e))}"
    )
    raise typer.Exit(code=1)


@app.command()
def get(
    identity: str = typer.Argument(..., help="Group ID as WORKSPACE/SLUG"),
):
    """Show a group."""
    try:
        state = _get_provider().read_group(identity)
    except Exception as e:
        _handle_command_error(e, "get")

    if state is None:
        console.print(f"[bold red]✗ Group {identity} not found[/bold red]")
        raise typer.Exit(code=1)

    _print_group(state, f"Group {identity}")


@app.command()
def create(
    workspace: str = typer.Argument(..., help="Workspace slug"),
    name: str = typer.Argument(..., help="Group display name"),
    auto_add: Optional[bool] = typer.Option(
        None, "--auto-add/--no-auto-add", help="Add new workspace members automatically"
    ),
    permission: Optional[str] = typer.Option(
        None, "--permission", help="Default permission: read, write or admin"
    ),
):
    """Create a group."""
    try:
        config = GroupConfig(
            workspace=workspace, name=name, auto_add=auto_add, permission=permission
        )
        state = _get_provider().create_group(config)
    except Exception as e:
        _handle_command_error(e, "create")

    console.print(f"\n[bold green]✓ Created group {state.id}[/bold green]")
    _print_group(state, f"Group {state.id}")


@app.command()
def update(
    identity: str = typer.Argument(..., help="Group ID as WORKSPACE/SLUG"),
    name: str = typer.Argument(..., help="Group display name"),
    auto_add: Optional[bool] = typer.Option(
        None, "--auto-add/--no-auto-add", help="Add new workspace members automatically"
    ),
    permission: Optional[str] = typer.Option(
        None, "--permission", help="Default permission: read, write or admin"
    ),
):
    """Update a group's name, auto_add flag or permission."""
    try:
        workspace, _slug = parse_group_id(identity)
        config = GroupConfig(
            workspace=workspace, name=name, auto_add=auto_add, permission=permission
        )
        state = _get_provider().update_group(identity, config)
    except Exception as e:
        _handle_command_error(e, "update")

    console.print(f"\n[bold green]✓ Updated group {state.id}[/bold green]")
    _print_group(state, f"Group {state.id}")


@app.command()
def delete(
    identity: str = typer.Argument(..., help="Group ID as WORKSPACE/SLUG"),
):
    """Delete a group."""
    try:
        _get_provider().delete_group(identity)
    except Exception as e:
        _handle_command_error(e, "delete")

    console.print(f"\n[bold green]✓ Deleted group {identity}[/bold green]")


@app.command()
def version():
    """Show provider version."""
    from . import __version__

    console.print(f"Bitbucket provider version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
