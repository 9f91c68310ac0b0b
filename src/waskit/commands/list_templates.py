"""create-waskit list - Show available templates."""

import sys

import click
from rich.markup import escape
from rich.table import Table

from waskit.core.config import load_config
from waskit.core.errors import WaskitError
from waskit.core.registry import TemplateRegistry
from waskit.ui.theme import make_console

console = make_console()
err_console = make_console(stderr=True)


@click.command()
def list_cmd():
    """List all available templates."""
    config = load_config()

    try:
        registry = TemplateRegistry.load(config.templates_dir)
    except WaskitError as e:
        err_console.print(f"[error]Error:[/] {escape(str(e))}")
        sys.exit(1)

    console.print("\n[bold]Available templates[/]\n")

    table = Table()
    table.add_column("Template", style="cyan")
    table.add_column("Name")
    table.add_column("Description", style="text.dim")

    for descriptor in registry.list():
        table.add_row(descriptor.id, descriptor.name, descriptor.description)

    console.print(table)

    console.print("\n[bold]Usage:[/]")
    console.print("  create-waskit my-app --template react-typescript")
