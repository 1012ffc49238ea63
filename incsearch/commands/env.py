"""
Environment inspection command for incsearch
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from incsearch.config.settings import get_config_dir, get_env_info

console = Console()


def env():
    """Show incsearch environment variables and whether they are valid"""
    table = Table(title="incsearch environment")
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Status")

    invalid = 0
    for name, info in get_env_info().items():
        if not info["is_set"]:
            value = "[dim]-[/dim]"
        else:
            value = escape(info["value"] or "")
        if info["valid"]:
            status = "[green]ok[/green]"
        else:
            status = "[red]invalid[/red]"
            invalid += 1
        table.add_row(name, value, escape(info["default"] or "-"), status)

    console.print(table)
    console.print(f"[dim]Config directory: {get_config_dir()}[/dim]")
    if invalid:
        console.print(f"[red]{invalid} invalid setting(s)[/red]")
