#!/usr/bin/env python3
"""
Main CLI entry point for incsearch
"""

import logging

import typer
from rich.console import Console
from rich.markup import escape

from incsearch import __version__
from incsearch.commands.env import env
from incsearch.commands.search import browse, find
from incsearch.config.settings import get_config_dir, get_env_var, validate_all_env_vars
from incsearch.utils.logging import setup_logging

console = Console()

app = typer.Typer(help="Incremental, paged GitHub user search")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
    """
    incsearch - incremental GitHub user search

    [bold]Examples:[/bold]

    Print the first two pages of matches:
        [cyan]incsearch find "tom location:berlin" --pages 2[/cyan]

    Search interactively:
        [cyan]incsearch browse[/cyan]
    """
    # `env` must still run with a broken environment so it can show what is wrong.
    if ctx.invoked_subcommand != "env":
        errors = validate_all_env_vars()
        if errors:
            for error in errors:
                console.print(f"[red]Configuration error: {escape(error)}[/red]")
            console.print("[dim]Run 'incsearch env' to inspect settings[/dim]")
            raise typer.Exit(1)

    level_name = "DEBUG"
    if not verbose:
        level_name = get_env_var("INCSEARCH_LOG_LEVEL", validate=False) or "INFO"
    setup_logging(get_config_dir(), getattr(logging, level_name.upper(), logging.INFO))


@app.command()
def version():
    """Show incsearch version"""
    typer.echo(f"incsearch version {__version__}")


app.command()(find)
app.command()(browse)
app.command()(env)


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
