"""CLI for azblob-getter."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .config import GetterSettings, load_settings
from .errors import ConfigError, GetterError
from .getter import AzureBlobGetter, ClientMode


app = typer.Typer(help="""\
Download a blob or a blob "directory" from Azure Blob Storage.

Addresses look like https://<account>.blob.core.windows.net/<container>/<path>,
optionally with ?access_key=<shared key> or a SAS token as the query string.""")

console = Console()
err_console = Console(stderr=True)


def make_getter(settings: Optional[GetterSettings]) -> AzureBlobGetter:
    """Create the getter used by all commands."""
    return AzureBlobGetter(settings=settings)


def _fail(e: Exception) -> None:
    err_console.print(f"[red]✗[/red] {e}")
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log listing and download activity"),
):
    """Configure logging and load settings for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_settings(config)
    except ConfigError as e:
        _fail(e)


@app.command()
def mode(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Blob address"),
):
    """Print whether ADDRESS names a file or a directory."""
    try:
        result = make_getter(ctx.obj).client_mode(address)
    except GetterError as e:
        _fail(e)
    console.print(result.value)


@app.command()
def get(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Blob address"),
    dest: Path = typer.Argument(..., help="Local destination (replaced for directories)"),
):
    """Download ADDRESS into DEST, detecting file or directory mode.

    Examples:
        azblob-getter get https://acct.blob.core.windows.net/c/folder ./out
        azblob-getter get https://acct.blob.core.windows.net/c/main.tf ./main.tf
    """
    getter = make_getter(ctx.obj)
    try:
        if getter.client_mode(address) == ClientMode.FILE:
            path = getter.get_file(dest, address)
            console.print(f"[green]✓[/green] Downloaded {path}")
        else:
            paths = getter.get(dest, address)
            console.print(f"[green]✓[/green] Downloaded {len(paths)} file(s) into {dest}")
    except (GetterError, OSError) as e:
        _fail(e)


@app.command("get-file")
def get_file(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Object address"),
    dest: Path = typer.Argument(..., help="Local destination file"),
):
    """Download the single object at ADDRESS to DEST."""
    try:
        path = make_getter(ctx.obj).get_file(dest, address)
    except (GetterError, OSError) as e:
        _fail(e)
    console.print(f"[green]✓[/green] Downloaded {path}")
