"""
Shortener CLI application.

Usage:
    shortener <url>(+<strid>) ...      # add every url listed
    shortener stats <strid> ...        # check stats of every string ID

Options:
    --base-url        Shortener service address (env: SHORTENER_BASE_URL)
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message

Exit status is 1 when a batch had to stop early because the service was
unreachable or answered with a malformed body, 2 when the configuration
is invalid, 0 otherwise.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from shortener.cli.client import ShortenerClient
from shortener.cli.commands import BatchReport, run_add_batch, run_stats_batch
from shortener.cli.strid import STRID_SEPARATOR
from shortener.core.exceptions import ApplicationError
from shortener.core.logging import setup_logging

STATS_MODE = "stats"

EXIT_BATCH_ABORTED = 1
EXIT_CONFIGURATION_ERROR = 2

app = typer.Typer(
    name="shortener",
    help="URL shortener client - shorten links and check their stats.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console(soft_wrap=True, highlight=False)


@app.command()
def main(
    ctx: typer.Context,
    arguments: Optional[list[str]] = typer.Argument(
        None,
        metavar="ITEMS...",
        help=f"Links as <url>({STRID_SEPARATOR}<strid>), or `stats` followed by string IDs.",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        envvar="SHORTENER_BASE_URL",
        help="Shortener service address. Defaults to config/settings/application.yaml.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Shorten links or check the stats of shortened links.

    Examples:
        shortener http://example.com
        shortener http://example.com+mylink http://example.org
        shortener stats mylink
    """
    try:
        if debug:
            setup_logging(level="DEBUG", format_type="console")
        elif verbose:
            setup_logging(level="INFO", format_type="console")
        else:
            setup_logging()

        if not arguments:
            _print_usage(ctx.command_path)
            return

        client = ShortenerClient(base_url=base_url)
    except ApplicationError as e:
        console.print(f"[red]\\[!] {escape(e.message)}[/red]")
        raise typer.Exit(EXIT_CONFIGURATION_ERROR)

    report = asyncio.run(_run(client, arguments))

    if report.aborted:
        raise typer.Exit(EXIT_BATCH_ABORTED)


async def _run(client: ShortenerClient, arguments: list[str]) -> BatchReport:
    """Dispatch to the batch matching the first argument."""
    async with client:
        if arguments[0].lower() == STATS_MODE:
            return await run_stats_batch(client, arguments[1:])
        return await run_add_batch(client, arguments)


def _print_usage(command: str) -> None:
    console.print("[red]\\[!] No arguments given![/red]")
    console.print("<?> Help:")
    console.print(
        f"The URLs are written in the `<url>({STRID_SEPARATOR}<strid>)` format. "
        f"The `{STRID_SEPARATOR}` is a separator."
    )
    console.print(f"{command} <urls>         | add every url listed")
    console.print(f"{command} stats <strids> | check stats of every url")


def run() -> None:
    """Console script entry point."""
    app()
