"""
Stats Command.

Looks up click count and destination for every string ID argument.
Unknown IDs are reported and skipped; an unreachable service ends the batch.
"""

from typing import assert_never

from rich.markup import escape

from shortener.cli.client import ShortenerClient
from shortener.cli.commands.base import (
    BatchReport,
    console,
    print_invalid_strid,
    print_protocol_violation,
    print_unreachable,
)
from shortener.cli.outcomes import Rejected, Success, Unreachable
from shortener.cli.strid import is_valid_strid
from shortener.core.exceptions import ProtocolViolationError
from shortener.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


async def run_stats_batch(client: ShortenerClient, strids: list[str]) -> BatchReport:
    """Show stats for every string ID, stopping at the first unreachable answer."""
    report = BatchReport()

    for strid in strids:
        if not is_valid_strid(strid):
            print_invalid_strid(strid)
            report.invalid += 1
            continue

        short_url = escape(f"{client.base_url}/{strid}")

        try:
            outcome = await client.stats(strid)
        except ProtocolViolationError as e:
            print_protocol_violation(client.base_url, e.message)
            report.aborted = True
            break

        match outcome:
            case Success(stats):
                console.print(f"{short_url}:")
                console.print(f"  - {escape(stats.url)}")
                console.print(f"  - {stats.clicks} clicks")
                report.succeeded += 1
            case Rejected():
                console.print(f"[yellow]\\[!] {short_url} not found[/yellow]")
                report.rejected += 1
            case Unreachable():
                print_unreachable(client.base_url)
                report.aborted = True
                break
            case _:
                assert_never(outcome)

    log_with_source(
        logger,
        "cli",
        "info",
        "Stats batch finished",
        succeeded=report.succeeded,
        rejected=report.rejected,
        invalid=report.invalid,
        aborted=report.aborted,
    )
    return report
