"""
Add Command.

Shortens every `<url>(+<strid>)` argument in order. Rejected links and
invalid string IDs are reported and skipped; an unreachable service ends
the batch.
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
from shortener.cli.outcomes import Rejected, RejectionReason, Success, Unreachable
from shortener.cli.strid import is_valid_strid, split_link_argument
from shortener.core.exceptions import ProtocolViolationError
from shortener.core.logging import get_logger, log_with_source
from shortener.schemas.link import ShortLink

logger = get_logger(__name__)


async def run_add_batch(client: ShortenerClient, arguments: list[str]) -> BatchReport:
    """Add every link in arguments, stopping at the first unreachable answer."""
    report = BatchReport()

    for argument in arguments:
        url, strid = split_link_argument(argument)

        if strid is not None and not is_valid_strid(strid):
            print_invalid_strid(strid)
            report.invalid += 1
            continue

        try:
            if strid is None:
                outcome = await client.add(url)
            else:
                outcome = await client.add_with_id(url, strid)
        except ProtocolViolationError as e:
            print_protocol_violation(client.base_url, e.message)
            report.aborted = True
            break

        match outcome:
            case Success(link):
                _display_link(client.base_url, url, link)
                report.succeeded += 1
            case Rejected(reason):
                _display_rejection(client.base_url, url, strid, reason)
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
        "Add batch finished",
        succeeded=report.succeeded,
        rejected=report.rejected,
        invalid=report.invalid,
        aborted=report.aborted,
    )
    return report


def _display_link(base_url: str, url: str, link: ShortLink) -> None:
    console.print(f"{escape(url)}:")
    console.print(f"  - {escape(link.string_url(base_url))}")
    console.print(f"  - {escape(link.numeric_url(base_url))}")


def _display_rejection(
    base_url: str,
    url: str,
    strid: str | None,
    reason: RejectionReason,
) -> None:
    match reason:
        case RejectionReason.STRID_NOT_UNIQUE:
            console.print(f"[yellow]\\[!] String ID `{escape(strid or '')}` already used[/yellow]")
        case RejectionReason.TOO_SHORT:
            console.print(f"[yellow]\\[!] {escape(url)} is too short to be shortened[/yellow]")
        case _:
            console.print(f"[yellow]\\[!] {escape(url)} rejected by {escape(base_url)}: {reason}[/yellow]")
