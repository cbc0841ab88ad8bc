"""
Shared pieces of the batch commands.

Both commands walk their arguments in order, print one block per argument,
and stop early only when the service cannot be reached or answers with a
malformed body.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

console = Console(soft_wrap=True, highlight=False)


@dataclass
class BatchReport:
    """Tally of one batch run."""

    succeeded: int = 0
    rejected: int = 0
    invalid: int = 0
    aborted: bool = False


def print_invalid_strid(strid: str) -> None:
    """Explain which characters a string ID may contain."""
    console.print(f"[red]\\[!] String ID `{escape(strid)}` invalid.[/red] A String ID must only contain:")
    console.print("  - latin letters (A-Z and a-z)")
    console.print("  - minuses (-)")
    console.print("  - underscores (_)")
    console.print("  - numbers (0-9)")


def print_unreachable(base_url: str) -> None:
    console.print(f"[red]\\[!] Offline or {escape(base_url)} unreachable[/red]")


def print_protocol_violation(base_url: str, message: str) -> None:
    console.print(f"[red]\\[!] Malformed response from {escape(base_url)}: {escape(message)}[/red]")
