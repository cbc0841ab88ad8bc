"""
CLI Commands.

One batch runner per mode.
"""

from shortener.cli.commands.add import run_add_batch
from shortener.cli.commands.base import BatchReport
from shortener.cli.commands.stats import run_stats_batch

__all__ = [
    "BatchReport",
    "run_add_batch",
    "run_stats_batch",
]
