"""
CLI command modules for referral_network.

Each command module defines a single Typer-compatible command function.
"""

from referral_network.cli.commands.export import export_command
from referral_network.cli.commands.stats import stats_command

__all__ = [
    "export_command",
    "stats_command",
]
