"""
Typer options shared by every command that loads a record file.
"""

from __future__ import annotations

import typer

TIER = typer.Option(None, "--tier", "-t", help="Keep tier (repeatable, case-insensitive)")
STATUS = typer.Option(None, "--status", "-s", help="Keep status (repeatable)")
NETWORK = typer.Option(None, "--network", "-n", help="Keep network id (repeatable)")
LEVEL = typer.Option(None, "--level", "-l", help='Keep level, e.g. "Level 2" or 2 (repeatable)')
MIN_EARNINGS = typer.Option(None, "--min-earnings", help="Minimum earnings")
MAX_EARNINGS = typer.Option(None, "--max-earnings", help="Maximum earnings")
MIN_REFERRALS = typer.Option(None, "--min-referrals", help="Minimum referral count")
MAX_REFERRALS = typer.Option(None, "--max-referrals", help="Maximum referral count")
JOINED_FROM = typer.Option(None, "--joined-from", help="Earliest join day (YYYY-MM-DD)")
JOINED_TO = typer.Option(None, "--joined-to", help="Latest join day (YYYY-MM-DD)")
MODE = typer.Option(None, "--mode", "-m", help="strict | network | lineage")
QUERY = typer.Option("", "--query", "-q", help="Spotlight search text")
VERBOSE = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
