from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from referral_network.cli import options
from referral_network.cli.utils import build_criteria, load_view

console = Console()


def stats_command(
    records: Path = typer.Argument(..., exists=True, readable=True),
    tier: Optional[List[str]] = options.TIER,
    status: Optional[List[str]] = options.STATUS,
    network: Optional[List[str]] = options.NETWORK,
    level: Optional[List[str]] = options.LEVEL,
    min_earnings: Optional[float] = options.MIN_EARNINGS,
    max_earnings: Optional[float] = options.MAX_EARNINGS,
    min_referrals: Optional[int] = options.MIN_REFERRALS,
    max_referrals: Optional[int] = options.MAX_REFERRALS,
    joined_from: Optional[str] = options.JOINED_FROM,
    joined_to: Optional[str] = options.JOINED_TO,
    mode: Optional[str] = options.MODE,
    query: str = options.QUERY,
    verbose: bool = options.VERBOSE,
):
    """
    Show summary statistics for a referral network record file.
    """
    criteria = build_criteria(
        tiers=tier,
        statuses=status,
        networks=network,
        levels=level,
        min_earnings=min_earnings,
        max_earnings=max_earnings,
        min_referrals=min_referrals,
        max_referrals=max_referrals,
        joined_from=joined_from,
        joined_to=joined_to,
    )
    view = load_view(records, criteria=criteria, mode=mode, query=query, verbose=verbose)
    stats = view.stats

    table = Table(title=f"Referral Network Statistics ({view.mode.value})")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Members", f"{stats.total_users:,}")
    table.add_row("Active members", f"{stats.active_users:,}")
    table.add_row("Levels", str(stats.active_levels))
    table.add_row("Total earnings", f"{stats.total_earnings:,.2f}")
    table.add_row("Average earnings", f"{stats.average_earnings:,.2f}")
    table.add_row("Wallet balance", f"{stats.total_wallet_balance:,.2f}")
    table.add_row("Referrals", f"{stats.total_referrals:,}")
    table.add_row("Roots", str(len(view.roots)))
    table.add_row("Orphans", str(len(view.forest.orphans)))
    table.add_row("Cycles broken", str(len(view.forest.cycles)))
    if view.search.results is not None:
        table.add_row("Search hits", str(len(view.search.results)))

    console.print(table)
