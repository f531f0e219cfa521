from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from referral_network.cli import options
from referral_network.cli.utils import build_criteria, load_view, write_text
from referral_network.exporter import serialize_view_to_json_string

console = Console(stderr=True)


def export_command(
    records: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
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
    Export the (filtered) referral forest to JSON (stdout by default).
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

    if verbose:
        console.log("Exporting JSON")

    write_text(serialize_view_to_json_string(view, indent=2 if pretty else None), out=out)

    if verbose:
        console.log("Export complete")
