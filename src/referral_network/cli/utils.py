from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from referral_network.config import get_config
from referral_network.core.context import NetworkContext, NetworkView
from referral_network.core.pipeline import NetworkPipeline
from referral_network.filters.criteria import FilterCriteria
from referral_network.logging import get_logger, set_debug
from referral_network.records.loader import load_records

console = Console()


def build_criteria(
    *,
    tiers: Optional[List[str]] = None,
    statuses: Optional[List[str]] = None,
    networks: Optional[List[str]] = None,
    levels: Optional[List[str]] = None,
    min_earnings: Optional[float] = None,
    max_earnings: Optional[float] = None,
    min_referrals: Optional[int] = None,
    max_referrals: Optional[int] = None,
    joined_from: Optional[str] = None,
    joined_to: Optional[str] = None,
) -> FilterCriteria:
    """
    Translate CLI option values into FilterCriteria.
    """
    return FilterCriteria.from_mapping(
        {
            "tiers": tiers,
            "statuses": statuses,
            "networks": networks,
            "levels": levels,
            "minEarnings": min_earnings,
            "maxEarnings": max_earnings,
            "minReferrals": min_referrals,
            "maxReferrals": max_referrals,
            "dateRange": {"start": joined_from, "end": joined_to},
        }
    )


def load_view(
    path: Path,
    *,
    criteria: FilterCriteria,
    mode: Optional[str] = None,
    query: str = "",
    verbose: bool = False,
) -> NetworkView:
    """
    Full pipeline runner: record file -> filtered, searched view.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    if verbose:
        set_debug(True)

    t0 = time.perf_counter()

    cfg = get_config()
    ctx = NetworkContext(
        config=cfg,
        logger=get_logger("cli"),
        criteria=criteria,
        mode=mode,
        query=query,
    )
    view = NetworkPipeline(ctx).run(load_records(path))

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded {len(view.forest)} members in {elapsed:.2f}s")

    return view


def write_text(payload: str, *, out: Path | None) -> None:
    """
    Write a payload to stdout or file.
    """
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
