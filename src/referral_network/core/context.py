from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from referral_network.filters.criteria import FilterCriteria, FilterMode
from referral_network.forest.node import Forest, TreeNode
from referral_network.search.spotlight import SearchResult
from referral_network.stats.aggregator import NetworkStats


@dataclass
class NetworkContext:
    """
    Inputs for one pipeline run.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    mode: Optional[FilterMode] = None
    query: str = ""
    cycle_policy: Optional[str] = None


@dataclass
class NetworkView:
    """
    Everything a presentation layer needs from one snapshot of records.

    ``roots`` is the filtered forest; ``stats`` summarise it. ``search`` is
    layered over ``roots`` and never restructures it.
    """

    forest: Forest
    roots: List[TreeNode]
    search: SearchResult
    stats: NetworkStats
    mode: FilterMode

    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def top_level(self) -> List[TreeNode]:
        """Search hits when a query is active, otherwise the filtered roots."""
        return self.search.results if self.search.results is not None else self.roots

    @property
    def highlight(self):
        return self.search.highlight
