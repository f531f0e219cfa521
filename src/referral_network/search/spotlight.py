from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from referral_network.forest.node import TreeNode
from referral_network.forest.traversal import iter_nodes


@dataclass
class SearchResult:
    """
    ``results`` is None when there was no query: render the forest as-is.
    Otherwise it is the flat, depth-first list of matching nodes.
    """
    results: Optional[List[TreeNode]] = None
    highlight: Set[str] = field(default_factory=set)

    @property
    def is_empty_query(self) -> bool:
        return self.results is None


def search_text(node: TreeNode) -> str:
    """The haystack matched against: name, email and code."""
    user = node.user
    return f"{user.name} {user.email or ''} {user.code or ''}".casefold()


def spotlight_search(roots: Iterable[TreeNode], query: Optional[str]) -> SearchResult:
    """
    Case-insensitive substring search over every node reachable from
    ``roots``. Structure is left untouched.
    """
    needle = (query or "").strip().casefold()
    if not needle:
        return SearchResult(results=None, highlight=set())

    results: List[TreeNode] = []
    highlight: Set[str] = set()

    for node in iter_nodes(roots):
        if needle in search_text(node):
            results.append(node)
            highlight.add(node.key)

    return SearchResult(results=results, highlight=highlight)
