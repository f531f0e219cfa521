# src/referral_network/forest/__init__.py

"""
Public interface for the sponsorship forest.

    from referral_network.forest import (
        Forest,
        TreeNode,
        build_forest,
        walk,
        iter_nodes,
    )
"""

from __future__ import annotations

from .builder import CYCLE_POLICIES, build_forest
from .node import Forest, TreeNode, sibling_sort_key
from .traversal import collect_keys, count_nodes, iter_nodes, walk

__all__ = [
    "CYCLE_POLICIES",
    "Forest",
    "TreeNode",
    "build_forest",
    "collect_keys",
    "count_nodes",
    "iter_nodes",
    "sibling_sort_key",
    "walk",
]
