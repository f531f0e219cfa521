"""
Depth-first walks over a forest.

Sponsorship chains in a large network easily exceed Python's recursion
limit, so every walk here uses an explicit stack. Each node object is
visited at most once per walk, which keeps hand-assembled or cyclic
structures finite and makes flat lists that repeat a subtree count once.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Set, Tuple

from referral_network.forest.node import TreeNode


def walk(roots: Iterable[TreeNode]) -> Iterator[Tuple[TreeNode, int]]:
    """
    Yield ``(node, depth)`` pairs in pre-order, roots at depth 1.

    Sibling order is preserved. A node already yielded (by identity) is not
    yielded again and its children are not re-entered.
    """
    seen: Set[int] = set()
    stack: List[Tuple[TreeNode, int]] = [(r, 1) for r in reversed(list(roots))]

    while stack:
        node, depth = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node, depth
        for child in reversed(node.children):
            if id(child) not in seen:
                stack.append((child, depth + 1))


def iter_nodes(roots: Iterable[TreeNode]) -> Iterator[TreeNode]:
    for node, _ in walk(roots):
        yield node


def collect_keys(roots: Iterable[TreeNode]) -> Set[str]:
    """Keys of every node reachable from ``roots``."""
    return {node.key for node in iter_nodes(roots)}


def count_nodes(roots: Iterable[TreeNode]) -> int:
    return sum(1 for _ in walk(roots))
