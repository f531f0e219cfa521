# src/referral_network/forest/node.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from referral_network.records.models import NetworkMember


@dataclass(eq=False, slots=True)
class TreeNode:
    """
    One member's position in the sponsorship forest.

    Attributes:
        key: the member's ``code`` (or a synthesized key for code-less
            members); unique within a forest and stable across rebuilds.
        user: the NetworkMember payload.
        children: directly sponsored members, sorted by ``sibling_sort_key``.
            Each node exclusively owns its list.
        order: copy of ``user.sponsor_order``.

    Equality is identity: two nodes are the same only if they are the same
    object, which is what cycle guards and membership tests rely on.
    """

    key: str
    user: NetworkMember
    children: List["TreeNode"] = field(default_factory=list)
    order: int = 0

    def add_child(self, child: "TreeNode") -> None:
        self.children.append(child)

    def with_children(self, children: List["TreeNode"]) -> "TreeNode":
        """Shallow copy sharing ``user`` but owning a new children list."""
        return TreeNode(key=self.key, user=self.user, children=list(children), order=self.order)

    def __repr__(self) -> str:
        return f"<TreeNode {self.key} {self.user.name!r} children={len(self.children)}>"


def sibling_sort_key(node: TreeNode) -> Tuple[int, str, str, str]:
    """(order, name, key): deterministic regardless of input order."""
    name = node.user.name or ""
    return (node.order, name.casefold(), name, node.key)


@dataclass
class Forest:
    """
    Result of building the sponsorship hierarchy.

    Attributes:
        roots: top-level nodes (true roots, orphans, and cycle breakers).
        index: every node keyed by ``TreeNode.key``.
        orphans: keys of members whose sponsor code did not resolve.
        cycles: keys of members promoted to roots to break sponsor cycles.
        duplicates: codes that appeared more than once (last record won).
    """

    roots: List[TreeNode] = field(default_factory=list)
    index: Dict[str, TreeNode] = field(default_factory=dict)
    orphans: List[str] = field(default_factory=list)
    cycles: List[str] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.index)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.roots)

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Every node reachable from ``roots``, depth-first."""
        from referral_network.forest.traversal import iter_nodes

        return iter_nodes(self.roots)

    def find_by_code(self, code: str) -> Optional[TreeNode]:
        if not code:
            return None
        return self.index.get(code)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<Forest roots={len(self.roots)} nodes={len(self.index)}>"
