from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, Set

from referral_network.forest.node import TreeNode
from referral_network.forest.traversal import collect_keys


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def toggle_key(expanded: AbstractSet[str], key: str) -> Set[str]:
    """Return a new set with ``key`` flipped."""
    out = set(expanded)
    if key in out:
        out.discard(key)
    else:
        out.add(key)
    return out


def keys_for(roots: Iterable[TreeNode]) -> Set[str]:
    """Every key reachable from ``roots``: the fully expanded state."""
    return collect_keys(roots)


# ---------------------------------------------------------------------------
# Stateful holder
# ---------------------------------------------------------------------------

@dataclass
class ExpansionState:
    """
    Keys of the nodes a tree view shows expanded.

    Only keys are stored, so the state carries over when the forest is
    rebuilt from fresh records with the same member codes.
    """
    expanded: Set[str] = field(default_factory=set)

    def __contains__(self, key: str) -> bool:
        return key in self.expanded

    def __len__(self) -> int:
        return len(self.expanded)

    def is_expanded(self, key: str) -> bool:
        return key in self.expanded

    def toggle(self, key: str) -> Set[str]:
        self.expanded = toggle_key(self.expanded, key)
        return self.expanded

    def expand_all(self, roots: Iterable[TreeNode]) -> Set[str]:
        self.expanded = keys_for(roots)
        return self.expanded

    def collapse_all(self) -> Set[str]:
        self.expanded = set()
        return self.expanded

    def snapshot(self) -> frozenset:
        return frozenset(self.expanded)
