"""
Forest reduction by member criteria.

Modes:
    strict   A matching member is kept together with its whole subtree,
             unfiltered. A non-matching member is dropped and the survivors
             found below it take its place, at its level.
    network  A whole tree is kept when any member in it matches; nothing
             inside a kept tree is removed.
    lineage  Matching members are kept together with the non-matching
             ancestors needed to reach them; branches without a match are
             pruned. Kept nodes are copies with reduced children lists.

None of the modes mutate their input. ``strict`` and ``network`` return the
original node objects; ``lineage`` returns new nodes that share ``user``.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from referral_network.config import get_config
from referral_network.dates import resolve_timezone
from referral_network.filters.criteria import FilterCriteria, FilterMode
from referral_network.forest.node import TreeNode
from referral_network.forest.traversal import iter_nodes
from referral_network.logging import get_logger

log = get_logger("filter_engine")

Predicate = Callable[[TreeNode], bool]


def _memoized(criteria: FilterCriteria, tz: tzinfo) -> Predicate:
    cache: Dict[int, bool] = {}

    def check(node: TreeNode) -> bool:
        hit = cache.get(id(node))
        if hit is None:
            hit = criteria.matches(node.user, tz)
            cache[id(node)] = hit
        return hit

    return check


def _unique(roots: Sequence[TreeNode]) -> List[TreeNode]:
    seen: Set[int] = set()
    out: List[TreeNode] = []
    for r in roots:
        if id(r) not in seen:
            seen.add(id(r))
            out.append(r)
    return out


# ---------------------------------------------------------------------------
# Reductions
# ---------------------------------------------------------------------------

def filter_strict(roots: Sequence[TreeNode], matches: Predicate) -> List[TreeNode]:
    """
    Pre-order scan that stops descending at the first match on each path.

    The emitted nodes, in scan order, are the new roots.
    """
    result: List[TreeNode] = []
    seen: Set[int] = set()
    stack: List[TreeNode] = list(reversed(roots))

    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))

        if matches(node):
            result.append(node)
            continue

        stack.extend(reversed(node.children))

    return result


def filter_network(roots: Sequence[TreeNode], matches: Predicate) -> List[TreeNode]:
    return [r for r in _unique(roots) if any(matches(n) for n in iter_nodes([r]))]


def filter_lineage(roots: Sequence[TreeNode], matches: Predicate) -> List[TreeNode]:
    """
    Post-order rebuild keeping a node when it matches or has a kept child.
    """
    kept: Dict[int, Optional[TreeNode]] = {}
    seen: Set[int] = set()
    stack: List[Tuple[TreeNode, bool]] = [(r, False) for r in reversed(roots)]

    while stack:
        node, children_done = stack.pop()

        if children_done:
            kids = [kept[id(c)] for c in node.children if kept.get(id(c)) is not None]
            kept[id(node)] = node.with_children(kids) if (kids or matches(node)) else None
            continue

        if id(node) in seen:
            continue
        seen.add(id(node))

        stack.append((node, True))
        for child in reversed(node.children):
            if id(child) not in seen:
                stack.append((child, False))

    return [kept[id(r)] for r in _unique(roots) if kept.get(id(r)) is not None]


_REDUCERS = {
    FilterMode.STRICT: filter_strict,
    FilterMode.NETWORK: filter_network,
    FilterMode.LINEAGE: filter_lineage,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def filter_forest(
    roots: Sequence[TreeNode],
    criteria: Union[FilterCriteria, Mapping, None] = None,
    mode: Union[FilterMode, str, None] = None,
    *,
    tz: Optional[tzinfo] = None,
) -> List[TreeNode]:
    """
    Reduce a forest to the members selected by ``criteria``.

    Args:
        roots: forest roots (full build or any derived view).
        criteria: FilterCriteria, or a mapping accepted by
            ``FilterCriteria.from_mapping``. ``None`` means no criteria.
        mode: ``strict`` / ``network`` / ``lineage``; defaults to the
            configured ``filters.default_mode``.
        tz: timezone for whole-day date bounds (default from config).

    Returns:
        A new list of roots. With no active criteria it holds exactly the
        input root objects.

    Raises:
        ConfigError: unknown mode.
    """
    filter_mode = FilterMode.parse(mode)

    if criteria is None:
        criteria = FilterCriteria()
    elif not isinstance(criteria, FilterCriteria):
        criteria = FilterCriteria.from_mapping(criteria)

    if not criteria.is_active:
        return list(roots)

    tz = tz or resolve_timezone(get_config().timezone)
    reduced = _REDUCERS[filter_mode](roots, _memoized(criteria, tz))

    log.info(
        "Filter mode=%s %s: roots %d -> %d",
        filter_mode.value,
        criteria.describe(),
        len(roots),
        len(reduced),
    )
    return reduced
