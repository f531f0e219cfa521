# src/referral_network/forest/builder.py

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from referral_network.config import get_config
from referral_network.core.exceptions import ConfigError, SponsorCycleError
from referral_network.forest.node import Forest, TreeNode, sibling_sort_key
from referral_network.forest.traversal import iter_nodes
from referral_network.logging import get_logger
from referral_network.records.models import NetworkMember

log = get_logger("forest_builder")

CYCLE_POLICIES = ("break", "error")

# Prefix for keys synthesized for members without a code. Such members are
# never sponsor targets.
FALLBACK_KEY_PREFIX = "#"


def _fallback_key(member: NetworkMember, position: int, taken: Dict[str, TreeNode]) -> str:
    base = f"{FALLBACK_KEY_PREFIX}{member.id}"
    key = base
    suffix = position
    while key in taken:
        key = f"{base}@{suffix}"
        suffix += 1
    return key


def _find_cycle(start: TreeNode, by_code: Dict[str, TreeNode]) -> List[TreeNode]:
    """
    Follow sponsor links upward from ``start`` until a node repeats and
    return the nodes on that loop, in upward order.

    Only valid for nodes unreachable from every root: their whole upline
    resolves and none of it reaches a root, so the walk must close a loop.
    """
    path: List[TreeNode] = []
    position: Dict[int, int] = {}
    current = start

    while id(current) not in position:
        position[id(current)] = len(path)
        path.append(current)
        current = by_code[current.user.sponsor_code]

    return path[position[id(current)]:]


def build_forest(
    members: Iterable[NetworkMember],
    *,
    cycle_policy: Optional[str] = None,
) -> Forest:
    """
    Build the sponsorship forest from normalized members.

    Passes:
        1. index:  code -> TreeNode (last record wins on duplicate codes)
        2. link:   attach each node under its sponsor; unresolvable sponsors
                   become orphan roots
        3. cycles: nodes still unreachable from any root sit on (or under) a
                   sponsor loop; break or reject per ``cycle_policy``
        4. sort:   roots and every children list by (order, name, key)

    Every indexed member ends up exactly once in the result. Derived flags
    on the members (``is_orphaned``, ``is_cyclic``) are reset before linking,
    so rebuilding from the same members is idempotent.

    Args:
        members: NetworkMember records, typically from ``normalize_records``.
        cycle_policy: ``"break"`` or ``"error"``; defaults to the configured
            ``forest.cycle_policy``.

    Raises:
        ConfigError: unknown cycle policy.
        SponsorCycleError: a cycle was found and the policy is ``"error"``.
    """
    policy = (cycle_policy or get_config().cycle_policy).lower()
    if policy not in CYCLE_POLICIES:
        raise ConfigError(f"Unknown cycle policy {policy!r}; expected one of {CYCLE_POLICIES}")

    forest = Forest()
    by_code: Dict[str, TreeNode] = {}

    # Index pass
    for position, member in enumerate(members):
        member.is_orphaned = False
        member.is_cyclic = False

        if member.code:
            key = member.code
            if key in by_code:
                forest.duplicates.append(key)
                forest.index.pop(key)
            elif key in forest.index:
                # A real code claims a synthesized key; move the code-less node.
                displaced = forest.index[key]
                new_key = _fallback_key(displaced.user, position, forest.index)
                del forest.index[key]
                displaced.key = new_key
                forest.index[displaced.key] = displaced
                log.warning(
                    "Code %r collides with a synthesized key; code-less member %r re-keyed to %r",
                    key,
                    displaced.user.id,
                    displaced.key,
                )
        else:
            key = _fallback_key(member, position, forest.index)

        node = TreeNode(key=key, user=member, order=member.sponsor_order)
        forest.index[key] = node
        if member.code:
            by_code[key] = node

    if forest.duplicates:
        log.warning(
            "Duplicate member codes (last record kept): %s",
            ", ".join(sorted(set(forest.duplicates))),
        )

    # Link pass
    for node in forest.index.values():
        sponsor = node.user.sponsor_code
        if not sponsor:
            forest.roots.append(node)
            continue

        parent = by_code.get(sponsor)
        if parent is None:
            node.user.is_orphaned = True
            forest.orphans.append(node.key)
            forest.roots.append(node)
            continue

        parent.add_child(node)

    if forest.orphans:
        log.warning("%d members reference unknown sponsors", len(forest.orphans))

    # Cycle pass
    reached: Set[int] = {id(n) for n in iter_nodes(forest.roots)}
    if len(reached) < len(forest.index):
        for node in forest.index.values():
            if id(node) in reached:
                continue

            cycle = _find_cycle(node, by_code)
            if policy == "error":
                raise SponsorCycleError([n.key for n in reversed(cycle)])

            breaker = min(cycle, key=sibling_sort_key)
            by_code[breaker.user.sponsor_code].children.remove(breaker)
            breaker.user.is_cyclic = True
            forest.roots.append(breaker)
            forest.cycles.append(breaker.key)
            reached.update(id(n) for n in iter_nodes([breaker]))

            log.warning(
                "Broke sponsor cycle %s at %s",
                " -> ".join(n.key for n in reversed(cycle)),
                breaker.key,
            )

    # Sort pass
    forest.roots.sort(key=sibling_sort_key)
    for node in iter_nodes(forest.roots):
        node.children.sort(key=sibling_sort_key)

    log.info(
        "Built forest: members=%d roots=%d orphans=%d cycles=%d duplicates=%d",
        len(forest.index),
        len(forest.roots),
        len(forest.orphans),
        len(forest.cycles),
        len(forest.duplicates),
    )
    return forest

