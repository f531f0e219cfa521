"""
json_exporter.py
Structured JSON exporter for forests and network views.

This exporter:
- Converts nodes, members and stats to plain dictionaries
- Emits the camelCase member shape the dashboard consumes
- Is deterministic: sets are written as sorted lists
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from referral_network.core.context import NetworkView
from referral_network.forest.node import TreeNode
from referral_network.logging import get_logger
from referral_network.records.normalizer import member_to_record

log = get_logger("json_exporter")


def nodes_to_dicts(
    roots: Iterable[TreeNode],
    *,
    highlight: Optional[set] = None,
) -> List[Dict[str, Any]]:
    """
    Nested ``{"key", "user", "order", "highlighted", "children"}`` dicts.

    Built with an explicit stack so deep sponsor chains do not hit the
    recursion limit. A node object met twice is emitted only the first time.
    """
    highlight = highlight or set()
    out: List[Dict[str, Any]] = []
    seen = set()
    stack: List[Tuple[TreeNode, List[Dict[str, Any]]]] = [
        (r, out) for r in reversed(list(roots))
    ]

    while stack:
        node, target = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))

        entry: Dict[str, Any] = {
            "key": node.key,
            "order": node.order,
            "highlighted": node.key in highlight,
            "user": member_to_record(node.user),
            "children": [],
        }
        target.append(entry)

        for child in reversed(node.children):
            stack.append((child, entry["children"]))

    return out


def build_view_dict(view: NetworkView) -> Dict[str, Any]:
    """
    Convert a pipeline view into a JSON-safe dict.
    """
    search = view.search
    return {
        "mode": view.mode.value,
        "stats": view.stats.as_dict(),
        "roots": nodes_to_dicts(view.roots, highlight=search.highlight),
        "search": {
            "results": None if search.results is None else [n.key for n in search.results],
            "highlight": sorted(search.highlight),
        },
        "orphans": list(view.forest.orphans),
        "cycles": list(view.forest.cycles),
        "duplicates": sorted(set(view.forest.duplicates)),
    }


def serialize_view_to_json_string(view: NetworkView, indent: Optional[int] = 2) -> str:
    if indent is None:
        return json.dumps(build_view_dict(view), separators=(",", ":"), ensure_ascii=False)
    return json.dumps(build_view_dict(view), indent=indent, ensure_ascii=False)


def export_view_json(view: NetworkView, output_path: str | Path, indent: Optional[int] = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting network JSON to: %s (users=%d, roots=%d, orphans=%d, cycles=%d)",
        output_path,
        view.stats.total_users,
        len(view.roots),
        len(view.forest.orphans),
        len(view.forest.cycles),
    )

    json_str = serialize_view_to_json_string(view, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
