"""
Exporter package.

Re-exports the JSON export entry points used by the CLI.
"""

from __future__ import annotations

from .json_exporter import (
    build_view_dict,
    export_view_json,
    nodes_to_dicts,
    serialize_view_to_json_string,
)

__all__ = [
    "build_view_dict",
    "export_view_json",
    "nodes_to_dicts",
    "serialize_view_to_json_string",
]
