"""Error-tree scanning of GraphQL responses."""

from gqlvalidate.scanner.collect import scan
from gqlvalidate.scanner.paths import Path, location, render_path
from gqlvalidate.scanner.tree import Finding, decode_payload, find_nested_errors

__all__ = [
    "Finding",
    "Path",
    "decode_payload",
    "find_nested_errors",
    "location",
    "render_path",
    "scan",
]
