"""Structural paths into a decoded JSON value."""

from __future__ import annotations

Segment = str | int
Path = tuple[Segment, ...]

ROOT = "root"


def render_path(path: Path) -> str:
    """Render a path as ``users[0].posts``.

    Field names are dot-joined; indices are appended as ``[i]`` with no
    separating dot. A path that starts with an index renders as ``[0].name``.
    The empty path renders as the empty string (see :func:`location`).
    """
    parts: list[str] = []
    blank = True
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif blank:
            parts.append(str(segment))
        else:
            parts.append(f".{segment}")
        blank = blank and parts[-1] == ""
    return "".join(parts)


def location(path: Path) -> str:
    """Render a path for a finding, naming the empty path ``root``."""
    return render_path(path) or ROOT
