"""Aligned text rendering for terminals."""

from __future__ import annotations

from pathlib import Path

from gqlvalidate.models.results import QueryInfo, ValidationSummary

_BOX_WIDTH = 62
_RULE = "─" * 66
_NAME_WIDTH = 40


def _header(title: str) -> list[str]:
    return [
        "╔" + "═" * _BOX_WIDTH + "╗",
        "║" + title.center(_BOX_WIDTH) + "║",
        "╚" + "═" * _BOX_WIDTH + "╝",
    ]


def render_text(summary: ValidationSummary) -> str:
    lines = ["", *_header("GraphQL Query Validation Results"), ""]

    for outcome in summary.outcomes:
        mark = "✓ PASS" if outcome.passed else "✗ FAIL"
        lines.append(f"  {mark}  {outcome.name:<{_NAME_WIDTH}} {outcome.duration_ms:4d}ms")
        for message in outcome.messages:
            lines.append(f"          └─ {message}")

    lines += ["", _RULE]
    if summary.failed == 0:
        lines.append(f"  ✓ All {summary.total} queries passed validation")
    else:
        lines.append(
            f"  Summary: {summary.total} total, {summary.passed} passed, {summary.failed} failed"
        )
    lines.append("")
    return "\n".join(lines)


def render_query_list_text(
    queries: list[QueryInfo],
    directory: Path,
    full_path: bool = False,
    verbose: bool = False,
) -> str:
    lines = ["", f"GraphQL Queries in: {directory}", "═" * 63, ""]

    for i, query in enumerate(queries, start=1):
        lines.append(f"  {i}. {query.path if full_path else query.name}")
        if query.description:
            lines.append(f"     │ {query.description}")
        if query.variables_file:
            shown = query.variables_file if full_path else Path(query.variables_file).name
            lines.append(f"     └─ Variables: {shown}")
        if verbose:
            lines.append(f"     └─ Size: {query.size_bytes} bytes")
        lines.append("")

    lines.append(f"Total: {len(queries)} query file(s)")
    with_vars = sum(1 for q in queries if q.has_variables)
    if with_vars:
        lines.append(f"       {with_vars} with variables file(s)")
    lines.append("")
    return "\n".join(lines)
