"""Rendering of validation results and query listings."""

from __future__ import annotations

from gqlvalidate.models.results import ValidationSummary
from gqlvalidate.report.structured import render_json, render_query_list_json
from gqlvalidate.report.text import render_query_list_text, render_text

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_SETUP_ERROR = 2


def exit_code(summary: ValidationSummary) -> int:
    """``0`` when every validation passed, ``1`` otherwise."""
    return EXIT_OK if summary.failed == 0 else EXIT_FAILURES


__all__ = [
    "EXIT_FAILURES",
    "EXIT_OK",
    "EXIT_SETUP_ERROR",
    "exit_code",
    "render_json",
    "render_query_list_json",
    "render_query_list_text",
    "render_text",
]
