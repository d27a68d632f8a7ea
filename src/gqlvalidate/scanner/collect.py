"""Combine the three error sources of one engine call into a message list."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from gqlvalidate.scanner.tree import find_nested_errors, message_of, render_value


def _structured_message(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    message = getattr(entry, "message", None)
    if isinstance(message, str):
        return message
    message = message_of(entry)
    if message is not None:
        return message
    return render_value(entry)


def scan(
    top_level_error: str | BaseException | None = None,
    structured_errors: Iterable[Any] | None = None,
    data: Any = None,
) -> list[str]:
    """Return every error message for one query execution, in a fixed order.

    1. ``Execution error: <top_level_error>`` when the engine call failed.
    2. Each structured GraphQL error message, verbatim and in order.
    3. Each error found nested inside ``data``, as ``Error at <path>: <message>``.

    All three sources are independent; none short-circuits another.
    """
    messages: list[str] = []
    if top_level_error is not None:
        messages.append(f"Execution error: {top_level_error}")
    for entry in structured_errors or ():
        messages.append(_structured_message(entry))
    if data:
        messages.extend(finding.describe() for finding in find_nested_errors(data))
    return messages
