"""Walk a decoded JSON value looking for embedded ``errors`` / ``error`` fields.

GraphQL resolvers (and the SQL functions behind them) commonly report partial
failures inside the ``data`` payload rather than in the top-level ``errors``
list. This module finds those at any depth and records where they sit.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from gqlvalidate.scanner.paths import Path, Segment, location

logger = logging.getLogger("gqlvalidate.scanner")

ERRORS_KEY = "errors"
ERROR_KEY = "error"
MESSAGE_KEY = "message"

# (parent_trail, segment) cells; a child shares its parent's cell. ``None`` is the root.
Trail = tuple[Any, Segment] | None


@dataclass(frozen=True)
class Finding:
    """One path-annotated error extracted from a response payload."""

    path: str
    message: str

    def describe(self) -> str:
        return f"Error at {self.path}: {self.message}"


def decode_payload(raw: bytes | bytearray | str) -> Any | None:
    """Decode a raw JSON payload, returning ``None`` if it cannot be decoded."""
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.debug("Payload is not decodable JSON, skipping nested scan: %s", exc)
        return None


def render_value(value: Any) -> str:
    """Render an arbitrary decoded value for an error message."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, sort_keys=True, default=str)
    except RecursionError:
        return f"<{type(value).__name__} nested too deeply to render>"
    except (TypeError, ValueError):
        return repr(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def message_of(value: Any) -> str | None:
    """Return the string ``message`` of a mapping, or ``None``."""
    if isinstance(value, Mapping):
        message = value.get(MESSAGE_KEY)
        if isinstance(message, str):
            return message
    return None


def _unwind(trail: Trail) -> Path:
    segments: list[Segment] = []
    while trail is not None:
        trail, segment = trail
        segments.append(segment)
    segments.reverse()
    return tuple(segments)


def _node_findings(node: Mapping[str, Any], trail: Trail) -> list[Finding]:
    """Findings contributed by the ``errors`` / ``error`` keys of a single mapping."""
    findings: list[Finding] = []

    errors = node.get(ERRORS_KEY)
    if _is_sequence(errors) and len(errors) > 0:
        here = location(_unwind(trail))
        for index, entry in enumerate(errors):
            message = message_of(entry)
            if message is None:
                message = render_value(entry)
            findings.append(Finding(path=f"{here}[{index}]", message=message))

    error = node.get(ERROR_KEY)
    if isinstance(error, str):
        if error:
            findings.append(Finding(path=location(_unwind(trail)), message=error))
    elif error is not None:
        message = message_of(error)
        if message is not None:
            findings.append(Finding(path=location(_unwind(trail)), message=message))
        # Any other shape (numbers, booleans, mappings without a message) is ignored.

    return findings


def find_nested_errors(data: Any) -> list[Finding]:
    """Return every error indicator found in ``data``, depth-first in pre-order.

    ``data`` is a decoded JSON value (``None``, scalars, sequences, string-keyed
    mappings). Raw ``bytes`` are decoded first; undecodable bytes yield no
    findings. Mapping keys are visited in sorted order so the result is stable
    across runs. The input is never modified.
    """
    if isinstance(data, (bytes, bytearray)):
        data = decode_payload(data)
    if data is None:
        return []

    findings: list[Finding] = []
    # Explicit stack: payload depth must not be bounded by the interpreter's
    # recursion limit. Paths are only materialised when a finding needs one.
    stack: list[tuple[Any, Trail]] = [(data, None)]
    while stack:
        value, trail = stack.pop()
        if isinstance(value, Mapping):
            findings.extend(_node_findings(value, trail))
            keys = sorted(value, key=str)
            for key in reversed(keys):
                stack.append((value[key], (trail, str(key))))
        elif _is_sequence(value):
            for index in reversed(range(len(value))):
                stack.append((value[index], (trail, index)))
    return findings
