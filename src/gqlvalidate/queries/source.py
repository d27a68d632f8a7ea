"""Discovery and loading of GraphQL query files and their variables."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gqlvalidate.errors import GQLValidateError, SetupError
from gqlvalidate.models.results import QueryInfo

logger = logging.getLogger("gqlvalidate.queries")

QUERY_EXTENSIONS = (".graphql", ".gql")
VARIABLES_EXTENSION = ".json"


class QuerySourceError(SetupError):
    """Raised when the query directory or file cannot be found or scanned."""


class QueryLoadError(GQLValidateError):
    """Raised when a single query or its variables cannot be loaded."""


@dataclass(frozen=True)
class QueryCase:
    """One query file to validate, named by its base filename."""

    name: str
    path: Path
    variables_path: Path | None = None

    @classmethod
    def from_path(cls, path: Path) -> QueryCase:
        candidate = path.with_suffix(VARIABLES_EXTENSION)
        return cls(
            name=path.name,
            path=path,
            variables_path=candidate if candidate.is_file() else None,
        )


def is_query_file(path: Path) -> bool:
    return path.is_file() and path.suffix in QUERY_EXTENSIONS


def find_query_files(root: Path) -> list[Path]:
    """Return every query file under ``root``, recursively, in sorted order."""
    if not root.exists():
        raise QuerySourceError(f"queries directory not found: {root}")
    if not root.is_dir():
        raise QuerySourceError(f"not a directory: {root}")
    try:
        return sorted(p for p in root.rglob("*") if is_query_file(p))
    except OSError as exc:
        raise QuerySourceError(f"failed to scan directory {root}: {exc}") from exc


def discover(root: Path) -> list[QueryCase]:
    return [QueryCase.from_path(p) for p in find_query_files(root)]


def single_case(path: Path) -> QueryCase:
    if not path.is_file():
        raise QuerySourceError(f"query file not found: {path}")
    return QueryCase.from_path(path)


def load_variables(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise QueryLoadError(f"Failed to read variables file: {exc}") from exc
    if not content.strip():
        return {}
    try:
        variables = json.loads(content)
    except ValueError as exc:
        raise QueryLoadError(f"Invalid variables file {path.name}: {exc}") from exc
    if not isinstance(variables, dict):
        raise QueryLoadError(
            f"Invalid variables file {path.name}: expected a JSON object, "
            f"got {type(variables).__name__}"
        )
    return variables


def load_case(case: QueryCase) -> tuple[str, dict[str, Any]]:
    """Read the query text and its variables (``{}`` when there is no variables file)."""
    try:
        text = case.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise QueryLoadError(f"Failed to read query file: {exc}") from exc

    if case.variables_path is None:
        return text, {}
    logger.debug("Using variables from: %s", case.variables_path.name)
    return text, load_variables(case.variables_path)


def extract_description(content: str) -> str | None:
    """Return the first non-empty ``#`` comment before any query text."""
    for line in content.splitlines():
        line = line.strip()
        if line.startswith("#"):
            desc = line.lstrip("#").strip()
            if desc:
                return desc
        elif line:
            break
    return None


def describe_query_file(path: Path) -> QueryInfo:
    case = QueryCase.from_path(path)
    try:
        description = extract_description(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError):
        description = None
    return QueryInfo(
        name=case.name,
        path=str(path),
        has_variables=case.variables_path is not None,
        variables_file=str(case.variables_path) if case.variables_path else None,
        size_bytes=path.stat().st_size,
        description=description,
    )
