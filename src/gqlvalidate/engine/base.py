"""Abstract compile/execute engine interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from gqlvalidate.errors import GQLValidateError


class EngineError(GQLValidateError):
    """Raised when the engine rejects a query outright (compile or runtime failure)."""


@dataclass(frozen=True)
class GraphQLErrorEntry:
    """A structured GraphQL error as returned in a response's ``errors`` list."""

    message: str


@dataclass
class EngineResult:
    """Outcome of a single successful engine call.

    ``data`` is the decoded ``data`` payload (or raw bytes, which the scanner
    decodes leniently); ``errors`` are engine-level GraphQL errors returned
    alongside a partially successful result.
    """

    data: Any = None
    errors: list[GraphQLErrorEntry] = field(default_factory=list)


class Engine(ABC):
    """Compiles a GraphQL query to SQL and executes it against the database."""

    @abstractmethod
    def execute(self, query: str, variables: dict[str, Any]) -> EngineResult:
        """Run ``query`` once. Raises :class:`EngineError` on hard failure."""

    def close(self) -> None:  # noqa: B027
        """Release any held resources."""
