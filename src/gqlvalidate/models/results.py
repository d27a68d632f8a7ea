"""Validation outcome and summary models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field


class ValidationOutcome(BaseModel):
    """The pass/fail verdict, messages and timing for one query file."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    messages: tuple[str, ...] = ()
    duration_ms: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        return len(self.messages) == 0

    def to_report(self) -> dict[str, Any]:
        """Structured report entry; ``errors`` is omitted for passing queries."""
        entry: dict[str, Any] = {"name": self.name, "path": self.path, "passed": self.passed}
        if self.messages:
            entry["errors"] = list(self.messages)
        entry["duration_ms"] = self.duration_ms
        return entry


class ValidationSummary(BaseModel):
    """Aggregate of all outcomes of one run.

    Totals are derived from ``outcomes`` so that
    ``passed + failed == total == len(outcomes)`` always holds.
    """

    model_config = ConfigDict(frozen=True)

    outcomes: tuple[ValidationOutcome, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return len(self.outcomes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> int:
        return self.total - self.passed

    def to_report(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "results": [outcome.to_report() for outcome in self.outcomes],
        }


class QueryInfo(BaseModel):
    """Metadata about a query file on disk, as shown by ``list``."""

    name: str
    path: str
    has_variables: bool = False
    variables_file: str | None = None
    size_bytes: int = 0
    description: str | None = None
