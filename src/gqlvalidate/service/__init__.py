"""Service layer: runner, database probe and project scaffolding."""

from gqlvalidate.service.runner import ValidationRunner

__all__ = [
    "ValidationRunner",
]
