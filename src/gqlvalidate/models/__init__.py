"""Pydantic models for gql-validate."""

from gqlvalidate.models.results import QueryInfo, ValidationOutcome, ValidationSummary

__all__ = [
    "QueryInfo",
    "ValidationOutcome",
    "ValidationSummary",
]
