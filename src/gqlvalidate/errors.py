"""Exception hierarchy shared across gql-validate."""

from __future__ import annotations


class GQLValidateError(Exception):
    """Base class for all gql-validate errors."""


class SetupError(GQLValidateError):
    """Raised when the run cannot start at all (config, database, query directory).

    Setup failures are reported once and abort the run before any query is
    attempted.
    """
