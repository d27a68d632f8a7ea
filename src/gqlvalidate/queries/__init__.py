"""Query file discovery and loading."""

from gqlvalidate.queries.source import (
    QUERY_EXTENSIONS,
    QueryCase,
    QueryLoadError,
    QuerySourceError,
    describe_query_file,
    discover,
    extract_description,
    find_query_files,
    load_case,
    single_case,
)

__all__ = [
    "QUERY_EXTENSIONS",
    "QueryCase",
    "QueryLoadError",
    "QuerySourceError",
    "describe_query_file",
    "discover",
    "extract_description",
    "find_query_files",
    "load_case",
    "single_case",
]
