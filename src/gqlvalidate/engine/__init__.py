"""GraphQL-to-SQL engine adapters."""

from gqlvalidate.engine.base import Engine, EngineError, EngineResult, GraphQLErrorEntry
from gqlvalidate.engine.graphjin import GraphJinEngine

__all__ = [
    "Engine",
    "EngineError",
    "EngineResult",
    "GraphJinEngine",
    "GraphQLErrorEntry",
]
