"""GraphJin service adapter.

GraphJin compiles GraphQL into a single SQL statement and runs it against
PostgreSQL. Its standalone service exposes the compiler over HTTP; this
adapter posts each query there and splits the response into the structured
``errors`` list and the raw ``data`` payload.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from gqlvalidate.config import EngineConfig
from gqlvalidate.engine.base import Engine, EngineError, EngineResult, GraphQLErrorEntry
from gqlvalidate.scanner.tree import message_of, render_value

logger = logging.getLogger("gqlvalidate.engine")

DEFAULT_TIMEOUT = 30.0


def _parse_errors(raw: Any) -> list[GraphQLErrorEntry]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raw = [raw]
    entries: list[GraphQLErrorEntry] = []
    for item in raw:
        message = message_of(item)
        if message is None:
            message = render_value(item)
        entries.append(GraphQLErrorEntry(message=message))
    return entries


class GraphJinEngine(Engine):
    """Runs queries through a GraphJin service endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._client = httpx.Client(
            timeout=timeout,
            headers=headers or {},
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: EngineConfig) -> GraphJinEngine:
        return cls(url=config.url, timeout=config.timeout, headers=dict(config.headers))

    @property
    def url(self) -> str:
        return self._url

    def execute(self, query: str, variables: dict[str, Any]) -> EngineResult:
        payload = {"query": query, "variables": variables}
        try:
            response = self._client.post(self._url, json=payload)
        except httpx.HTTPError as exc:
            raise EngineError(f"request to {self._url} failed: {exc}") from exc

        logger.debug("%s responded %d", self._url, response.status_code)
        try:
            body = response.json()
        except (ValueError, RecursionError) as exc:
            raise EngineError(
                f"invalid JSON response (HTTP {response.status_code})"
            ) from exc
        if not isinstance(body, dict):
            raise EngineError(
                f"unexpected response: expected a JSON object, got {type(body).__name__}"
            )

        errors = _parse_errors(body.get("errors"))
        if response.is_error and not errors:
            raise EngineError(f"HTTP {response.status_code}: {response.reason_phrase}")
        return EngineResult(data=body.get("data"), errors=errors)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GraphJinEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
