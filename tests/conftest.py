"""Shared test fixtures for gql-validate."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from gqlvalidate.engine.base import Engine, EngineResult

ENV_VARS = (
    "DB_HOST",
    "DB_PORT",
    "DB_NAME",
    "DB_USER",
    "DB_PASSWORD",
    "DB_SSLMODE",
    "GRAPHJIN_URL",
    "LOG_LEVEL",
)

SAMPLE_CONFIG_YAML = """\
database:
  type: postgres
  host: db.internal
  port: 5432
  dbname: shop
  user: reader
  password: secret
  sslmode: require

engine:
  url: http://graphjin.internal:8080/api/v1/graphql
  timeout: 5
  headers:
    X-User-ID: "42"
"""


class FakeEngine(Engine):
    """Engine double: looks responses up by query text, records every call."""

    def __init__(
        self,
        responses: dict[str, EngineResult | Exception] | None = None,
        default: EngineResult | None = None,
    ) -> None:
        self.responses = responses or {}
        self.default = default if default is not None else EngineResult(data={"ok": True})
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def execute(self, query: str, variables: dict[str, Any]) -> EngineResult:
        self.calls.append((query, variables))
        response = self.responses.get(query.strip(), self.default)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the developer's environment and any ``.env`` file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def make_engine() -> type[FakeEngine]:
    return FakeEngine


@pytest.fixture
def write_query(tmp_path: Path) -> Callable[..., Path]:
    """Write a query file (and optionally its variables file) under ``tmp_path/queries``."""

    def _write(name: str, text: str, variables: str | None = None) -> Path:
        path = tmp_path / "queries" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        if variables is not None:
            path.with_suffix(".json").write_text(variables, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_CONFIG_YAML, encoding="utf-8")
    return path
