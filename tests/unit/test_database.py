"""Tests for the PostgreSQL connectivity probe (driver replaced by fakes)."""

from __future__ import annotations

from typing import Any

import psycopg2
import pytest

from gqlvalidate.config import DatabaseConfig
from gqlvalidate.service import database
from gqlvalidate.service.database import DatabaseError


class FakeCursor:
    def __init__(self, conn: FakeConnection) -> None:
        self._conn = conn
        self._row: tuple[Any, ...] | None = None

    def __enter__(self) -> FakeCursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def execute(self, sql: str) -> None:
        self._conn.executed.append(" ".join(sql.split()))
        if self._conn.fail_on is not None and self._conn.fail_on in sql:
            raise psycopg2.OperationalError("server closed the connection")
        if "version()" in sql:
            self._row = ("PostgreSQL 16.2 on x86_64-pc-linux-gnu",)
        elif "information_schema.tables" in sql:
            self._row = (12,)
        else:
            self._row = (1,)

    def fetchone(self) -> tuple[Any, ...] | None:
        return self._row


class FakeConnection:
    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.executed: list[str] = []
        self.session: dict[str, Any] = {}
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def set_session(self, **kwargs: Any) -> None:
        self.session.update(kwargs)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def db_config() -> DatabaseConfig:
    return DatabaseConfig(host="localhost", port=5432, dbname="shop", user="reader")


class TestConnect:
    def test_connect_uses_dsn_and_read_only_session(
        self, monkeypatch: pytest.MonkeyPatch, db_config: DatabaseConfig
    ) -> None:
        seen: list[str] = []
        conn = FakeConnection()

        def fake_connect(dsn: str) -> FakeConnection:
            seen.append(dsn)
            return conn

        monkeypatch.setattr(database.psycopg2, "connect", fake_connect)
        assert database.connect(db_config) is conn
        assert seen == [db_config.dsn]
        assert conn.session == {"readonly": True, "autocommit": True}

    def test_connect_failure(
        self, monkeypatch: pytest.MonkeyPatch, db_config: DatabaseConfig
    ) -> None:
        def fake_connect(dsn: str) -> FakeConnection:
            raise psycopg2.OperationalError("could not connect to server: Connection refused")

        monkeypatch.setattr(database.psycopg2, "connect", fake_connect)
        with pytest.raises(DatabaseError, match="failed to connect to database"):
            database.connect(db_config)

    def test_unsupported_type(self, db_config: DatabaseConfig) -> None:
        with pytest.raises(DatabaseError, match="unsupported database type 'mysql'"):
            database.connect(db_config.model_copy(update={"type": "mysql"}))


class TestQueries:
    def test_ping(self) -> None:
        conn = FakeConnection()
        database.ping(conn)  # type: ignore[arg-type]
        assert conn.executed == ["SELECT 1"]

    def test_ping_failure(self) -> None:
        with pytest.raises(DatabaseError, match="failed to ping database"):
            database.ping(FakeConnection(fail_on="SELECT 1"))  # type: ignore[arg-type]

    def test_server_version(self) -> None:
        version = database.server_version(FakeConnection())  # type: ignore[arg-type]
        assert version.startswith("PostgreSQL 16.2")

    def test_count_public_tables(self) -> None:
        conn = FakeConnection()
        assert database.count_public_tables(conn) == 12  # type: ignore[arg-type]
        assert "table_schema = 'public'" in conn.executed[0]

    def test_count_failure(self) -> None:
        with pytest.raises(DatabaseError, match="failed to count tables"):
            database.count_public_tables(
                FakeConnection(fail_on="information_schema")  # type: ignore[arg-type]
            )


class TestProbe:
    def test_probe_closes_connection(
        self, monkeypatch: pytest.MonkeyPatch, db_config: DatabaseConfig
    ) -> None:
        conn = FakeConnection()
        monkeypatch.setattr(database.psycopg2, "connect", lambda dsn: conn)
        database.probe(db_config)
        assert conn.closed is True

    def test_probe_closes_on_ping_failure(
        self, monkeypatch: pytest.MonkeyPatch, db_config: DatabaseConfig
    ) -> None:
        conn = FakeConnection(fail_on="SELECT 1")
        monkeypatch.setattr(database.psycopg2, "connect", lambda dsn: conn)
        with pytest.raises(DatabaseError):
            database.probe(db_config)
        assert conn.closed is True
