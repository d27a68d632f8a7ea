"""PostgreSQL connectivity probe used before a run and by ``check``."""

from __future__ import annotations

import logging

import psycopg2
from psycopg2.extensions import connection as Connection

from gqlvalidate.config import DatabaseConfig
from gqlvalidate.errors import SetupError

logger = logging.getLogger("gqlvalidate.database")

SUPPORTED_TYPES = ("postgres", "postgresql")

_COUNT_PUBLIC_TABLES = """
    SELECT COUNT(*)
    FROM information_schema.tables
    WHERE table_schema = 'public'
"""


class DatabaseError(SetupError):
    """Raised when the database cannot be reached or queried."""


def connect(config: DatabaseConfig) -> Connection:
    """Open a connection; raises :class:`DatabaseError` if the server is unreachable."""
    if config.type.lower() not in SUPPORTED_TYPES:
        raise DatabaseError(
            f"unsupported database type '{config.type}'. "
            f"Supported: {', '.join(SUPPORTED_TYPES)}"
        )
    logger.debug(
        "Connecting to %s:%d/%s as %s", config.host, config.port, config.dbname, config.user
    )
    try:
        conn = psycopg2.connect(config.dsn)
    except psycopg2.Error as exc:
        raise DatabaseError(f"failed to connect to database: {exc}".strip()) from exc
    conn.set_session(readonly=True, autocommit=True)
    return conn


def ping(conn: Connection) -> None:
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT 1")
            cur.fetchone()
    except psycopg2.Error as exc:
        raise DatabaseError(f"failed to ping database: {exc}".strip()) from exc


def server_version(conn: Connection) -> str:
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT version()")
            row = cur.fetchone()
    except psycopg2.Error as exc:
        raise DatabaseError(f"failed to read server version: {exc}".strip()) from exc
    return row[0] if row else ""


def count_public_tables(conn: Connection) -> int:
    try:
        with conn.cursor() as cur:
            cur.execute(_COUNT_PUBLIC_TABLES)
            row = cur.fetchone()
    except psycopg2.Error as exc:
        raise DatabaseError(f"failed to count tables: {exc}".strip()) from exc
    return int(row[0]) if row else 0


def probe(config: DatabaseConfig) -> None:
    """Connect, ping and disconnect; the pre-flight check of ``validate``."""
    conn = connect(config)
    try:
        ping(conn)
    finally:
        conn.close()
