"""Project scaffolding for ``gql-validate init``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from gqlvalidate.errors import GQLValidateError


class ScaffoldError(GQLValidateError):
    """Raised when a scaffold directory or file cannot be written."""


class ScaffoldStatus(StrEnum):
    CREATED = "created"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ScaffoldEntry:
    path: Path
    status: ScaffoldStatus


SAMPLE_CONFIG = """\
# GraphQL Validation Tool Configuration
# Database credentials can be overridden with environment variables:
# DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD, DB_SSLMODE

database:
  type: "postgres"
  host: "localhost"
  port: 5432
  dbname: "your_database"
  user: "your_user"
  password: "your_password"
  sslmode: "disable"

# GraphJin service that compiles and runs the queries.
# Can be overridden with GRAPHJIN_URL.
engine:
  url: "http://localhost:8080/api/v1/graphql"
  timeout: 30
"""

SAMPLE_ENV = """\
# Database Configuration
# Copy this file to .env and fill in your values

DB_HOST=localhost
DB_PORT=5432
DB_NAME=your_database
DB_USER=your_user
DB_PASSWORD=your_password
DB_SSLMODE=disable
GRAPHJIN_URL=http://localhost:8080/api/v1/graphql
LOG_LEVEL=WARNING
"""

SAMPLE_QUERY = """\
# Sample query to fetch all users
# Modify this to match your database schema

query GetUsers {
  users {
    id
    name
    email
    created_at
  }
}
"""

SAMPLE_QUERY_WITH_VARS = """\
# Sample query with variables
# Variables are provided in the corresponding .json file

query GetUserById($id: Int!) {
  users(where: { id: { eq: $id } }) {
    id
    name
    email
    created_at
  }
}
"""

SAMPLE_VARS = """\
{
  "id": 1
}
"""

SAMPLE_GITIGNORE = """\
# Environment files with secrets
.env

# Python
__pycache__/
*.pyc
.venv/

# OS files
.DS_Store
Thumbs.db

# IDE
.idea/
.vscode/
"""


def _scaffold_files(root: Path) -> list[tuple[Path, str]]:
    queries = root / "queries"
    return [
        (root / "config.yaml", SAMPLE_CONFIG),
        (root / ".env.example", SAMPLE_ENV),
        (queries / "get_users.graphql", SAMPLE_QUERY),
        (queries / "get_user_by_id.graphql", SAMPLE_QUERY_WITH_VARS),
        (queries / "get_user_by_id.json", SAMPLE_VARS),
        (root / ".gitignore", SAMPLE_GITIGNORE),
    ]


def write_file_if_missing(path: Path, content: str, overwrite: bool = False) -> ScaffoldStatus:
    if path.exists() and not overwrite:
        return ScaffoldStatus.SKIPPED
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ScaffoldError(f"failed to write {path}: {exc}") from exc
    return ScaffoldStatus.CREATED


def init_project(directory: Path, overwrite: bool = False) -> list[ScaffoldEntry]:
    """Create the queries directory, sample config and sample queries under ``directory``.

    Existing files are left alone unless ``overwrite`` is set. The first entry
    of the result is the queries directory itself.
    """
    queries_dir = directory / "queries"
    existed = queries_dir.is_dir()
    try:
        queries_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ScaffoldError(f"failed to create queries directory: {exc}") from exc

    entries = [
        ScaffoldEntry(queries_dir, ScaffoldStatus.SKIPPED if existed else ScaffoldStatus.CREATED)
    ]
    for path, content in _scaffold_files(directory):
        entries.append(ScaffoldEntry(path, write_file_if_missing(path, content, overwrite)))
    return entries
