"""Command-line entry point: ``gql-validate validate | check | list | init``."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from gqlvalidate import __version__
from gqlvalidate.config import DEFAULT_CONFIG_FILE, Config, ConfigError, load_config, load_settings
from gqlvalidate.engine import Engine, GraphJinEngine
from gqlvalidate.errors import GQLValidateError, SetupError
from gqlvalidate.queries import describe_query_file, discover, find_query_files, single_case
from gqlvalidate.report import (
    EXIT_FAILURES,
    EXIT_OK,
    EXIT_SETUP_ERROR,
    exit_code,
    render_json,
    render_query_list_json,
    render_query_list_text,
    render_text,
)
from gqlvalidate.service import database
from gqlvalidate.service.database import DatabaseError
from gqlvalidate.service.runner import ValidationRunner
from gqlvalidate.service.scaffold import ScaffoldStatus, init_project
from gqlvalidate.settings import Settings

logger = logging.getLogger("gqlvalidate.cli")

DEFAULT_QUERIES_DIR = "./queries"


def build_engine(config: Config) -> Engine:
    return GraphJinEngine.from_config(config.engine)


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    config = load_config(args.config, settings)
    config.require_complete()
    database.probe(config.database)

    if args.file:
        cases = [single_case(Path(args.file))]
    else:
        cases = discover(Path(args.queries))

    if not cases:
        print("No query files found")
        return EXIT_OK
    logger.info("Found %d query file(s) to validate", len(cases))

    engine = build_engine(config)
    try:
        runner = ValidationRunner(engine, fail_fast=args.fail_fast, workers=args.workers)
        summary = runner.run(cases)
    finally:
        engine.close()

    print(render_json(summary) if args.json else render_text(summary))
    return exit_code(summary)


def cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    print("Checking configuration and database connection...")
    print()

    print(f"  ○ Loading config from: {args.config}")
    try:
        config = load_config(args.config, settings)
    except ConfigError as exc:
        print(f"  ✗ Failed to load config: {exc}")
        return EXIT_SETUP_ERROR
    print("  ✓ Config loaded successfully")

    print("  ○ Validating configuration...")
    try:
        config.require_complete()
    except ConfigError as exc:
        print(f"  ✗ Invalid configuration: {exc}")
        return EXIT_SETUP_ERROR
    print("  ✓ Configuration is valid")

    db = config.database
    if args.verbose:
        print()
        print("  Connection Details:")
        print(f"    Host:     {db.host}")
        print(f"    Port:     {db.port}")
        print(f"    Database: {db.dbname}")
        print(f"    User:     {db.user}")
        print(f"    SSL Mode: {db.sslmode}")
        print(f"    Engine:   {config.engine.url}")
        print()

    print("  ○ Connecting to database...")
    start = time.perf_counter()
    try:
        conn = database.connect(db)
    except DatabaseError as exc:
        print(f"  ✗ {exc}")
        return EXIT_SETUP_ERROR
    try:
        try:
            database.ping(conn)
        except DatabaseError as exc:
            print(f"  ✗ {exc}")
            return EXIT_SETUP_ERROR
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        print(f"  ✓ Database connection successful ({elapsed_ms}ms)")

        if args.verbose:
            try:
                version = database.server_version(conn)
            except DatabaseError as exc:
                logger.warning("%s", exc)
            else:
                print(f"  ✓ Database version: {_truncate(version, 60)}")

        try:
            table_count = database.count_public_tables(conn)
        except DatabaseError as exc:
            logger.warning("%s", exc)
        else:
            print(f"  ✓ Found {table_count} table(s) in public schema")
    finally:
        conn.close()

    print()
    print("All checks passed! Your configuration is ready to use.")
    print()
    return EXIT_OK


def cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    directory = Path(args.queries)
    queries = [describe_query_file(path) for path in find_query_files(directory)]

    if not queries:
        print(f"No GraphQL query files found in: {directory}")
        return EXIT_OK

    if args.json:
        print(render_query_list_json(queries, directory))
    else:
        print(
            render_query_list_text(
                queries, directory, full_path=args.full_path, verbose=args.verbose
            )
        )
    return EXIT_OK


def cmd_init(args: argparse.Namespace, settings: Settings) -> int:
    directory = Path(args.dir)
    print(f"Initializing GraphQL validation project in: {directory}")
    print()

    for entry in init_project(directory, overwrite=args.overwrite):
        if entry.status is ScaffoldStatus.CREATED:
            print(f"  ✓ Created: {entry.path}")
        else:
            print(f"  ○ Skipped (exists): {entry.path}")

    print()
    print("Project initialized successfully!")
    print()
    print("Next steps:")
    print("  1. Edit config.yaml with your database credentials and GraphJin URL")
    print("     Or set environment variables: DB_HOST, DB_NAME, DB_USER, DB_PASSWORD")
    print()
    print("  2. Check your database connection:")
    print("     gql-validate check")
    print()
    print("  3. Add your GraphQL queries to the queries/ directory")
    print()
    print("  4. Run validation:")
    print("     gql-validate validate")
    print()
    return EXIT_OK


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_global_options(parser: argparse.ArgumentParser, suppress: bool) -> None:
    """Global flags, accepted both before and after the subcommand."""

    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress else value

    parser.add_argument(
        "-c", "--config", default=default(DEFAULT_CONFIG_FILE), help="config file path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=default(False),
        help="enable verbose output",
    )
    parser.add_argument(
        "-j", "--json", action="store_true", default=default(False),
        help="output results as JSON",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gql-validate",
        description=(
            "Validate GraphQL queries against a PostgreSQL database. Queries are "
            "compiled and executed by GraphJin; responses are checked for errors "
            "at any depth of the returned data."
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"gql-validate version {__version__}"
    )
    _add_global_options(parser, suppress=False)

    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, suppress=True)

    sub = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    p_validate = sub.add_parser(
        "validate", parents=[common], help="validate GraphQL queries against the database"
    )
    source = p_validate.add_mutually_exclusive_group()
    source.add_argument(
        "-q", "--queries", default=DEFAULT_QUERIES_DIR,
        help="directory containing GraphQL query files",
    )
    source.add_argument("-f", "--file", help="single GraphQL file to validate")
    p_validate.add_argument(
        "--fail-fast", action="store_true", help="stop on first validation failure"
    )
    p_validate.add_argument(
        "--workers", type=int, default=1,
        help="number of queries to run concurrently (default: 1)",
    )
    p_validate.set_defaults(handler=cmd_validate)

    p_check = sub.add_parser(
        "check", parents=[common], help="check database connection and configuration"
    )
    p_check.set_defaults(handler=cmd_check)

    p_list = sub.add_parser("list", parents=[common], help="list available GraphQL query files")
    p_list.add_argument(
        "-q", "--queries", default=DEFAULT_QUERIES_DIR,
        help="directory containing GraphQL query files",
    )
    p_list.add_argument("--full-path", action="store_true", help="show full file paths")
    p_list.set_defaults(handler=cmd_list)

    p_init = sub.add_parser(
        "init", parents=[common], help="initialize a new GraphQL validation project"
    )
    p_init.add_argument(
        "-d", "--dir", default=".", help="directory to initialize the project in"
    )
    p_init.add_argument("--overwrite", action="store_true", help="overwrite existing files")
    p_init.set_defaults(handler=cmd_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "workers", 1) < 1:
        parser.error("--workers must be at least 1")

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_SETUP_ERROR

    logging.basicConfig(level="DEBUG" if args.verbose else settings.log_level.upper())

    try:
        return args.handler(args, settings)
    except SetupError as exc:
        logger.debug("Setup failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_SETUP_ERROR
    except GQLValidateError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURES


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
