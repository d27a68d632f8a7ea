"""Tests for configuration loading and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from psycopg2.extensions import parse_dsn

from gqlvalidate.config import Config, ConfigError, DatabaseConfig, load_config, load_settings
from gqlvalidate.settings import Settings


class TestLoadConfig:
    def test_loads_all_sections(self, config_file: Path) -> None:
        config = load_config(config_file, Settings())
        assert config.database.host == "db.internal"
        assert config.database.port == 5432
        assert config.database.dbname == "shop"
        assert config.database.user == "reader"
        assert config.database.password == "secret"
        assert config.database.sslmode == "require"
        assert config.engine.url == "http://graphjin.internal:8080/api/v1/graphql"
        assert config.engine.timeout == 5
        assert config.engine.headers == {"X-User-ID": "42"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="could not read config file"):
            load_config(tmp_path / "missing.yaml", Settings())

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("database: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="could not parse config file"):
            load_config(path, Settings())

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="top level must be a mapping"):
            load_config(path, Settings())

    def test_wrong_field_type(self, tmp_path: Path) -> None:
        path = tmp_path / "types.yaml"
        path.write_text("database:\n  port: not-a-number\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="database.port"):
            load_config(path, Settings())

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        config = load_config(path, Settings())
        assert config == Config()

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "extra.yaml"
        path.write_text("production: true\ndatabase:\n  host: h\n", encoding="utf-8")
        assert load_config(path, Settings()).database.host == "h"


class TestEnvironmentOverrides:
    def test_env_overrides_database(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DB_HOST", "override.internal")
        monkeypatch.setenv("DB_PORT", "6543")
        monkeypatch.setenv("DB_NAME", "other")
        monkeypatch.setenv("DB_USER", "writer")
        monkeypatch.setenv("DB_PASSWORD", "hunter2")
        monkeypatch.setenv("DB_SSLMODE", "disable")
        config = load_config(config_file)
        assert config.database.host == "override.internal"
        assert config.database.port == 6543
        assert config.database.dbname == "other"
        assert config.database.user == "writer"
        assert config.database.password == "hunter2"
        assert config.database.sslmode == "disable"

    def test_env_overrides_engine_url(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GRAPHJIN_URL", "http://localhost:9000/api/v1/graphql")
        config = load_config(config_file)
        assert config.engine.url == "http://localhost:9000/api/v1/graphql"
        assert config.engine.headers == {"X-User-ID": "42"}

    def test_empty_env_does_not_override(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DB_HOST", "")
        monkeypatch.setenv("DB_PORT", "")
        config = load_config(config_file)
        assert config.database.host == "db.internal"
        assert config.database.port == 5432

    def test_dotenv_file(self, config_file: Path, tmp_path: Path) -> None:
        # conftest chdirs into tmp_path, where Settings looks for .env
        (tmp_path / ".env").write_text("DB_USER=from_dotenv\n", encoding="utf-8")
        assert load_config(config_file).database.user == "from_dotenv"

    def test_invalid_port_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "abc")
        with pytest.raises(ConfigError, match="invalid environment override"):
            load_settings()

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError, match="log_level"):
            load_settings()

    def test_log_level_normalised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"


class TestRequireComplete:
    def test_complete_config(self, config_file: Path) -> None:
        load_config(config_file, Settings()).require_complete()

    @pytest.mark.parametrize(
        ("update", "message"),
        [
            ({"host": ""}, "database host is required"),
            ({"port": 0}, "database port is required"),
            ({"dbname": ""}, "database name is required"),
            ({"user": ""}, "database user is required"),
        ],
    )
    def test_missing_database_field(
        self, config_file: Path, update: dict, message: str
    ) -> None:
        config = load_config(config_file, Settings())
        broken = config.model_copy(update={"database": config.database.model_copy(update=update)})
        with pytest.raises(ConfigError, match=message):
            broken.require_complete()

    def test_missing_engine_url(self, config_file: Path) -> None:
        config = load_config(config_file, Settings())
        broken = config.model_copy(update={"engine": config.engine.model_copy(update={"url": ""})})
        with pytest.raises(ConfigError, match="engine url is required"):
            broken.require_complete()


class TestDsn:
    def test_dsn(self, config_file: Path) -> None:
        dsn = load_config(config_file, Settings()).database.dsn
        assert parse_dsn(dsn) == {
            "host": "db.internal",
            "port": "5432",
            "dbname": "shop",
            "user": "reader",
            "password": "secret",
            "sslmode": "require",
            "connect_timeout": "10",
        }

    def test_empty_password_keeps_following_keys(self) -> None:
        db = DatabaseConfig(
            host="localhost", port=5432, dbname="shop", user="reader", password="",
            sslmode="require",
        )
        parsed = parse_dsn(db.dsn)
        assert parsed["password"] == ""
        assert parsed["sslmode"] == "require"
        assert parsed["connect_timeout"] == "10"

    @pytest.mark.parametrize("password", ["a b", "it's", "back\\slash", "x=y"])
    def test_special_characters_are_quoted(self, password: str) -> None:
        db = DatabaseConfig(
            host="localhost", port=5432, dbname="shop", user="reader", password=password
        )
        parsed = parse_dsn(db.dsn)
        assert parsed["password"] == password
        assert parsed["sslmode"] == "disable"
