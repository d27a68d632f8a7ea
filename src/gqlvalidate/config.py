"""Project configuration: YAML file plus environment overrides."""

from __future__ import annotations

from pathlib import Path

from psycopg2.extensions import make_dsn
from pydantic import BaseModel, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from gqlvalidate.errors import SetupError
from gqlvalidate.settings import Settings

DEFAULT_CONFIG_FILE = "config.yaml"


class ConfigError(SetupError):
    """Raised when the configuration is missing, unreadable or incomplete."""


class DatabaseConfig(BaseModel):
    """PostgreSQL connection parameters."""

    type: str = "postgres"
    host: str = ""
    port: int = 0
    dbname: str = ""
    user: str = ""
    password: str = ""
    sslmode: str = "disable"
    connect_timeout: int = 10

    @property
    def dsn(self) -> str:
        """libpq keyword/value connection string, with values quoted as needed."""
        return make_dsn(
            host=self.host,
            port=self.port,
            dbname=self.dbname,
            user=self.user,
            password=self.password,
            sslmode=self.sslmode,
            connect_timeout=self.connect_timeout,
        )


class EngineConfig(BaseModel):
    """Where the GraphJin service listens and how to talk to it."""

    url: str = ""
    timeout: float = 30.0
    headers: dict[str, str] = Field(default_factory=dict)


class Config(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)

    def apply_overrides(self, settings: Settings) -> Config:
        """Return a copy with non-empty environment overrides applied."""
        db_overrides = {
            "host": settings.db_host,
            "port": settings.db_port,
            "dbname": settings.db_name,
            "user": settings.db_user,
            "password": settings.db_password,
            "sslmode": settings.db_sslmode,
        }
        database = self.database.model_copy(
            update={k: v for k, v in db_overrides.items() if v is not None}
        )
        engine = self.engine
        if settings.graphjin_url is not None:
            engine = engine.model_copy(update={"url": settings.graphjin_url})
        return self.model_copy(update={"database": database, "engine": engine})

    def require_complete(self) -> None:
        """Raise :class:`ConfigError` if a required field is missing."""
        if not self.database.host:
            raise ConfigError("database host is required")
        if self.database.port == 0:
            raise ConfigError("database port is required")
        if not self.database.dbname:
            raise ConfigError("database name is required")
        if not self.database.user:
            raise ConfigError("database user is required")
        if not self.engine.url:
            raise ConfigError("engine url is required")


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def load_settings() -> Settings:
    """Read :class:`Settings` from the environment, as a setup failure on bad values."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(
            f"invalid environment override: {_format_validation_error(exc)}"
        ) from exc


def load_config(path: Path | str, settings: Settings | None = None) -> Config:
    """Read the YAML config at ``path`` and apply environment overrides."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"could not read config file: {exc}") from exc

    yaml = YAML(typ="safe")
    try:
        raw = yaml.load(content)
    except YAMLError as exc:
        raise ConfigError(f"could not parse config file: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("could not parse config file: top level must be a mapping")

    try:
        config = Config.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(
            f"could not parse config file: {_format_validation_error(exc)}"
        ) from exc

    if settings is None:
        settings = load_settings()
    return config.apply_overrides(settings)
