"""Configuration loading and database initialisation."""

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from .model import Base

DEFAULT_CONFIG_PATH = "config/config.yaml"


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""


@dataclass
class ServerConfig:
    port: int = 0


@dataclass
class DatabaseConfig:
    host: str = ""
    port: int = 0
    user: str = ""
    password: str = ""
    dbname: str = ""


@dataclass
class Config:
    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def _section(cls, data):
    data = {} if data is None else data
    if not isinstance(data, dict):
        raise ConfigError("Failed to parse config file")
    values = {}
    for f in fields(cls):
        value = data.get(f.name)
        if value is None:
            continue
        if f.type is int:
            ok = isinstance(value, int) and not isinstance(value, bool)
        else:
            ok = not isinstance(value, (dict, list))
            value = str(value).lower() if isinstance(value, bool) else str(value)
        if not ok:
            raise ConfigError("Failed to parse config file")
        values[f.name] = value
    return cls(**values)


def parse_config(text):
    """Parse YAML configuration text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError("Failed to parse config file") from exc
    data = _section(dict, data) if data is None else data
    if not isinstance(data, dict):
        raise ConfigError("Failed to parse config file")
    return Config(
        server=_section(ServerConfig, data.get("server")),
        database=_section(DatabaseConfig, data.get("database")),
    )


def load_config(path=DEFAULT_CONFIG_PATH):
    """Read and parse the configuration file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError("Failed to read config file") from exc
    return parse_config(text)


def database_url(config):
    """Build the MySQL connection URL described by ``config``."""
    db = config.database
    return URL.create(
        "mysql+pymysql",
        username=db.user or None,
        password=db.password or None,
        host=db.host or None,
        port=db.port or None,
        database=db.dbname or None,
        query={"charset": "utf8mb4"},
    )


def migrate(engine: Engine) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(engine)


def init_db(config_path=DEFAULT_CONFIG_PATH, url=None):
    """Connect to the database and migrate it; ``url`` overrides the config file."""
    if url is None:
        url = database_url(load_config(config_path))
    try:
        engine = create_engine(url)
        engine.connect().close()
    except SQLAlchemyError as exc:
        raise ConnectionError("failed to connect database") from exc
    try:
        migrate(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise RuntimeError("failed to migrate database") from exc
    return engine