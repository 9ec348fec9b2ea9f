"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DATABASE_URL_ENV = "CAREERFLOW_DATABASE_URL"


@dataclass
class StorageConfig:
    database_url: str = ""  # empty = sqlite file under data_dir


@dataclass
class WebConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file_name: str = "careerflow.log"
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3
    console: bool = True


@dataclass
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    data_dir: str = "data"
    log_dir: str = "logs"

    def __post_init__(self):
        if not self.storage.database_url:
            self.storage.database_url = default_database_url(self.data_dir)


def default_database_url(data_dir: str) -> str:
    return f"sqlite:///{Path(data_dir) / 'careerflow.db'}"


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.example.yaml to config.yaml and adjust your settings."
        )

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    data_dir = raw.get("data_dir", "data")

    # Storage (env var takes precedence)
    storage_raw = raw.get("storage") or {}
    database_url = os.environ.get(DATABASE_URL_ENV) or storage_raw.get("database_url") or default_database_url(data_dir)

    # Web
    web_raw = raw.get("web") or {}

    # Logging
    log_raw = raw.get("logging") or {}
    log_defaults = LoggingConfig()

    return AppConfig(
        storage=StorageConfig(database_url=database_url),
        web=WebConfig(
            host=web_raw.get("host", "127.0.0.1"),
            port=int(web_raw.get("port", 8000)),
        ),
        logging=LoggingConfig(
            level=str(log_raw.get("level", log_defaults.level)),
            file_name=log_raw.get("file_name", log_defaults.file_name),
            max_bytes=int(log_raw.get("max_bytes", log_defaults.max_bytes)),
            backup_count=int(log_raw.get("backup_count", log_defaults.backup_count)),
            console=bool(log_raw.get("console", log_defaults.console)),
        ),
        data_dir=data_dir,
        log_dir=raw.get("log_dir", "logs"),
    )


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if not config.storage.database_url.startswith("sqlite"):
        warnings.append("Non-SQLite database URL configured - only SQLite is tested")

    if not 1 <= config.web.port <= 65535:
        warnings.append(f"Web port {config.web.port} is out of range (1-65535)")

    if config.logging.backup_count < 1 or config.logging.max_bytes <= 0:
        warnings.append("Log rotation needs max_bytes > 0 and backup_count >= 1 - the log file will grow unbounded")

    if not Path(config.data_dir).is_dir():
        warnings.append(f"Data directory {config.data_dir} does not exist - it will be created on first write")

    return warnings
