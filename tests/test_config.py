"""Tests for configuration loading."""

import io
import logging
import os
import tempfile

import pytest
import yaml

from careerflow.config import AppConfig, LoggingConfig, StorageConfig, WebConfig, load_config, validate_config
from careerflow.utils.logging_config import resolve_level, setup_logging


@pytest.fixture
def config_file():
    """Create a temporary config file."""
    config_data = {
        "storage": {"database_url": "sqlite:///tmp/ledger.db"},
        "web": {"host": "0.0.0.0", "port": 9000},
        "data_dir": "var/data",
        "log_dir": "var/logs",
    }

    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(config_data, f)
        path = f.name

    yield path
    os.unlink(path)


class TestLoadConfig:
    def test_loads_valid_config(self, config_file, monkeypatch):
        monkeypatch.delenv("CAREERFLOW_DATABASE_URL", raising=False)
        config = load_config(config_file)
        assert config.storage.database_url == "sqlite:///tmp/ledger.db"
        assert config.web.host == "0.0.0.0"
        assert config.web.port == 9000
        assert config.data_dir == "var/data"
        assert config.log_dir == "var/logs"

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent.yaml")

    def test_defaults_applied(self, monkeypatch):
        monkeypatch.delenv("CAREERFLOW_DATABASE_URL", raising=False)
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump({"data_dir": "ledger"}, f)
            path = f.name

        try:
            config = load_config(path)
            assert config.storage.database_url == "sqlite:///ledger/careerflow.db"
            assert config.web.host == "127.0.0.1"
            assert config.web.port == 8000
            assert config.log_dir == "logs"
        finally:
            os.unlink(path)

    def test_empty_file(self, monkeypatch):
        monkeypatch.delenv("CAREERFLOW_DATABASE_URL", raising=False)
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            path = f.name

        try:
            config = load_config(path)
            assert config.storage.database_url == "sqlite:///data/careerflow.db"
        finally:
            os.unlink(path)

    def test_env_overrides_database_url(self, config_file, monkeypatch):
        monkeypatch.setenv("CAREERFLOW_DATABASE_URL", "sqlite:///override.db")
        config = load_config(config_file)
        assert config.storage.database_url == "sqlite:///override.db"

    def test_app_config_default_url(self):
        assert AppConfig().storage.database_url == "sqlite:///data/careerflow.db"
        assert AppConfig(data_dir="x").storage.database_url == "sqlite:///x/careerflow.db"


class TestValidateConfig:
    def test_valid_config_has_no_warnings(self, tmp_path):
        config = AppConfig(data_dir=str(tmp_path))
        assert validate_config(config) == []

    def test_non_sqlite_warns(self, tmp_path):
        config = AppConfig(
            storage=StorageConfig(database_url="postgresql://localhost/careerflow"),
            data_dir=str(tmp_path),
        )
        warnings = validate_config(config)
        assert any("non-sqlite" in w.lower() for w in warnings)

    def test_bad_port_warns(self, tmp_path):
        config = AppConfig(web=WebConfig(port=70000), data_dir=str(tmp_path))
        warnings = validate_config(config)
        assert any("port" in w.lower() for w in warnings)

    def test_missing_data_dir_warns(self, tmp_path):
        config = AppConfig(data_dir=str(tmp_path / "missing"))
        warnings = validate_config(config)
        assert any("data directory" in w.lower() for w in warnings)


@pytest.fixture
def careerflow_logger():
    logger = logging.getLogger("careerflow")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestLoggingConfig:
    def test_defaults(self):
        settings = AppConfig().logging
        assert settings.level == "INFO"
        assert settings.max_bytes == 5 * 1024 * 1024
        assert settings.backup_count == 3

    def test_loaded_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"logging": {"level": "warning", "backup_count": 5, "console": False}}))
        settings = load_config(str(path)).logging
        assert settings.level == "warning"
        assert settings.backup_count == 5
        assert settings.console is False
        assert settings.file_name == "careerflow.log"

    def test_rotation_disabled_warns(self, tmp_path):
        config = AppConfig(logging=LoggingConfig(backup_count=0), data_dir=str(tmp_path))
        assert any("rotation" in w.lower() for w in validate_config(config))


class TestLogging:
    def test_setup_logging_creates_log_file(self, tmp_path, careerflow_logger):
        logger = setup_logging(str(tmp_path / "logs"), logging.DEBUG)
        assert logger is careerflow_logger
        assert len(logger.handlers) == 2
        logging.getLogger("careerflow.storage").info("hello")
        assert "hello" in (tmp_path / "logs" / "careerflow.log").read_text()

    def test_reinit_does_not_duplicate_handlers(self, tmp_path, careerflow_logger):
        setup_logging(str(tmp_path))
        setup_logging(str(tmp_path))
        assert len(careerflow_logger.handlers) == 2

    def test_level_from_settings(self, tmp_path, careerflow_logger):
        settings = LoggingConfig(level="warning", file_name="ledger.log", console=False)
        logger = setup_logging(str(tmp_path), settings=settings)
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        logging.getLogger("careerflow.web").info("quiet")
        logging.getLogger("careerflow.web").warning("loud")
        text = (tmp_path / "ledger.log").read_text()
        assert "loud" in text and "quiet" not in text

    def test_explicit_level_wins(self, tmp_path, careerflow_logger):
        logger = setup_logging(str(tmp_path), logging.DEBUG, settings=LoggingConfig(level="ERROR"))
        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, tmp_path, careerflow_logger):
        logger = setup_logging(str(tmp_path), "chatty", stream=io.StringIO())
        assert logger.level == logging.INFO
        assert "Unknown log level: 'chatty'" in (tmp_path / "careerflow.log").read_text()

    def test_console_stream(self, tmp_path, careerflow_logger):
        stream = io.StringIO()
        setup_logging(str(tmp_path), stream=stream)
        logging.getLogger("careerflow.cli").info("to the console")
        assert "[INFO] careerflow.cli: to the console" in stream.getvalue()


class TestResolveLevel:
    def test_names_and_numbers(self):
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level(" Warning ") == logging.WARNING
        assert resolve_level(logging.ERROR) == logging.ERROR

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            resolve_level("loud")
