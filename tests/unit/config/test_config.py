"""Tests for Config sources and logging setup."""

import logging
from pathlib import Path

import pytest

from bootstat.config import Config, LoggingConfig, SysrootConfig, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("BOOTSTAT_CONFIG_FILE", "BOOTSTAT_LOG_FILE", "BOOTSTAT_SYSROOT__PATH"):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


class TestConfig:
    def test_defaults(self) -> None:
        config = Config()

        assert config.sysroot.path == Path("/")
        assert config.sysroot.repo_path == Path("/ostree/repo")
        assert config.logging.level == "WARNING"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOOTSTAT_SYSROOT__PATH", "/sysroot")
        monkeypatch.setenv("BOOTSTAT_LOGGING__LEVEL", "DEBUG")

        config = Config()

        assert config.sysroot.path == Path("/sysroot")
        assert config.sysroot.repo_path == Path("/sysroot/ostree/repo")
        assert config.logging.level == "DEBUG"

    def test_yaml_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "bootstat.yaml"
        config_file.write_text("sysroot:\n  path: /mnt/sysroot\n  ostree_binary: /opt/bin/ostree\n")
        monkeypatch.setenv("BOOTSTAT_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.sysroot.path == Path("/mnt/sysroot")
        assert config.sysroot.ostree_binary == "/opt/bin/ostree"

    def test_env_beats_yaml(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "bootstat.yaml"
        config_file.write_text("sysroot:\n  path: /mnt/sysroot\n")
        monkeypatch.setenv("BOOTSTAT_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("BOOTSTAT_SYSROOT__PATH", "/sysroot")

        assert Config().sysroot.path == Path("/sysroot")

    def test_missing_yaml_file_is_ignored(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("BOOTSTAT_CONFIG_FILE", str(tmp_path / "absent.yaml"))

        assert Config().sysroot.path == Path("/")

    def test_init_values_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOOTSTAT_SYSROOT__PATH", "/sysroot")

        config = Config(sysroot=SysrootConfig(path=Path("/other")))

        assert config.sysroot.path == Path("/other")


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_stderr_handler(self) -> None:
        configure_logging(LoggingConfig(level="INFO"))

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert not isinstance(root.handlers[0], logging.FileHandler)

    def test_log_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "bootstat.log"
        monkeypatch.setenv("BOOTSTAT_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig(level="DEBUG"))
        logging.getLogger("bootstat.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello" in log_file.read_text()
        logging.getLogger().handlers[0].close()
