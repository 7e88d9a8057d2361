"""Tests for environment configuration and logging setup."""

import logging

import pytest

from hookcli import App, Command, Config, VerbLevel
from hookcli.utils.logging import (
    ROOT_LOGGER_NAME,
    HumanFormatter,
    JsonFormatter,
    StderrHandler,
    configure_logging,
    operation_timer,
    set_verbose,
)


class TestConfigFromEnv:
    """Test reading settings from environment variables."""

    def test_defaults(self):
        """Test the settings of an empty environment."""
        config = Config.from_env({})

        assert config.debug is False
        assert config.log_level is None
        assert config.log_format == "human"
        assert config.verbose == VerbLevel.ERROR

    def test_debug(self):
        """Test that debug mode changes the verbosity and format defaults."""
        config = Config.from_env({"HOOKCLI_DEBUG": "true"})

        assert config.debug is True
        assert config.verbose == VerbLevel.DEBUG
        assert config.log_format == "debug"

    def test_values(self):
        """Test explicit settings."""
        config = Config.from_env({
            "HOOKCLI_LOG_LEVEL": "info",
            "HOOKCLI_LOG_FORMAT": "JSON",
            "HOOKCLI_VERBOSE": "crazy",
        })

        assert config.log_level == "INFO"
        assert config.log_format == "json"
        assert config.verbose == VerbLevel.CRAZY

    def test_invalid_values_fall_back(self, caplog):
        """Test that unusable values are ignored."""
        with caplog.at_level(logging.WARNING, logger="hookcli"):
            config = Config.from_env({"HOOKCLI_LOG_FORMAT": "xml", "HOOKCLI_VERBOSE": "loud"})

        assert config.log_format == "human"
        assert config.verbose == VerbLevel.ERROR
        assert "HOOKCLI_VERBOSE" in caplog.text

    def test_reads_os_environ(self, monkeypatch):
        """Test that the process environment is used by default."""
        monkeypatch.setenv("HOOKCLI_VERBOSE", "2")
        assert Config.from_env().verbose == VerbLevel.WARN

    def test_invalid_log_level_falls_back(self, caplog):
        """Test that an unknown log level name is ignored with a warning."""
        with caplog.at_level(logging.WARNING, logger="hookcli"):
            config = Config.from_env({"HOOKCLI_LOG_LEVEL": "bogus"})

        assert config.log_level is None
        assert "HOOKCLI_LOG_LEVEL" in caplog.text

    def test_invalid_log_level_does_not_break_run(self, monkeypatch):
        """Test that an application still runs with an unknown log level set."""
        monkeypatch.setenv("HOOKCLI_LOG_LEVEL", "bogus")
        seen = []
        app = App(name="demo", bin_name="demo", exit_on_end=False)
        app.add(Command("build", func=lambda cmd, args: seen.append(args)))

        assert app.run(["build", "x"]) == 0
        assert seen == [["x"]]


class TestLoggingSetup:
    """Test the hookcli logger configuration."""

    def test_single_handler(self):
        """Test that repeated configuration keeps one handler."""
        root = configure_logging(logging.INFO)
        configure_logging(VerbLevel.DEBUG, "json")

        handlers = [h for h in root.handlers if isinstance(h, StderrHandler)]
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG

        configure_logging("warning")
        assert root.level == logging.WARNING
        assert isinstance(handlers[0].formatter, HumanFormatter)

    def test_invalid_level_name(self):
        """Test that unknown level names raise."""
        with pytest.raises(ValueError):
            configure_logging("chatty")

    def test_set_verbose(self):
        """Test the verbose option mapping."""
        set_verbose(VerbLevel.INFO)
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO

    def test_handler_follows_stderr(self, capsys):
        """Test that log lines go to the current sys.stderr."""
        configure_logging(logging.ERROR)
        logging.getLogger("hookcli.test").error("something broke")

        assert "[ERROR] something broke" in capsys.readouterr().err


class TestOperationTimer:
    """Test the operation timer."""

    def test_slow_operation_warns(self, caplog):
        """Test that operations over the threshold log a warning."""
        with caplog.at_level(logging.DEBUG, logger="hookcli"):
            with operation_timer("command 'build'", threshold_ms=-1):
                pass

        assert any(r.levelno == logging.WARNING and "command 'build' took" in r.getMessage()
                   for r in caplog.records)

    def test_fast_operation_debug(self, caplog):
        """Test that fast operations only log at debug level."""
        with caplog.at_level(logging.DEBUG, logger="hookcli"):
            with operation_timer("command 'build'", debug=True, threshold_ms=60000):
                pass

        messages = [r.getMessage() for r in caplog.records]
        assert any("took" in m for m in messages)
        assert not any(r.levelno >= logging.WARNING for r in caplog.records)

    def test_errors_propagate(self):
        """Test that the timer does not swallow errors."""
        with pytest.raises(RuntimeError):
            with operation_timer("failing"):
                raise RuntimeError("boom")
