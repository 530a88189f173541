"""Tests for logging setup."""

from loguru import logger

from pictora_images.logging import get_logger, setup_logging


class TestSetupLogging:
    """Test setup_logging."""

    def test_returns_logger(self):
        """Test setup returns the loguru logger."""
        assert setup_logging(level="WARNING") is logger

    def test_log_file_receives_messages(self, tmp_path):
        """Test messages are written to the optional log file."""
        log_file = tmp_path / "pictora.log"
        setup_logging(level="DEBUG", log_file=str(log_file))

        logger.info("cache warmed")
        logger.complete()
        setup_logging(level="INFO")

        assert "cache warmed" in log_file.read_text()

    def test_json_output(self, capsys):
        """Test JSON output serialises records."""
        setup_logging(level="INFO", json_output=True)

        logger.info("json record")
        setup_logging(level="INFO")

        err = capsys.readouterr().err
        assert '"text"' in err
        assert "json record" in err

    def test_console_format_names_component(self, tmp_path):
        """Test file records show the component that logged them."""
        log_file = tmp_path / "pictora.log"
        setup_logging(level="DEBUG", log_file=str(log_file))

        get_logger("coordinator").info("image loaded")
        logger.complete()
        setup_logging(level="INFO")

        line = log_file.read_text().splitlines()[-1]
        assert "coordinator" in line
        assert "image loaded" in line


class TestGetLogger:
    """Test get_logger."""

    def _capture(self, log):
        captured = []
        handler_id = logger.add(lambda msg: captured.append(msg.record["extra"]), level="INFO")
        try:
            log.info("bound")
        finally:
            logger.remove(handler_id)
        return captured

    def test_bound_component(self):
        """Test a component logger carries its name in the extra context."""
        assert self._capture(get_logger("cache")) == [{"component": "cache"}]

    def test_default_component(self):
        """Test get_logger without a component uses the application default."""
        assert self._capture(get_logger()) == [{"component": "app"}]
