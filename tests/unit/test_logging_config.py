"""Unit tests for logging configuration."""

import logging

from freight_calc.config.logging_config import get_logger, setup_logging


class TestSetupLogging:
    """Test root logger configuration."""

    def teardown_method(self):
        setup_logging(level="INFO")

    def test_level_and_single_handler(self):
        root = setup_logging(level="DEBUG")
        setup_logging(level="DEBUG")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging(level="chatty").level == logging.INFO

    def test_http_loggers_quieted(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING

        setup_logging(level="ERROR")
        assert logging.getLogger("httpx").level == logging.ERROR

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "freight.log"
        setup_logging(level="INFO", log_file=log_file)

        get_logger("freight_calc.test").info("snapshot loaded")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "snapshot loaded" in log_file.read_text(encoding="utf-8")
