"""
Tests for logging utilities.
"""

import logging
from unittest.mock import MagicMock, patch

from kvform.core.utils.logger import (
    get_logger,
    log_debug,
    log_error,
    log_info,
    setup_logging,
)


class TestLogging:
    """Tests for logging utilities."""

    def test_get_logger(self):
        logger = get_logger()

        assert logger.name == "kvform"

    def test_setup_logging(self):
        with patch("kvform.core.utils.logger.logging.getLogger") as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger
            setup_logging(level="DEBUG")
            mock_get_logger.assert_called_with("kvform")
            assert mock_logger.addHandler.called
        setup_logging()

    def test_setup_logging_writes_file(self, tmp_path):
        log_file = tmp_path / "kvform.log"
        setup_logging(level="DEBUG", log_file=str(log_file))

        log_debug("planner", "2 operation(s)", context="create")
        for handler in get_logger().handlers:
            handler.flush()

        assert "[PLANNER] 2 operation(s) | Context: create" in log_file.read_text()
        setup_logging()

    def test_log_error_includes_module(self, caplog):
        logger = setup_logging(level="INFO")
        logger.propagate = True
        with caplog.at_level(logging.ERROR, logger="kvform"):
            log_error("store", "Insert rejected")

        assert "[STORE] Insert rejected" in caplog.text
        setup_logging()

    def test_log_info_includes_context(self, caplog):
        logger = setup_logging(level="INFO")
        logger.propagate = True
        with caplog.at_level(logging.INFO, logger="kvform"):
            log_info("cli", "Applied 1 operation(s)", "settings.json")

        assert "[CLI] Applied 1 operation(s) | Context: settings.json" in caplog.text
        setup_logging()
