"""Unit tests for logger configuration."""
import io
import logging

from wikiclient.log import config_console_logger, config_file_logger


class TestConsoleLogger:
    def test_writes_to_stream(self, wiki_logger):
        stream = io.StringIO()
        config_console_logger(logging.INFO, stream=stream)
        logging.getLogger("wikiclient.paging.engine").info("hello")
        assert stream.getvalue() == "INFO: hello\n"

    def test_reconfigure_replaces_handler(self, wiki_logger):
        first = config_console_logger(logging.INFO, stream=io.StringIO())
        second = config_console_logger(logging.DEBUG, stream=io.StringIO())
        assert first not in wiki_logger.handlers
        assert second in wiki_logger.handlers


class TestFileLogger:
    def test_splits_errors(self, tmp_path, wiki_logger):
        all_handler, error_handler = config_file_logger(tmp_path / "logs")
        log = logging.getLogger("wikiclient.client")
        log.info("request sent")
        log.error("request failed")
        all_handler.flush()
        error_handler.flush()

        app_log = (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
        errors_log = (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
        assert "request sent" in app_log
        assert "request failed" in app_log
        assert "request sent" not in errors_log
        assert "request failed" in errors_log
