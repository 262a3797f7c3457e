import logging
import sys

import pytest

from caddy_admin.cli._logging import configure_logging

_LOGGERS = ("caddy_admin", "httpx", "httpcore")


class TestConfigureLogging:
    def setup_method(self) -> None:
        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(logging.WARNING)

    def teardown_method(self) -> None:
        logging.getLogger().handlers.clear()
        for name in _LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)

    def test_default_sets_info_level(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_verbose_sets_debug_level(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_client_warnings_held_back_by_default(self) -> None:
        configure_logging()
        client_logger = logging.getLogger("caddy_admin.client")
        assert not client_logger.isEnabledFor(logging.WARNING)
        assert client_logger.isEnabledFor(logging.ERROR)

    def test_client_requests_logged_when_verbose(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("caddy_admin.client").isEnabledFor(logging.DEBUG)

    @pytest.mark.parametrize("name", ["httpx", "httpcore"])
    def test_transport_suppressed_to_warning(self, name: str) -> None:
        configure_logging()
        assert logging.getLogger(name).level == logging.WARNING

    @pytest.mark.parametrize("name", ["httpx", "httpcore"])
    def test_transport_debug_when_verbose(self, name: str) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(name).isEnabledFor(logging.DEBUG)

    def test_handler_writes_to_stderr(self) -> None:
        configure_logging()
        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr

    def test_records_are_tagged_with_the_tool_name(self) -> None:
        configure_logging()
        formatter = logging.getLogger().handlers[0].formatter
        assert formatter is not None
        record = logging.LogRecord("caddy_admin.client", logging.ERROR, __file__, 1, "GET /config/ failed", None, None)
        assert "[caddy-admin] caddy_admin.client: GET /config/ failed" in formatter.format(record)

    def test_idempotent(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1
