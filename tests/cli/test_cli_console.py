"""
tests/cli/test_cli_console.py - CLI 로깅/콘솔 설정 테스트
"""

import logging

from cli.ui.console import LOGGER_NAMES, configure_logging


def _rich_handlers(name):
    return [h for h in logging.getLogger(name).handlers if h.get_name() == "cwm-rich"]


class TestConfigureLogging:
    def test_default_warning(self):
        assert configure_logging() == logging.WARNING

    def test_verbose_overrides_level(self):
        assert configure_logging(verbose=True, level="error") == logging.DEBUG

    def test_level_name(self):
        level = configure_logging(level="INFO")

        assert level == logging.INFO
        for name in LOGGER_NAMES:
            assert logging.getLogger(name).level == logging.INFO

    def test_unknown_level_falls_back(self):
        assert configure_logging(level="verbose") == logging.WARNING

    def test_single_handler_per_logger(self):
        configure_logging()
        configure_logging(verbose=True)

        for name in LOGGER_NAMES:
            assert len(_rich_handlers(name)) == 1
