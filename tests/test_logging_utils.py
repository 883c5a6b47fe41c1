"""
Tests for volcano_types.logging_utils — the shared logger factory.
"""

from __future__ import annotations

import logging

import pytest

from volcano_types.logging_utils import get_logger


@pytest.fixture()
def script_logger():
    package_logger = logging.getLogger("volcano_types")
    saved = list(package_logger.handlers), package_logger.level
    logger = get_logger("pipeline.test_volcano_script")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    package_logger.handlers[:] = saved[0]
    package_logger.setLevel(saved[1])


class TestGetLogger:
    def test_single_handler_on_repeat_calls(self, script_logger: logging.Logger) -> None:
        again = get_logger(script_logger.name)
        assert again is script_logger
        assert len(script_logger.handlers) == 1

    def test_level_is_info(self, script_logger: logging.Logger) -> None:
        assert script_logger.level == logging.INFO

    def test_message_format(self, script_logger: logging.Logger) -> None:
        record = logging.LogRecord(
            script_logger.name, logging.WARNING, __file__, 1, "Dropped %d rows", (3,), None
        )
        line = script_logger.handlers[0].format(record)
        assert line.endswith("| WARNING  | pipeline.test_volcano_script | Dropped 3 rows")

    def test_package_logger_gets_a_handler(self, script_logger: logging.Logger) -> None:
        """Library modules log through volcano_types.*, which must reach stdout too."""
        package_logger = logging.getLogger("volcano_types")
        assert package_logger.handlers
        assert package_logger.level == logging.INFO

    def test_package_child_does_not_double_wire(self) -> None:
        """A volcano_types.* logger propagates to the package logger, so it is not wired again."""
        package_handlers = list(logging.getLogger("volcano_types").handlers)
        child = get_logger("volcano_types.test_child")
        try:
            assert logging.getLogger("volcano_types").handlers == package_handlers
        finally:
            for handler in list(child.handlers):
                child.removeHandler(handler)
