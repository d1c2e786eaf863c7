"""
Tests for logging setup.
"""

import logging

from utils.logging_config import ColoredFormatter, get_logger, setup_logging


def test_module_loggers_are_children_of_the_app_logger():
    assert get_logger("core.codec").name == "srt_editor.core.codec"
    assert get_logger("srt_editor.cli").name == "srt_editor.cli"
    assert get_logger().name == "srt_editor"


def test_colored_formatter_restores_the_record():
    record = logging.LogRecord("srt_editor", logging.ERROR, __file__, 1, "boom", None, None)
    text = ColoredFormatter("%(levelname)s: %(message)s").format(record)
    assert text == "\033[31mERROR\033[0m: boom"
    assert record.levelname == "ERROR"


def test_console_and_file_output(tmp_path, capsys):
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logging(logging.INFO, log_file=log_file, use_colors=False)
    get_logger("tests").warning("Skipped block")
    get_logger("tests").debug("hidden")
    for handler in logger.handlers:
        handler.flush()

    assert capsys.readouterr().out == "WARNING: Skipped block\n"
    text = log_file.read_text(encoding='utf-8')
    assert "srt_editor.tests - WARNING - Skipped block" in text
    assert "hidden" not in text


def test_setup_replaces_handlers():
    setup_logging(logging.INFO, use_colors=False)
    logger = setup_logging(logging.WARNING, use_colors=False)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
