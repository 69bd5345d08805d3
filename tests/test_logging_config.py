import logging
from logging.handlers import RotatingFileHandler

import pytest
from rich.logging import RichHandler

from pomo.utils.logging_config import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_console_only_by_default(monkeypatch, root_logger):
    monkeypatch.delenv("POMO_LOG_FILE", raising=False)
    setup_logging(logging.WARNING)
    assert [type(h) for h in root_logger.handlers] == [RichHandler]
    assert root_logger.handlers[0].level == logging.WARNING
    assert root_logger.level == logging.WARNING


def test_log_file_records_debug_while_console_stays_quiet(tmp_path, root_logger):
    log_file = tmp_path / "pomo.log"
    setup_logging(logging.WARNING, str(log_file))

    console = [h for h in root_logger.handlers if isinstance(h, RichHandler)]
    files = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert console[0].level == logging.WARNING
    assert len(files) == 1

    logging.getLogger("pomo.terminator").debug("kill detail %d", 7)
    files[0].flush()
    text = log_file.read_text()
    assert "[DEBUG] pomo.terminator: kill detail 7" in text


def test_log_file_from_environment(monkeypatch, tmp_path, root_logger):
    log_file = tmp_path / "env.log"
    monkeypatch.setenv("POMO_LOG_FILE", str(log_file))
    setup_logging(logging.INFO)
    assert any(isinstance(h, RotatingFileHandler) for h in root_logger.handlers)
    assert log_file.exists()
