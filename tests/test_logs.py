import logging

from boxdialog.config import LoggingConfig
from boxdialog.logs import configure_logging


def test_file_handler_receives_package_records(tmp_path):
    log_file = tmp_path / "boxdialog.log"
    logger = configure_logging(LoggingConfig(level="DEBUG", file=str(log_file)))
    try:
        assert logger.name == "boxdialog"
        assert logger.level == logging.DEBUG
        logging.getLogger("boxdialog.dialog").debug("layout pass %d", 1)
        for h in logger.handlers:
            h.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "boxdialog.dialog: layout pass 1" in text
        assert "DEBUG" in text
    finally:
        configure_logging(LoggingConfig())


def test_reconfigure_replaces_handler(tmp_path):
    first = tmp_path / "a.log"
    second = tmp_path / "b.log"
    configure_logging(LoggingConfig(level="INFO", file=str(first)))
    logger = configure_logging(LoggingConfig(level="INFO", file=str(second)))
    try:
        files = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(files) == 1
        assert files[0].baseFilename == str(second)
    finally:
        configure_logging(LoggingConfig())


def test_no_file_means_no_file_handler():
    logger = configure_logging(LoggingConfig(level="ERROR"))
    assert logger.level == logging.ERROR
    assert not [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
