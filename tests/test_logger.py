import logging

from pybuild.logger import LOG_FILE_NAME, LOGGER_NAME, setup_logging


def test_setup_logging_file(tmp_path):
    logger = setup_logging(debug=False, log_dir=str(tmp_path / "logs"))
    try:
        assert logger is logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 2
        logging.getLogger("pybuild.map.mapfile").debug("decoded something")
        for handler in logger.handlers:
            handler.flush()
        text = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "decoded something" in text
        assert "pybuild.map.mapfile" in text
    finally:
        setup_logging()


def test_setup_logging_replaces_handlers():
    setup_logging(debug=True)
    logger = setup_logging()
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING
