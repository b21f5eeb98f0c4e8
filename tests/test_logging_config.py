import logging

from vectorviz.logging_config import setup_logging


def test_setup_logging_level_from_string():
    logger = setup_logging("debug")
    assert logger.name == "vectorviz"
    assert logger.level == logging.DEBUG


def test_setup_logging_does_not_duplicate_handlers():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.INFO)
    assert len(logger.handlers) == 1


def test_setup_logging_file_handler(tmp_path):
    log_file = tmp_path / "vectorviz.log"
    logger = setup_logging(logging.INFO, log_file=str(log_file))
    assert len(logger.handlers) == 2
    logging.getLogger("vectorviz.state").info("hello")
    for h in logger.handlers:
        h.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
