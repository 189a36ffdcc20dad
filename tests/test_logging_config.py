import logging

from logging_config import setup_logger


def test_stream_handler_by_default():
    logger = setup_logger("test_stream_logger")
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_no_duplicate_handlers():
    first = setup_logger("test_dup_logger")
    second = setup_logger("test_dup_logger", level=logging.DEBUG)
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG


def test_file_handler(tmp_path):
    log_file = tmp_path / "pid.log"
    logger = setup_logger("test_file_logger", str(log_file))
    logger.info("controller configured")
    for handler in logger.handlers:
        handler.flush()
        handler.close()
    assert isinstance(logger.handlers[0], logging.FileHandler)
    assert "INFO - controller configured" in log_file.read_text()


def test_controller_records_reach_log_file(tmp_path):
    from pid_core import Controller

    log_file = tmp_path / "controller.log"
    logger = setup_logger("pid_core", str(log_file), logging.DEBUG)
    try:
        Controller(1.0, 0.0, 0.0, 0.1, 0.1, 0.0).bound_output(-1.0, 1.0)
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text()
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
    assert "DEBUG - Controller created" in text
    assert "output bounds set to" in text
