# logging_config.py

import logging


def setup_logger(name, log_file=None, level=logging.INFO):
    """
    Sets up a logger with the specified name, optional log file and level.
    Without a log file, records go to stderr. Returns the configured logger.
    """
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(handler)

    return logger
