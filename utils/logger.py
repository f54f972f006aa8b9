import logging
import os
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"


def get_logger(name: str = "graphsage", log_file: Optional[str] = None,
               level: Union[int, str] = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # already configured, only attach a new log file
    if logger.handlers:
        if log_file and not any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
            for h in logger.handlers
        ):
            _add_file_handler(logger, log_file)
        return logger

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(sh)

    if log_file:
        _add_file_handler(logger, log_file)

    return logger


def _add_file_handler(logger: logging.Logger, log_file: str) -> None:
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh)
