"""
Logging utilities for the interview engine.
"""
import os
import logging

FILE_FORMAT = '%(asctime)s %(levelname)s %(name)s - %(message)s'
CONSOLE_FORMAT = '%(levelname)s %(name)s - %(message)s'


def setup_logging(log_file_path: str, level: str = "INFO") -> str:
    """
    Route all engine loggers to a log file, keeping the console quiet.

    The file is appended to, so several interviews can share one log. Only
    errors (an unreadable question bank, a failing event handler) reach the
    console.

    Args:
        log_file_path: Full path to the log file; missing directories are created
        level: Minimum level written to the file (name such as "DEBUG")

    Returns:
        Path to the log file
    """
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_file_path, mode='a', encoding='utf-8')
    file_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    # Replace whatever was configured before
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    return log_file_path
