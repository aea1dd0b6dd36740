"""
Logger setup for scripts and services that embed the ranking engine.

Package modules only create module-level loggers; attaching handlers is
left to the embedding application, which can call get_logger once at
startup.
"""

import logging
from typing import Optional


def get_logger(name: str = "cfb_analytics", level: int = logging.INFO,
               log_path: Optional[str] = None) -> logging.Logger:
    """
    Configure a logger with a console handler and an optional file handler.

    Handlers are attached only on the first call for a given name, so
    repeated calls do not duplicate output.

    Args:
        name: Logger name; the default covers every package module
        level: Logging level
        log_path: Optional log file, appended to

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        if log_path:
            fh = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger
