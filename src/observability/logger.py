"""Project logger"""

import logging
import os

import litellm


def _normalize_level(raw: str) -> int:
    candidate = str(raw or "INFO").strip().upper()
    return {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }.get(candidate, logging.INFO)


def _build_logger() -> logging.Logger:
    configured_logger = logging.getLogger("promptport")
    if configured_logger.handlers:
        return configured_logger

    level = _normalize_level(os.getenv("LOG_LEVEL", "INFO"))
    configured_logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    configured_logger.addHandler(handler)

    # LiteLLM has its own verbose switch
    litellm.set_verbose = level == logging.DEBUG
    return configured_logger


logger = _build_logger()


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the project namespace"""
    return logger.getChild(name)
