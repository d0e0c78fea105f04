"""Logging helpers shared by the indexer components."""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LEVEL_ENV = "REACTOME_INDEXER_LOG_LEVEL"
# Driver and HTTP loggers emit one line per query or request during a run.
NOISY_LOGGERS = ("neo4j", "urllib3")

_LOGGER_CACHE: dict[str, logging.Logger] = {}


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name or number into a logging level, defaulting to INFO."""
    if level is None:
        level = os.getenv(LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_root_logger(level: Union[int, str, None] = None) -> None:
    """Configure the root logger once and quieten the driver loggers."""
    if logging.getLogger().handlers:
        return
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logging.basicConfig(level=resolve_level(level), handlers=[handler])
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_level(level: Union[int, str, None]) -> int:
    """Apply ``level`` to the root logger and every logger handed out so far."""
    resolved = resolve_level(level)
    logging.getLogger().setLevel(resolved)
    for logger in _LOGGER_CACHE.values():
        logger.setLevel(resolved)
    return resolved


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Retrieve a configured logger, caching it for reuse."""
    if name is None:
        name = os.getenv("APP_LOGGER_NAME", "reactome_indexer")
    if name not in _LOGGER_CACHE:
        configure_root_logger()
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]
