"""
Logging helper. Log records go to stderr so stdout only carries the report.
"""
import logging
import os
import sys

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATEFMT = '%Y-%m-%d %H:%M:%S'
_ROOT = 'daily_activity'
DEFAULT_LEVEL = 'WARNING'


def level_from_env() -> str:
    """Level name from DAILY_ACTIVITY_LOG_LEVEL; unknown names fall back to WARNING."""
    level = os.getenv("DAILY_ACTIVITY_LOG_LEVEL", DEFAULT_LEVEL).strip().upper() or DEFAULT_LEVEL
    if not isinstance(logging.getLevelName(level), int):
        logging.getLogger(_ROOT).warning(f"Unknown DAILY_ACTIVITY_LOG_LEVEL {level!r}, using {DEFAULT_LEVEL}")
        return DEFAULT_LEVEL
    return level


def _root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)
        root.setLevel(level_from_env())
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger, configuring it on first use."""
    _root_logger()
    return logging.getLogger(f"{_ROOT}.{name}")


def set_level(level) -> None:
    _root_logger().setLevel(level)
