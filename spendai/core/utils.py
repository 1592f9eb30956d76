"""Logging and small helpers shared across the SpendAI backend."""

import logging
from datetime import UTC, datetime
from pathlib import Path

import colorlog

ROOT_LOGGER_NAME = "spendai"
LOG_FORMAT = "%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", log_colors=LOG_COLORS))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``spendai`` hierarchy.

    Only the ``spendai`` logger owns a handler (colorized console); component
    loggers such as ``spendai.worker`` propagate to it.
    """
    root = _configure_root()
    return root if name == ROOT_LOGGER_NAME else logging.getLogger(name)


def ensure_dir(path: str | Path) -> Path:
    """Create a directory and its parents if missing."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def to_float(value: object) -> float | None:
    """Parse a float, returning None when the value is not numeric."""
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def utcnow_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(UTC).isoformat()
