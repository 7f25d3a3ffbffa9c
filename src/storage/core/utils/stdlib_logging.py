from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "storage"

_CONFIGURED_KEY: Optional[str] = None
_STORAGE_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    try:
        return int(getattr(logging, name.upper()))
    except (AttributeError, TypeError, ValueError):
        return logging.WARNING


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> logging.Logger:
    """Install a single handler on the ``storage`` logger.

    Logs go to ``log_path`` when given, otherwise to stderr. Idempotent
    per process: calling again with the same destination only updates the
    level.
    """
    global _CONFIGURED_KEY, _STORAGE_HANDLER

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_from_name(level))

    key = str(Path(log_path).resolve()) if log_path else "<stderr>"
    if _CONFIGURED_KEY == key and _STORAGE_HANDLER is not None:
        _STORAGE_HANDLER.setLevel(_level_from_name(level))
        return logger

    if _STORAGE_HANDLER is not None:
        logger.removeHandler(_STORAGE_HANDLER)
        _STORAGE_HANDLER.close()
        _STORAGE_HANDLER = None

    if log_path:
        Path(key).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(key, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)

    _STORAGE_HANDLER = handler
    _CONFIGURED_KEY = key
    return logger


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_logging``."""
    global _CONFIGURED_KEY, _STORAGE_HANDLER
    if _STORAGE_HANDLER is not None:
        logging.getLogger(PACKAGE_LOGGER).removeHandler(_STORAGE_HANDLER)
        _STORAGE_HANDLER.close()
    _CONFIGURED_KEY = None
    _STORAGE_HANDLER = None


__all__ = ["PACKAGE_LOGGER", "configure_logging", "reset_logging_for_tests"]
