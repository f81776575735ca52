from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from syncstore_lib.config import read_config_file


def configure_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for the application.

    Establishes an early NOTSET basic config so the settings file can be
    read, then reconfigures the root logger to the level named by the
    `log_level` key (or the explicit `level` argument). Returns a module
    logger for the caller.
    """
    # Minimal early config so other imports can emit without error
    logging.basicConfig(level=logging.NOTSET, format='%(asctime)s INFO %(message)s')
    DEFAULT_LOG_LEVEL = logging.WARNING

    _lvl = level
    if _lvl is None:
        try:
            _lvl = read_config_file(config_path).get('log_level')
        except (OSError, ValueError):
            # If config parse fails, fall back to default level
            logging.getLogger(__name__).warning('Could not read log level from config, using WARNING')
            _lvl = None
    if isinstance(_lvl, str):
        _numeric = getattr(logging, _lvl.upper(), None)
        if isinstance(_numeric, int):
            DEFAULT_LOG_LEVEL = _numeric

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=DEFAULT_LOG_LEVEL, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)
    logger.debug("Log level set to: %s", logging.getLevelName(DEFAULT_LOG_LEVEL))

    return logger
