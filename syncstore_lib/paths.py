"""Application data path resolution.

Stores are bound to a file path supplied by the application; these helpers
yield a stable, per-user writable location for such files. Portable mode
keeps everything under the current working directory instead.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path

from platformdirs import user_data_dir

logger = logging.getLogger(__name__)


def get_app_data_folder(app_name: str, portable: bool = False) -> Path:
    """Return the per-user data folder for `app_name`.

    The folder is not created here; stores create it on first access.
    """
    if not app_name or os.sep in app_name or (os.altsep and os.altsep in app_name):
        raise ValueError(f"invalid application name: {app_name!r}")
    if portable:
        logger.debug("Portable mode: using %s as data folder for %s", Path.cwd(), app_name)
        return Path.cwd()
    return Path(user_data_dir(app_name, appauthor=False, roaming=True))


def get_resource_file_path(app_name: str, relative: str | os.PathLike[str], portable: bool = False) -> Path:
    rel = Path(relative)
    if rel.is_absolute():
        raise ValueError(f"resource path must be relative: {rel}")
    return get_app_data_folder(app_name, portable) / rel
