"""Pytest configuration shared by the unit and backend tests.

The repository root is put on sys.path so `syncstore_lib` and
`tests.helpers` import without installing the package.
"""
import logging
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # configure_logging replaces root handlers; keep tests isolated from that
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def store_file(tmp_path):
    # parent directory deliberately missing: stores must create it
    return tmp_path / "data" / "store.json"
