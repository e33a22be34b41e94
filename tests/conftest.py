"""Pytest configuration and fixtures"""

import logging
import os
import shutil
import tempfile
from typing import Generator

import pytest
import structlog

from pathfinder import Path
from pathfinder.core import config
from pathfinder.infrastructure.filesystem import LocalFileSystem, TrashCan


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch) -> Generator[None, None, None]:
    """Drop the cached settings so every test sees its own environment"""
    for name in list(os.environ):
        if name.startswith("PATHFINDER_"):
            monkeypatch.delenv(name)
    config._settings = None
    yield
    config._settings = None


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """Undo setup_logging() after a test"""
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger("pathfinder")
    package_logger.handlers.clear()
    package_logger.addHandler(logging.NullHandler())
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create an empty temporary directory"""
    temp = tempfile.mkdtemp(prefix="pathfinder_test_")
    yield Path(temp)
    shutil.rmtree(temp, ignore_errors=True)


def write_file(path: Path, contents: str = "") -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(contents)


@pytest.fixture
def tree(temp_dir: Path) -> Path:
    """
    Build a small directory tree::

        dirA/
            inner/
                deep.txt
            a.txt
        dirB/
        file1.txt
        file2.txt
    """
    os.makedirs(temp_dir / "dirA" / "inner")
    os.makedirs(temp_dir / "dirB")
    write_file(temp_dir / "dirA" / "inner" / "deep.txt", "deep")
    write_file(temp_dir / "dirA" / "a.txt", "a")
    write_file(temp_dir / "file2.txt", "two")
    write_file(temp_dir / "file1.txt", "one")
    return temp_dir


@pytest.fixture
def trash_can(temp_dir: Path) -> TrashCan:
    """Trash can rooted inside the temporary directory"""
    return TrashCan(str(temp_dir / "Trash"))


@pytest.fixture
def host(trash_can: TrashCan) -> LocalFileSystem:
    """Local host whose trash stays inside the temporary directory"""
    return LocalFileSystem(trash_can=trash_can)
