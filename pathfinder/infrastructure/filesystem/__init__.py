"""Filesystem infrastructure module."""
from .local import LocalFileSystem
from .special_directories import read_user_dirs, search_path_for_directories
from .trash import TrashCan

__all__ = [
    'LocalFileSystem',
    'TrashCan',
    'search_path_for_directories',
    'read_user_dirs'
]
