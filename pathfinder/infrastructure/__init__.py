"""Infrastructure layer for PathFinder."""
from .exceptions import (
    CannotCreateFileError,
    FilesystemError,
    ReadAttributesError
)

__all__ = [
    'FilesystemError',
    'CannotCreateFileError',
    'ReadAttributesError'
]
