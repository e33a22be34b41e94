"""PathFinder: path values, directory walking and file-system conveniences."""
from pathfinder.core.config import Settings, get_settings
from pathfinder.core.errors import (
    AttributeNotFoundError,
    FileAlreadyExistsError,
    InvalidURLError,
    IsNotDirectoryError,
    PathFinderError,
    SpecialDirectoryNotFoundError,
)
from pathfinder.core.models import (
    AttributeKey,
    DirectoryKind,
    DirectoryListing,
    DomainMask,
    FileType,
    Path,
)
from pathfinder.core.services import AttributeReader, DirectoryWalker, PathActions
from pathfinder.core.services.locations import (
    full_user_name,
    home_directory,
    home_directory_for_user,
    process_temporary_directory,
    root_directory,
    special_directories,
    special_directory,
    temporary_directory,
    unique_temporary_path,
    user_name,
)
from pathfinder.infrastructure.exceptions import (
    CannotCreateFileError,
    FilesystemError,
    ReadAttributesError,
)
from pathfinder.infrastructure.logging import setup_logging

__version__ = "0.1.0"

__all__ = [
    # Values
    "Path",
    "DirectoryListing",
    "AttributeKey",
    "FileType",
    "DirectoryKind",
    "DomainMask",
    # Services
    "DirectoryWalker",
    "AttributeReader",
    "PathActions",
    # Locations
    "special_directories",
    "special_directory",
    "home_directory",
    "home_directory_for_user",
    "root_directory",
    "temporary_directory",
    "process_temporary_directory",
    "unique_temporary_path",
    "user_name",
    "full_user_name",
    # Errors
    "PathFinderError",
    "InvalidURLError",
    "IsNotDirectoryError",
    "FileAlreadyExistsError",
    "AttributeNotFoundError",
    "SpecialDirectoryNotFoundError",
    "FilesystemError",
    "CannotCreateFileError",
    "ReadAttributesError",
    # Ambient
    "Settings",
    "get_settings",
    "setup_logging",
]
