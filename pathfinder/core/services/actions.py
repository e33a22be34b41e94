from typing import Optional, Union

from pathfinder.core.errors import FileAlreadyExistsError
from pathfinder.core.models import Path
from pathfinder.core.types import HostFileSystem
from pathfinder.infrastructure.exceptions import CannotCreateFileError, FilesystemError
from pathfinder.infrastructure.filesystem import LocalFileSystem
from pathfinder.infrastructure.logging import get_logger

logger = get_logger(__name__)


def _target(path: Path, sub_path: Optional[Union[str, Path]]) -> Path:
    return path if sub_path is None else path / sub_path


class PathActions:
    """Structural mutations delegated to the host, one host call each"""

    def __init__(self, host: Optional[HostFileSystem] = None):
        self.host = host or LocalFileSystem()

    def create_directory(
        self,
        path: Path,
        sub_path: Optional[Union[str, Path]] = None,
        intermediate_directories: bool = True,
        permissions: Optional[int] = None,
    ) -> Path:
        """
        Create a directory at ``path`` (or ``path / sub_path``)

        With ``intermediate_directories`` missing parents are created too and
        an existing directory is accepted.
        """
        target = _target(path, sub_path)

        try:
            if intermediate_directories:
                self.host.makedirs(str(target), permissions)
            else:
                self.host.mkdir(str(target), permissions)
        except OSError as e:
            logger.error("directory_creation_failed", path=str(target), error=str(e))
            raise FilesystemError.from_os_error("create directory at", target, e) from e

        logger.info("directory_created", path=str(target))
        return target

    def create_file(
        self,
        path: Path,
        sub_path: Optional[Union[str, Path]] = None,
        contents: Optional[Union[bytes, str]] = None,
        permissions: Optional[int] = None,
    ) -> Path:
        """
        Create a new file; an existing file is never overwritten

        Raises:
            FileAlreadyExistsError: Something already exists at the target
            CannotCreateFileError: The host refused to create the file
        """
        target = _target(path, sub_path)

        if self.host.exists(str(target)):
            raise FileAlreadyExistsError(target)

        data = contents.encode("utf-8") if isinstance(contents, str) else contents

        try:
            self.host.create_file(str(target), data, permissions)
        except FileExistsError as e:
            # Lost a race with another creator
            raise FileAlreadyExistsError(target) from e
        except OSError as e:
            logger.error("file_creation_failed", path=str(target), error=str(e))
            raise CannotCreateFileError(
                target, reason=e.strerror or str(e), errno=e.errno
            ) from e

        logger.info("file_created", path=str(target), size=len(data or b""))
        return target

    def rename(self, path: Path, new_name: str) -> Path:
        """Rename within the same parent directory"""
        return self._relocate("rename", "item_rename_failed", path, path.parent / new_name)

    def move(self, source: Path, destination: Path) -> Path:
        return self._relocate("move", "item_move_failed", source, destination)

    def copy(self, source: Path, destination: Path) -> Path:
        """Copy an item; directories are copied with their whole subtree"""
        try:
            self.host.copy(str(source), str(destination))
        except OSError as e:
            logger.error(
                "item_copy_failed",
                path=str(source),
                destination=str(destination),
                error=str(e),
            )
            raise FilesystemError.from_os_error("copy", source, e, destination) from e

        logger.info("item_copied", path=str(source), destination=str(destination))
        return destination

    def remove(self, path: Path) -> None:
        """Delete an item; directories are removed recursively"""
        try:
            self.host.remove(str(path))
        except OSError as e:
            logger.error("item_removal_failed", path=str(path), error=str(e))
            raise FilesystemError.from_os_error("remove", path, e) from e

        logger.info("item_removed", path=str(path))

    def trash(self, path: Path) -> Path:
        """Move an item to the trash and return where it ended up"""
        try:
            trashed = self.host.trash(str(path))
        except OSError as e:
            logger.error("item_trash_failed", path=str(path), error=str(e))
            raise FilesystemError.from_os_error("move to trash", path, e) from e

        logger.info("item_trashed", path=str(path), trashed_path=trashed)
        return Path(trashed)

    def read_bytes(self, path: Path) -> bytes:
        try:
            return self.host.read_bytes(str(path))
        except OSError as e:
            logger.error("file_read_failed", path=str(path), error=str(e))
            raise FilesystemError.from_os_error("read", path, e) from e

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        return self.read_bytes(path).decode(encoding)

    def _relocate(self, operation: str, event: str, source: Path, destination: Path) -> Path:
        try:
            self.host.move(str(source), str(destination))
        except OSError as e:
            logger.error(event, path=str(source), destination=str(destination), error=str(e))
            raise FilesystemError.from_os_error(operation, source, e, destination) from e

        logger.info("item_moved", path=str(source), destination=str(destination))
        return destination
