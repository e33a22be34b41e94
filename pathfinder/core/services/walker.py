from typing import Iterable, Iterator, List, Optional, Tuple

from pathfinder.core.config import get_settings
from pathfinder.core.errors import IsNotDirectoryError
from pathfinder.core.models import DirectoryListing, Path
from pathfinder.core.types import ContentVisitor, HostFileSystem
from pathfinder.infrastructure.exceptions import FilesystemError
from pathfinder.infrastructure.filesystem import LocalFileSystem
from pathfinder.infrastructure.logging import get_logger

logger = get_logger(__name__)


class DirectoryWalker:
    """Deterministic directory listing, enumeration and name checks"""

    def __init__(self, host: Optional[HostFileSystem] = None):
        self.host = host or LocalFileSystem()

    def exists(self, path: Path) -> bool:
        return self.host.exists(str(path))

    def is_directory(self, path: Path) -> bool:
        """False for a path that does not exist"""
        return self.host.is_dir(str(path))

    def list_contents(
        self, path: Path, ignores: Optional[Iterable[str]] = None
    ) -> DirectoryListing:
        """
        List the immediate children of a directory

        Args:
            path: Directory to list
            ignores: Bare entry names to skip (exact, case-sensitive match).
                Defaults to ``Settings.default_ignores``.

        Returns:
            Directories and files, each sorted by name. Empty when ``path``
            does not exist.

        Raises:
            FilesystemError: The host could not list ``path``
        """
        if not self.exists(path):
            return DirectoryListing()

        ignored = frozenset(get_settings().default_ignores if ignores is None else ignores)

        try:
            names = self.host.listdir(str(path))
        except OSError as e:
            logger.error("directory_listing_failed", path=str(path), error=str(e))
            raise FilesystemError.from_os_error("list contents of", path, e) from e

        directories: List[Path] = []
        files: List[Path] = []
        for name in names:
            if name in ignored:
                continue
            child = path / name
            if self.is_directory(child):
                directories.append(child)
            else:
                files.append(child)

        directories.sort(key=lambda entry: entry.name)
        files.sort(key=lambda entry: entry.name)

        logger.debug(
            "directory_listed",
            path=str(path),
            directories=len(directories),
            files=len(files),
        )
        return DirectoryListing(tuple(directories), tuple(files))

    def iter_contents(
        self,
        path: Path,
        include_subdirectories: bool = True,
        ignores: Optional[Iterable[str]] = None,
    ) -> Iterator[Path]:
        """
        Yield the contents of ``path`` depth first

        Every directory is followed by its whole subtree before the next
        sibling directory; the files of a directory come after all of its
        subdirectories. A directory is listed only once the walk reaches it.

        Raises:
            FilesystemError: Listing any directory on the way failed
        """
        if ignores is not None:
            ignores = frozenset(ignores)

        # Each frame holds the entries of one listing still to be visited
        stack: List[Tuple[Iterator[Path], int]] = []
        listing = self.list_contents(path, ignores)
        stack.append((iter(listing.all), len(listing.directories)))

        while stack:
            entries, directories_left = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            yield entry

            if directories_left > 0:
                stack[-1] = (entries, directories_left - 1)
                if include_subdirectories:
                    sublisting = self.list_contents(entry, ignores)
                    stack.append((iter(sublisting.all), len(sublisting.directories)))

    def enumerate(
        self,
        path: Path,
        visit: ContentVisitor,
        include_subdirectories: bool = True,
        ignores: Optional[Iterable[str]] = None,
    ) -> None:
        """Call ``visit`` for every entry in ``iter_contents`` order"""
        for entry in self.iter_contents(path, include_subdirectories, ignores):
            visit(entry)

    def check_name_unique(
        self, directory: Path, candidate_name: str, case_sensitive: bool = True
    ) -> bool:
        """
        Check that no immediate child of ``directory`` is named ``candidate_name``

        Returns False when the directory cannot be enumerated.

        Raises:
            IsNotDirectoryError: ``directory`` is not a directory
        """
        if not self.is_directory(directory):
            raise IsNotDirectoryError(directory)

        def normalize(name: str) -> str:
            return name if case_sensitive else name.lower()

        candidate = normalize(candidate_name)
        unique = True

        def visit(entry: Path) -> None:
            nonlocal unique
            if normalize(entry.name) == candidate:
                unique = False

        try:
            self.enumerate(directory, visit, include_subdirectories=False, ignores=())
        except Exception as e:
            logger.warning(
                "name_uniqueness_check_failed",
                path=str(directory),
                name=candidate_name,
                error=str(e),
            )
            return False

        return unique
