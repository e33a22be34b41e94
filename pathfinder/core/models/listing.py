from dataclasses import dataclass, field
from typing import Iterator, Tuple

from pathfinder.core.models.path import Path


@dataclass(frozen=True)
class DirectoryListing:
    """Immediate children of a directory, split into directories and files.

    Each part is sorted by name. Unpacks like ``(directories, files)``.
    """
    directories: Tuple[Path, ...] = field(default_factory=tuple)
    files: Tuple[Path, ...] = field(default_factory=tuple)

    @property
    def all(self) -> Tuple[Path, ...]:
        """Directories first, then files"""
        return self.directories + self.files

    def __iter__(self) -> Iterator[Tuple[Path, ...]]:
        yield self.directories
        yield self.files

    def __len__(self) -> int:
        return len(self.directories) + len(self.files)

    def __bool__(self) -> bool:
        return len(self) > 0
