"""Common type definitions for PathFinder"""

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from pathfinder.core.models.path import Path

# Type aliases
AttributeBag = Dict[str, Any]
ContentVisitor = Callable[["Path"], None]


# Protocols
class HostFileSystem(Protocol):
    """Host file-system primitives; every location is a plain string.

    Failures are reported as ``OSError``.
    """

    def exists(self, path: str) -> bool:
        ...

    def is_dir(self, path: str) -> bool:
        ...

    def listdir(self, path: str) -> List[str]:
        """Bare names of the immediate children, in host order"""
        ...

    def attributes(self, path: str) -> AttributeBag:
        ...

    def set_attributes(self, path: str, attributes: Mapping[str, Any]) -> None:
        ...

    def makedirs(self, path: str, mode: Optional[int] = None) -> None:
        ...

    def mkdir(self, path: str, mode: Optional[int] = None) -> None:
        ...

    def create_file(
        self, path: str, contents: Optional[bytes] = None, mode: Optional[int] = None
    ) -> None:
        """Exclusive create; FileExistsError when the path is taken"""
        ...

    def move(self, src: str, dst: str) -> None:
        ...

    def copy(self, src: str, dst: str) -> None:
        ...

    def remove(self, path: str) -> None:
        ...

    def trash(self, path: str) -> str:
        """Move into the trash can and return the new location"""
        ...

    def read_bytes(self, path: str) -> bytes:
        ...
