"""Infrastructure layer exceptions."""
from typing import Any, Optional

from pathfinder.core.errors import PathFinderError


class FilesystemError(PathFinderError):
    """Host file-system operation error."""

    def __init__(
        self,
        operation: str,
        path: Any,
        destination: Optional[Any] = None,
        reason: Optional[str] = None,
        errno: Optional[int] = None
    ):
        self.operation = operation
        self.path = path
        self.destination = destination
        self.reason = reason
        self.errno = errno

        if destination is None:
            message = f"Could not {operation} \"{path}\""
        else:
            message = f"Could not {operation} \"{path}\" to \"{destination}\""
        if reason:
            message = f"{message}: {reason}"

        super().__init__(
            message,
            {
                "operation": operation,
                "path": str(path),
                "destination": str(destination) if destination is not None else None,
                "reason": reason,
                "errno": errno
            }
        )

    @classmethod
    def from_os_error(
        cls,
        operation: str,
        path: Any,
        error: OSError,
        destination: Optional[Any] = None
    ) -> "FilesystemError":
        return cls(
            operation,
            path,
            destination=destination,
            reason=error.strerror or str(error),
            errno=error.errno
        )


class CannotCreateFileError(FilesystemError):
    """File creation refused by the host."""

    def __init__(self, path: Any, reason: Optional[str] = None, errno: Optional[int] = None):
        super().__init__("create file at", path, reason=reason, errno=errno)


class ReadAttributesError(FilesystemError):
    """Attribute bag could not be read."""

    def __init__(self, path: Any, reason: Optional[str] = None, errno: Optional[int] = None):
        super().__init__("read attributes of", path, reason=reason, errno=errno)
