"""Base exception classes for PathFinder"""

from typing import Any, Dict, Optional


class PathFinderError(Exception):
    """Base exception for all PathFinder errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidURLError(PathFinderError):
    """Raised when a URL cannot be turned into a file-system path"""

    def __init__(self, url: Any, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(
            f"Invalid file URL {url!r}: {reason}",
            {
                "url": str(url),
                "reason": reason
            }
        )


class IsNotDirectoryError(PathFinderError):
    """Raised when a directory was required"""

    def __init__(self, path: Any):
        self.path = path
        super().__init__(
            f"Following path is not a directory: \"{path}\"",
            {"path": str(path)}
        )


class FileAlreadyExistsError(PathFinderError):
    """Raised when creation demanded a path that does not exist yet"""

    def __init__(self, path: Any):
        self.path = path
        super().__init__(
            f"File already exists at {path}",
            {"path": str(path)}
        )


class AttributeNotFoundError(PathFinderError):
    """Raised when an attribute is absent or of an unexpected type"""

    def __init__(self, key: str, path: Any, expected_type: Optional[type] = None):
        self.key = key
        self.path = path
        self.expected_type = expected_type
        if expected_type is None:
            message = f"Attribute '{key}' not found for {path}"
        else:
            message = f"Attribute '{key}' of type {expected_type.__name__} not found for {path}"
        super().__init__(
            message,
            {
                "key": key,
                "path": str(path),
                "expected_type": expected_type.__name__ if expected_type else None
            }
        )


class SpecialDirectoryNotFoundError(PathFinderError):
    """Raised when the host reports no location for a special directory"""

    def __init__(self, kind: Any, domain: Any):
        self.kind = kind
        self.domain = domain
        super().__init__(
            f"No {kind} directory in domain {domain}",
            {
                "kind": str(kind),
                "domain": str(domain)
            }
        )
