from pathfinder.core.models.attributes import AttributeKey, FileType
from pathfinder.core.models.directories import DirectoryKind, DomainMask
from pathfinder.core.models.listing import DirectoryListing
from pathfinder.core.models.path import Path

__all__ = [
    "Path",
    "DirectoryListing",
    "AttributeKey",
    "FileType",
    "DirectoryKind",
    "DomainMask",
]
