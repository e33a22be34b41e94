from pathfinder.core.services.actions import PathActions
from pathfinder.core.services.attributes import AttributeReader
from pathfinder.core.services.walker import DirectoryWalker

__all__ = ["DirectoryWalker", "AttributeReader", "PathActions"]
