from datetime import datetime
from typing import Any, Mapping, Optional, Type, TypeVar

from pathfinder.core.errors import AttributeNotFoundError
from pathfinder.core.models import AttributeKey, FileType, Path
from pathfinder.core.models.attributes import SETTABLE_TYPES
from pathfinder.core.types import AttributeBag, HostFileSystem
from pathfinder.infrastructure.exceptions import FilesystemError, ReadAttributesError
from pathfinder.infrastructure.filesystem import LocalFileSystem
from pathfinder.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class AttributeReader:
    """Typed accessors over the host attribute bag.

    Every accessor fetches the whole bag again; nothing is cached. Hosts do
    not populate every key, so each accessor may raise
    ``AttributeNotFoundError``.
    """

    def __init__(self, host: Optional[HostFileSystem] = None):
        self.host = host or LocalFileSystem()

    def attributes(self, path: Path) -> AttributeBag:
        try:
            return dict(self.host.attributes(str(path)))
        except OSError as e:
            logger.error("attributes_read_failed", path=str(path), error=str(e))
            raise ReadAttributesError(path, reason=e.strerror or str(e), errno=e.errno) from e

    def attribute(
        self,
        path: Path,
        key: str,
        expected_type: Optional[Type[T]] = None,
    ) -> T:
        key = key.value if isinstance(key, AttributeKey) else key
        bag = self.attributes(path)

        if key not in bag:
            raise AttributeNotFoundError(key, path, expected_type)
        value = bag[key]
        if expected_type is not None and not isinstance(value, expected_type):
            raise AttributeNotFoundError(key, path, expected_type)
        return value

    def set_attributes(self, path: Path, attributes: Mapping[str, Any]) -> None:
        updates = {
            (key.value if isinstance(key, AttributeKey) else key): value
            for key, value in attributes.items()
        }
        for key, value in updates.items():
            if key not in SETTABLE_TYPES:
                raise AttributeNotFoundError(key, path)
            expected_type = SETTABLE_TYPES[key]
            # bool is an int subclass but never a mode or an id
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise AttributeNotFoundError(key, path, expected_type)

        try:
            self.host.set_attributes(str(path), updates)
        except OSError as e:
            logger.error("attributes_update_failed", path=str(path), error=str(e))
            raise FilesystemError.from_os_error("set attributes of", path, e) from e

        logger.debug("attributes_updated", path=str(path), keys=sorted(updates))

    def _flag(self, path: Path, key: AttributeKey) -> bool:
        value = self.attribute(path, key.value)
        if not isinstance(value, (bool, int)):
            raise AttributeNotFoundError(key.value, path, bool)
        return bool(value)

    def _number(self, path: Path, key: AttributeKey) -> int:
        value = self.attribute(path, key.value, int)
        # bool is an int subclass but never a count
        if isinstance(value, bool):
            raise AttributeNotFoundError(key.value, path, int)
        return value

    def _date(self, path: Path, key: AttributeKey) -> datetime:
        return self.attribute(path, key.value, datetime)

    def _text(self, path: Path, key: AttributeKey) -> str:
        return self.attribute(path, key.value, str)

    # Typed accessors

    def file_type(self, path: Path) -> FileType:
        value = self.attribute(path, AttributeKey.TYPE.value, str)
        try:
            return FileType(value)
        except ValueError as e:
            raise AttributeNotFoundError(AttributeKey.TYPE.value, path, FileType) from e

    def size(self, path: Path) -> int:
        return self._number(path, AttributeKey.SIZE)

    def modification_date(self, path: Path) -> datetime:
        return self._date(path, AttributeKey.MODIFICATION_DATE)

    def creation_date(self, path: Path) -> datetime:
        return self._date(path, AttributeKey.CREATION_DATE)

    def access_date(self, path: Path) -> datetime:
        return self._date(path, AttributeKey.ACCESS_DATE)

    def reference_count(self, path: Path) -> int:
        return self._number(path, AttributeKey.REFERENCE_COUNT)

    def device_identifier(self, path: Path) -> int:
        return self._number(path, AttributeKey.DEVICE_IDENTIFIER)

    def system_file_number(self, path: Path) -> int:
        return self._number(path, AttributeKey.SYSTEM_FILE_NUMBER)

    def posix_permissions(self, path: Path) -> int:
        return self._number(path, AttributeKey.POSIX_PERMISSIONS)

    def owner_account_id(self, path: Path) -> int:
        return self._number(path, AttributeKey.OWNER_ACCOUNT_ID)

    def owner_account_name(self, path: Path) -> str:
        return self._text(path, AttributeKey.OWNER_ACCOUNT_NAME)

    def group_owner_account_id(self, path: Path) -> int:
        return self._number(path, AttributeKey.GROUP_OWNER_ACCOUNT_ID)

    def group_owner_account_name(self, path: Path) -> str:
        return self._text(path, AttributeKey.GROUP_OWNER_ACCOUNT_NAME)

    def immutable(self, path: Path) -> bool:
        return self._flag(path, AttributeKey.IMMUTABLE)

    def append_only(self, path: Path) -> bool:
        return self._flag(path, AttributeKey.APPEND_ONLY)

    def busy(self, path: Path) -> bool:
        return self._flag(path, AttributeKey.BUSY)

    def extension_hidden(self, path: Path) -> bool:
        return self._flag(path, AttributeKey.EXTENSION_HIDDEN)

    def system_number(self, path: Path) -> int:
        return self._number(path, AttributeKey.SYSTEM_NUMBER)

    def system_size(self, path: Path) -> int:
        return self._number(path, AttributeKey.SYSTEM_SIZE)

    def system_free_size(self, path: Path) -> int:
        return self._number(path, AttributeKey.SYSTEM_FREE_SIZE)

    def system_nodes(self, path: Path) -> int:
        return self._number(path, AttributeKey.SYSTEM_NODES)

    def system_free_nodes(self, path: Path) -> int:
        return self._number(path, AttributeKey.SYSTEM_FREE_NODES)
