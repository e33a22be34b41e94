from datetime import datetime
from enum import Enum


class AttributeKey(str, Enum):
    """Keys of the attribute bag reported by the host"""
    TYPE = "type"
    SIZE = "size"
    MODIFICATION_DATE = "modification_date"
    CREATION_DATE = "creation_date"
    ACCESS_DATE = "access_date"
    REFERENCE_COUNT = "reference_count"
    DEVICE_IDENTIFIER = "device_identifier"
    SYSTEM_FILE_NUMBER = "system_file_number"
    POSIX_PERMISSIONS = "posix_permissions"
    OWNER_ACCOUNT_ID = "owner_account_id"
    OWNER_ACCOUNT_NAME = "owner_account_name"
    GROUP_OWNER_ACCOUNT_ID = "group_owner_account_id"
    GROUP_OWNER_ACCOUNT_NAME = "group_owner_account_name"
    IMMUTABLE = "immutable"
    APPEND_ONLY = "append_only"
    BUSY = "busy"
    EXTENSION_HIDDEN = "extension_hidden"
    SYSTEM_NUMBER = "system_number"
    SYSTEM_SIZE = "system_size"
    SYSTEM_FREE_SIZE = "system_free_size"
    SYSTEM_NODES = "system_nodes"
    SYSTEM_FREE_NODES = "system_free_nodes"


class FileType(str, Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMBOLIC_LINK = "symbolic_link"
    SOCKET = "socket"
    CHARACTER_SPECIAL = "character_special"
    BLOCK_SPECIAL = "block_special"
    FIFO = "fifo"
    UNKNOWN = "unknown"


# Keys the host can write back through set_attributes, with their value types
SETTABLE_TYPES = {
    AttributeKey.POSIX_PERMISSIONS.value: int,
    AttributeKey.MODIFICATION_DATE.value: datetime,
    AttributeKey.ACCESS_DATE.value: datetime,
    AttributeKey.OWNER_ACCOUNT_ID.value: int,
    AttributeKey.GROUP_OWNER_ACCOUNT_ID.value: int,
}
