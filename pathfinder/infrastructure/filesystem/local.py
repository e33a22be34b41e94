"""Local host file-system adapter."""
import errno
import os
import shutil
import stat
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

try:
    import grp
    import pwd
except ImportError:  # Windows has no account database modules
    grp = None
    pwd = None

from pathfinder.core.config import get_settings
from pathfinder.core.models.attributes import AttributeKey, FileType
from pathfinder.core.types import AttributeBag
from pathfinder.infrastructure.filesystem.trash import TrashCan

_FILE_TYPES = {
    stat.S_IFREG: FileType.REGULAR,
    stat.S_IFDIR: FileType.DIRECTORY,
    stat.S_IFLNK: FileType.SYMBOLIC_LINK,
    stat.S_IFSOCK: FileType.SOCKET,
    stat.S_IFCHR: FileType.CHARACTER_SPECIAL,
    stat.S_IFBLK: FileType.BLOCK_SPECIAL,
    stat.S_IFIFO: FileType.FIFO,
}

_IMMUTABLE_FLAGS = getattr(stat, "UF_IMMUTABLE", 0) | getattr(stat, "SF_IMMUTABLE", 0)
_APPEND_FLAGS = getattr(stat, "UF_APPEND", 0) | getattr(stat, "SF_APPEND", 0)


def _timestamp(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def _exists_error(path: str) -> FileExistsError:
    return FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), path)


class LocalFileSystem:
    """Implements ``HostFileSystem`` with os, shutil and stat."""

    def __init__(self, trash_can: Optional[TrashCan] = None):
        self._trash_can = trash_can

    # --- Queries ---

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def listdir(self, path: str) -> List[str]:
        return os.listdir(path)

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def attributes(self, path: str) -> AttributeBag:
        """Attribute bag of the item itself; a final symlink is not followed."""
        st = os.lstat(path)

        bag: Dict[str, Any] = {
            AttributeKey.TYPE.value: _FILE_TYPES.get(stat.S_IFMT(st.st_mode), FileType.UNKNOWN),
            AttributeKey.SIZE.value: st.st_size,
            AttributeKey.MODIFICATION_DATE.value: _timestamp(st.st_mtime),
            AttributeKey.ACCESS_DATE.value: _timestamp(st.st_atime),
            AttributeKey.REFERENCE_COUNT.value: st.st_nlink,
            AttributeKey.DEVICE_IDENTIFIER.value: st.st_dev,
            AttributeKey.SYSTEM_NUMBER.value: st.st_dev,
            AttributeKey.SYSTEM_FILE_NUMBER.value: st.st_ino,
            AttributeKey.POSIX_PERMISSIONS.value: stat.S_IMODE(st.st_mode),
            AttributeKey.OWNER_ACCOUNT_ID.value: st.st_uid,
            AttributeKey.GROUP_OWNER_ACCOUNT_ID.value: st.st_gid,
        }

        birthtime = getattr(st, "st_birthtime", None)
        if birthtime is not None:
            bag[AttributeKey.CREATION_DATE.value] = _timestamp(birthtime)

        flags = getattr(st, "st_flags", None)
        if flags is not None:
            bag[AttributeKey.IMMUTABLE.value] = bool(flags & _IMMUTABLE_FLAGS)
            bag[AttributeKey.APPEND_ONLY.value] = bool(flags & _APPEND_FLAGS)

        if pwd is not None:
            try:
                bag[AttributeKey.OWNER_ACCOUNT_NAME.value] = pwd.getpwuid(st.st_uid).pw_name
            except KeyError:
                pass
        if grp is not None:
            try:
                bag[AttributeKey.GROUP_OWNER_ACCOUNT_NAME.value] = grp.getgrgid(st.st_gid).gr_name
            except KeyError:
                pass

        if hasattr(os, "statvfs") and not stat.S_ISLNK(st.st_mode):
            try:
                fs = os.statvfs(path)
            except OSError:
                fs = None
            if fs is not None:
                bag[AttributeKey.SYSTEM_SIZE.value] = fs.f_blocks * fs.f_frsize
                bag[AttributeKey.SYSTEM_FREE_SIZE.value] = fs.f_bavail * fs.f_frsize
                bag[AttributeKey.SYSTEM_NODES.value] = fs.f_files
                bag[AttributeKey.SYSTEM_FREE_NODES.value] = fs.f_ffree

        return bag

    # --- Mutations ---

    def set_attributes(self, path: str, attributes: Mapping[str, Any]) -> None:
        permissions = attributes.get(AttributeKey.POSIX_PERMISSIONS.value)
        if permissions is not None:
            os.chmod(path, permissions)

        modified = attributes.get(AttributeKey.MODIFICATION_DATE.value)
        accessed = attributes.get(AttributeKey.ACCESS_DATE.value)
        if modified is not None or accessed is not None:
            st = os.stat(path)
            os.utime(path, (
                accessed.timestamp() if accessed is not None else st.st_atime,
                modified.timestamp() if modified is not None else st.st_mtime,
            ))

        uid = attributes.get(AttributeKey.OWNER_ACCOUNT_ID.value)
        gid = attributes.get(AttributeKey.GROUP_OWNER_ACCOUNT_ID.value)
        if uid is not None or gid is not None:
            os.chown(path, -1 if uid is None else uid, -1 if gid is None else gid)

    def makedirs(self, path: str, mode: Optional[int] = None) -> None:
        os.makedirs(path, mode=0o777 if mode is None else mode, exist_ok=True)

    def mkdir(self, path: str, mode: Optional[int] = None) -> None:
        os.mkdir(path, 0o777 if mode is None else mode)

    def create_file(
        self, path: str, contents: Optional[bytes] = None, mode: Optional[int] = None
    ) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666 if mode is None else mode)
        with os.fdopen(fd, "wb") as f:
            if contents:
                f.write(contents)

    def move(self, src: str, dst: str) -> None:
        if os.path.lexists(dst):
            raise _exists_error(dst)
        shutil.move(src, dst)

    def copy(self, src: str, dst: str) -> None:
        if os.path.lexists(dst):
            raise _exists_error(dst)
        if os.path.isdir(src) and not os.path.islink(src):
            shutil.copytree(src, dst, symlinks=True)
        else:
            shutil.copy2(src, dst, follow_symlinks=False)

    def remove(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)

    def trash(self, path: str) -> str:
        if self._trash_can is None:
            self._trash_can = TrashCan(get_settings().trash_directory)
        return self._trash_can.put(path)
