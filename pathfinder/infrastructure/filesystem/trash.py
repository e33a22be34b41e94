"""freedesktop.org trash can."""
import errno
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

from pathfinder.core.models.directories import DirectoryKind, DomainMask
from pathfinder.infrastructure.filesystem.special_directories import (
    search_path_for_directories,
)
from pathfinder.infrastructure.logging import get_logger

logger = get_logger(__name__)


class TrashCan:
    """Moves items into ``<root>/files`` and records them in ``<root>/info``."""

    def __init__(self, root: Optional[Union[str, Path]] = None):
        if root is None:
            root = search_path_for_directories(DirectoryKind.TRASH, DomainMask.USER)[0]
        self.root = Path(root).expanduser()
        self.files_dir = self.root / "files"
        self.info_dir = self.root / "info"

    def put(self, path: str) -> str:
        """Trash ``path`` and return its location inside the trash can."""
        source = Path(os.path.abspath(path))
        if not os.path.lexists(source):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))

        self.files_dir.mkdir(parents=True, exist_ok=True, mode=0o700)
        self.info_dir.mkdir(parents=True, exist_ok=True, mode=0o700)

        name, info_path = self._reserve_info_file(source)
        target = self.files_dir / name

        try:
            shutil.move(str(source), str(target))
        except OSError:
            # Release the reservation so the name can be reused
            info_path.unlink(missing_ok=True)
            raise

        logger.debug("item_trashed", path=str(source), trashed_path=str(target))
        return str(target)

    def _reserve_info_file(self, source: Path):
        """Claim a free name by creating its ``.trashinfo`` exclusively."""
        base = source.name
        info = (
            "[Trash Info]\n"
            f"Path={quote(str(source))}\n"
            f"DeletionDate={datetime.now().strftime('%Y-%m-%dT%H:%M:%S')}\n"
        )

        counter = 1
        while True:
            name = base if counter == 1 else f"{base}.{counter}"
            info_path = self.info_dir / f"{name}.trashinfo"
            if not os.path.lexists(self.files_dir / name):
                try:
                    fd = os.open(info_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
                except FileExistsError:
                    pass
                else:
                    with os.fdopen(fd, "w", encoding="utf-8") as f:
                        f.write(info)
                    return name, info_path
            counter += 1
