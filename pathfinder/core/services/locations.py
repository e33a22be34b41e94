"""Well-known locations: special directories, home, temporary paths."""
import getpass
import os
import tempfile
import uuid
from typing import List, Optional, Tuple

try:
    import pwd
except ImportError:  # Windows has no account database module
    pwd = None

from pathfinder.core.config import get_settings
from pathfinder.core.errors import SpecialDirectoryNotFoundError
from pathfinder.core.models import DirectoryKind, DomainMask, Path
from pathfinder.infrastructure.filesystem import search_path_for_directories
from pathfinder.infrastructure.logging import get_logger

logger = get_logger(__name__)

# (pid, token); regenerated in a forked child
_process_token: Optional[Tuple[int, str]] = None


def special_directories(
    kind: DirectoryKind,
    domain: DomainMask = DomainMask.ALL,
    expand_tilde: bool = True,
) -> List[Path]:
    """Every location the host reports for ``kind``; may be empty"""
    return [
        Path(location)
        for location in search_path_for_directories(kind, domain, expand_tilde)
    ]


def special_directory(
    kind: DirectoryKind,
    domain: DomainMask = DomainMask.USER,
    expand_tilde: bool = True,
) -> Path:
    """
    First location the host reports for ``kind``

    Raises:
        SpecialDirectoryNotFoundError: The host has no such directory in ``domain``
    """
    locations = special_directories(kind, domain, expand_tilde)
    if not locations:
        domain_name = domain.name or str(int(domain))
        logger.warning(
            "special_directory_lookup_failed", kind=kind.value, domain=domain_name
        )
        raise SpecialDirectoryNotFoundError(kind.value, domain_name)
    return locations[0]


def home_directory() -> Path:
    return Path(os.path.expanduser("~"))


def home_directory_for_user(name: str) -> Optional[Path]:
    """Home of account ``name``, None for an unknown account"""
    if not name:
        return None
    home = os.path.expanduser(f"~{name}")
    if home.startswith("~"):
        return None
    return Path(home)


def root_directory() -> Path:
    return Path("/")


def temporary_directory() -> Path:
    """The configured temporary directory, else the host's (TMPDIR)"""
    override = get_settings().temporary_directory
    if override is not None:
        return Path(override)
    return Path(tempfile.gettempdir())


def _token() -> str:
    global _process_token

    pid = os.getpid()
    if _process_token is None or _process_token[0] != pid:
        _process_token = (pid, f"{pid}-{uuid.uuid4().hex}")
    return _process_token[1]


def process_temporary_directory() -> Path:
    """Temporary directory location private to this process; not created"""
    return temporary_directory() / _token()


def unique_temporary_path() -> Path:
    """A fresh location under ``process_temporary_directory()`` on every call"""
    return process_temporary_directory() / str(uuid.uuid4())


def user_name() -> str:
    return getpass.getuser()


def full_user_name() -> str:
    """Real name from the account database, the login name when there is none"""
    login = user_name()
    if pwd is None:
        return login
    try:
        gecos = pwd.getpwnam(login).pw_gecos
    except KeyError:
        return login
    return gecos.split(",", 1)[0] or login
