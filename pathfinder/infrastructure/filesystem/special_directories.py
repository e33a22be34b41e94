"""Host special-directory resolution.

Maps a ``DirectoryKind`` and ``DomainMask`` to the locations the platform
uses for it. macOS follows the Apple search-path conventions; every other
POSIX host follows the XDG base directory and user directory specs.
"""
import os
import re
import shlex
import sys
import tempfile
from typing import Dict, List, Optional, Tuple

from pathfinder.core.models.directories import DirectoryKind, DomainMask

Table = Dict[DirectoryKind, Tuple[str, ...]]

_DARWIN_USER: Table = {
    DirectoryKind.APPLICATIONS: ("~/Applications",),
    DirectoryKind.DEMO_APPLICATIONS: ("~/Applications/Demos",),
    DirectoryKind.DEVELOPER_APPLICATIONS: ("~/Developer/Applications",),
    DirectoryKind.ADMIN_APPLICATIONS: ("~/Applications/Utilities",),
    DirectoryKind.LIBRARY: ("~/Library",),
    DirectoryKind.DEVELOPER: ("~/Developer",),
    DirectoryKind.DOCUMENTATION: ("~/Library/Documentation",),
    DirectoryKind.DOCUMENTS: ("~/Documents",),
    DirectoryKind.AUTOSAVED_INFORMATION: ("~/Library/Autosave Information",),
    DirectoryKind.DESKTOP: ("~/Desktop",),
    DirectoryKind.CACHES: ("~/Library/Caches",),
    DirectoryKind.APPLICATION_SUPPORT: ("~/Library/Application Support",),
    DirectoryKind.DOWNLOADS: ("~/Downloads",),
    DirectoryKind.INPUT_METHODS: ("~/Library/Input Methods",),
    DirectoryKind.MOVIES: ("~/Movies",),
    DirectoryKind.MUSIC: ("~/Music",),
    DirectoryKind.PICTURES: ("~/Pictures",),
    DirectoryKind.SHARED_PUBLIC: ("~/Public",),
    DirectoryKind.PREFERENCE_PANES: ("~/Library/PreferencePanes",),
    DirectoryKind.APPLICATION_SCRIPTS: ("~/Library/Application Scripts",),
    DirectoryKind.TRASH: ("~/.Trash",),
}

_DARWIN_LOCAL: Table = {
    DirectoryKind.APPLICATIONS: ("/Applications",),
    DirectoryKind.DEMO_APPLICATIONS: ("/Applications/Demos",),
    DirectoryKind.DEVELOPER_APPLICATIONS: ("/Developer/Applications",),
    DirectoryKind.ADMIN_APPLICATIONS: ("/Applications/Utilities",),
    DirectoryKind.LIBRARY: ("/Library",),
    DirectoryKind.DEVELOPER: ("/Developer",),
    DirectoryKind.USERS: ("/Users",),
    DirectoryKind.DOCUMENTATION: ("/Library/Documentation",),
    DirectoryKind.CACHES: ("/Library/Caches",),
    DirectoryKind.APPLICATION_SUPPORT: ("/Library/Application Support",),
    DirectoryKind.INPUT_METHODS: ("/Library/Input Methods",),
    DirectoryKind.PRINTER_DESCRIPTIONS: ("/Library/Printers/PPDs",),
    DirectoryKind.PREFERENCE_PANES: ("/Library/PreferencePanes",),
}

_DARWIN_NETWORK: Table = {
    DirectoryKind.APPLICATIONS: ("/Network/Applications",),
    DirectoryKind.ADMIN_APPLICATIONS: ("/Network/Applications/Utilities",),
    DirectoryKind.LIBRARY: ("/Network/Library",),
    DirectoryKind.DEVELOPER: ("/Network/Developer",),
    DirectoryKind.USERS: ("/Network/Users",),
}

_DARWIN_SYSTEM: Table = {
    DirectoryKind.APPLICATIONS: ("/System/Applications",),
    DirectoryKind.ADMIN_APPLICATIONS: ("/System/Applications/Utilities",),
    DirectoryKind.LIBRARY: ("/System/Library",),
    DirectoryKind.DOCUMENTATION: ("/System/Library/Documentation",),
    DirectoryKind.CORE_SERVICES: ("/System/Library/CoreServices",),
    DirectoryKind.INPUT_METHODS: ("/System/Library/Input Methods",),
    DirectoryKind.PRINTER_DESCRIPTIONS: ("/System/Library/Printers/PPDs",),
    DirectoryKind.PREFERENCE_PANES: ("/System/Library/PreferencePanes",),
}

_XDG_LOCAL: Table = {
    DirectoryKind.APPLICATIONS: ("/usr/local/share/applications",),
    DirectoryKind.LIBRARY: ("/usr/local/lib",),
    DirectoryKind.DOCUMENTATION: ("/usr/local/share/doc",),
    DirectoryKind.APPLICATION_SUPPORT: ("/usr/local/share",),
}

_XDG_SYSTEM: Table = {
    DirectoryKind.APPLICATIONS: ("/usr/share/applications",),
    DirectoryKind.ADMIN_APPLICATIONS: ("/usr/sbin",),
    DirectoryKind.LIBRARY: ("/usr/lib",),
    DirectoryKind.USERS: ("/home",),
    DirectoryKind.DOCUMENTATION: ("/usr/share/doc",),
    DirectoryKind.CORE_SERVICES: ("/usr/libexec",),
    DirectoryKind.CACHES: ("/var/cache",),
    DirectoryKind.APPLICATION_SUPPORT: ("/usr/share",),
    DirectoryKind.PRINTER_DESCRIPTIONS: ("/usr/share/ppd",),
}

# XDG user-dirs.dirs variable and fallback for each user directory kind
_XDG_USER_DIRS: Dict[DirectoryKind, Tuple[str, str]] = {
    DirectoryKind.DESKTOP: ("XDG_DESKTOP_DIR", "~/Desktop"),
    DirectoryKind.DOCUMENTS: ("XDG_DOCUMENTS_DIR", "~/Documents"),
    DirectoryKind.DOWNLOADS: ("XDG_DOWNLOAD_DIR", "~/Downloads"),
    DirectoryKind.MOVIES: ("XDG_VIDEOS_DIR", "~/Videos"),
    DirectoryKind.MUSIC: ("XDG_MUSIC_DIR", "~/Music"),
    DirectoryKind.PICTURES: ("XDG_PICTURES_DIR", "~/Pictures"),
    DirectoryKind.SHARED_PUBLIC: ("XDG_PUBLICSHARE_DIR", "~/Public"),
}

_USER_DIRS_LINE = re.compile(r'^\s*(XDG_[A-Z]+_DIR)\s*=\s*(.+?)\s*$')

# Kinds that aggregate other kinds across every searched domain
_AGGREGATES: Dict[DirectoryKind, Tuple[DirectoryKind, ...]] = {
    DirectoryKind.ALL_APPLICATIONS: (
        DirectoryKind.APPLICATIONS,
        DirectoryKind.ADMIN_APPLICATIONS,
        DirectoryKind.DEVELOPER_APPLICATIONS,
        DirectoryKind.DEMO_APPLICATIONS,
    ),
    DirectoryKind.ALL_LIBRARIES: (
        DirectoryKind.LIBRARY,
        DirectoryKind.DEVELOPER,
    ),
}

_DOMAIN_ORDER = (DomainMask.USER, DomainMask.LOCAL, DomainMask.NETWORK, DomainMask.SYSTEM)


def _home() -> str:
    return os.path.expanduser("~")


def _xdg_base(variable: str, fallback: str) -> str:
    value = os.environ.get(variable, "").strip()
    # Relative base directories are invalid and ignored
    if value and os.path.isabs(value):
        return value
    return fallback


def read_user_dirs(config_home: Optional[str] = None) -> Dict[str, str]:
    """Parse ``user-dirs.dirs`` into ``{variable: location}``, $HOME written as ``~``"""
    config_home = config_home or _xdg_base("XDG_CONFIG_HOME", "~/.config")
    user_dirs_file = os.path.join(os.path.expanduser(config_home), "user-dirs.dirs")

    entries: Dict[str, str] = {}
    try:
        with open(user_dirs_file, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError:
        return entries

    for line in lines:
        match = _USER_DIRS_LINE.match(line)
        if not match:
            continue
        variable, raw = match.groups()
        try:
            words = shlex.split(raw)
        except ValueError:
            continue
        if len(words) != 1:
            continue
        value = words[0].replace("$HOME", "~", 1) if words[0].startswith("$HOME") else words[0]
        entries[variable] = value

    return entries


def _xdg_user_table() -> Table:
    data_home = _xdg_base("XDG_DATA_HOME", "~/.local/share")
    user_dirs = read_user_dirs()

    table: Table = {
        DirectoryKind.APPLICATIONS: (os.path.join(data_home, "applications"),),
        DirectoryKind.LIBRARY: ("~/.local/lib",),
        DirectoryKind.DOCUMENTATION: (os.path.join(data_home, "doc"),),
        DirectoryKind.AUTOSAVED_INFORMATION: (_xdg_base("XDG_STATE_HOME", "~/.local/state"),),
        DirectoryKind.CACHES: (_xdg_base("XDG_CACHE_HOME", "~/.cache"),),
        DirectoryKind.APPLICATION_SUPPORT: (data_home,),
        DirectoryKind.ITEM_REPLACEMENT: (tempfile.gettempdir(),),
        DirectoryKind.TRASH: (os.path.join(data_home, "Trash"),),
    }

    for kind, (variable, fallback) in _XDG_USER_DIRS.items():
        value = os.environ.get(variable) or user_dirs.get(variable) or fallback
        table[kind] = (value,)

    return table


def _tables(platform: str) -> Dict[DomainMask, Table]:
    if platform == "darwin":
        return {
            DomainMask.USER: {
                **_DARWIN_USER,
                DirectoryKind.ITEM_REPLACEMENT: (tempfile.gettempdir(),),
            },
            DomainMask.LOCAL: _DARWIN_LOCAL,
            DomainMask.NETWORK: _DARWIN_NETWORK,
            DomainMask.SYSTEM: _DARWIN_SYSTEM,
        }
    return {
        DomainMask.USER: _xdg_user_table(),
        DomainMask.LOCAL: _XDG_LOCAL,
        DomainMask.NETWORK: {},
        DomainMask.SYSTEM: _XDG_SYSTEM,
    }


def _finish(location: str, expand_tilde: bool) -> str:
    if expand_tilde:
        return os.path.expanduser(location)

    home = _home()
    if location == home or location.startswith(home + os.sep):
        return "~" + location[len(home):]
    return location


def search_path_for_directories(
    kind: DirectoryKind,
    domain: DomainMask = DomainMask.USER,
    expand_tilde: bool = True,
    platform: Optional[str] = None,
) -> List[str]:
    """All locations of ``kind`` in ``domain``, user domain first.

    Returns an empty list when the host has no such directory.
    """
    tables = _tables(platform or sys.platform)
    kinds = _AGGREGATES.get(kind, (kind,))

    locations: List[str] = []
    for scope in _DOMAIN_ORDER:
        if not domain & scope:
            continue
        table = tables[scope]
        for member in kinds:
            for location in table.get(member, ()):
                location = _finish(location, expand_tilde)
                if location not in locations:
                    locations.append(location)

    return locations
