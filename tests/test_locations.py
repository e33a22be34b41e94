"""Tests for special directories and temporary locations"""

import os
import sys
import tempfile

import pytest

from pathfinder import (
    DirectoryKind,
    DomainMask,
    Path,
    SpecialDirectoryNotFoundError,
    home_directory,
    home_directory_for_user,
    process_temporary_directory,
    root_directory,
    special_directories,
    special_directory,
    temporary_directory,
    unique_temporary_path,
    user_name,
    full_user_name,
)
from pathfinder.infrastructure.filesystem import read_user_dirs, search_path_for_directories

xdg_only = pytest.mark.skipif(sys.platform == "darwin", reason="XDG layout not used on macOS")


@pytest.fixture
def home(temp_dir, monkeypatch) -> Path:
    """Point HOME and the XDG variables at a temporary home directory"""
    home = temp_dir / "home"
    os.makedirs(home / ".config")
    monkeypatch.setenv("HOME", str(home))
    for variable in (
        "XDG_CONFIG_HOME",
        "XDG_DATA_HOME",
        "XDG_CACHE_HOME",
        "XDG_STATE_HOME",
        "XDG_DOWNLOAD_DIR",
        "XDG_DESKTOP_DIR",
    ):
        monkeypatch.delenv(variable, raising=False)
    return home


def write_user_dirs(home: Path, text: str) -> None:
    with open(home / ".config" / "user-dirs.dirs", "w", encoding="utf-8") as f:
        f.write(text)


class TestUserDirsFile:
    """Test parsing of user-dirs.dirs"""

    def test_parse(self, home):
        write_user_dirs(
            home,
            "# written by xdg-user-dirs-update\n"
            'XDG_DOWNLOAD_DIR="$HOME/Incoming"\n'
            'XDG_MUSIC_DIR="/srv/music"\n'
            "not a setting\n",
        )

        assert read_user_dirs() == {
            "XDG_DOWNLOAD_DIR": "~/Incoming",
            "XDG_MUSIC_DIR": "/srv/music",
        }

    def test_missing_file(self, home):
        assert read_user_dirs() == {}


@xdg_only
class TestXDGResolution:
    """Test the XDG table used on Linux and other POSIX hosts"""

    def test_user_dirs_file(self, home):
        """Test user-dirs.dirs entries win over the fallbacks"""
        write_user_dirs(home, 'XDG_DOWNLOAD_DIR="$HOME/Incoming"\n')

        assert special_directory(DirectoryKind.DOWNLOADS) == home / "Incoming"

    def test_environment_wins(self, home, monkeypatch):
        write_user_dirs(home, 'XDG_DESKTOP_DIR="$HOME/Schreibtisch"\n')
        monkeypatch.setenv("XDG_DESKTOP_DIR", str(home / "Bureau"))

        assert special_directory(DirectoryKind.DESKTOP) == home / "Bureau"

    def test_fallback(self, home):
        assert special_directory(DirectoryKind.DOCUMENTS) == home / "Documents"

    def test_unexpanded_tilde(self, home):
        """Test locations under the home directory keep a leading ~"""
        assert special_directory(DirectoryKind.CACHES, expand_tilde=False) == Path("~/.cache")

    def test_base_directory_variables(self, home, monkeypatch, temp_dir):
        """Test absolute XDG base values are honored and relative ones ignored"""
        monkeypatch.setenv("XDG_CACHE_HOME", str(temp_dir / "cache"))
        monkeypatch.setenv("XDG_DATA_HOME", "relative/data")

        assert special_directory(DirectoryKind.CACHES) == temp_dir / "cache"
        assert special_directory(DirectoryKind.APPLICATION_SUPPORT) == home / ".local" / "share"

    def test_all_domains_user_first(self, home):
        """Test every domain is searched, user domain first"""
        locations = special_directories(DirectoryKind.APPLICATIONS)

        assert locations[0] == home / ".local" / "share" / "applications"
        assert Path("/usr/share/applications") in locations

    def test_single_domain(self, home):
        assert special_directories(DirectoryKind.LIBRARY, DomainMask.SYSTEM) == [Path("/usr/lib")]
        assert special_directories(DirectoryKind.APPLICATIONS, DomainMask.NETWORK) == []

    def test_aggregate_kinds(self, home):
        """Test all_libraries gathers the library directories"""
        locations = special_directories(DirectoryKind.ALL_LIBRARIES, DomainMask.LOCAL | DomainMask.SYSTEM)
        assert locations == [Path("/usr/local/lib"), Path("/usr/lib")]

    def test_trash_location(self, home):
        assert special_directory(DirectoryKind.TRASH) == home / ".local" / "share" / "Trash"

    def test_not_found(self, home):
        """Test a kind without a location in the domain"""
        with pytest.raises(SpecialDirectoryNotFoundError, match="core_services") as exc_info:
            special_directory(DirectoryKind.CORE_SERVICES, DomainMask.USER)

        assert exc_info.value.domain == "USER"


class TestDarwinTable:
    """Test the Apple search-path table"""

    def test_user_domain(self, home):
        locations = search_path_for_directories(
            DirectoryKind.LIBRARY, DomainMask.USER, platform="darwin"
        )
        assert locations == [str(home / "Library")]

    def test_all_domains(self, home):
        locations = search_path_for_directories(
            DirectoryKind.APPLICATIONS, DomainMask.ALL, expand_tilde=False, platform="darwin"
        )
        assert locations == [
            "~/Applications",
            "/Applications",
            "/Network/Applications",
            "/System/Applications",
        ]


class TestShortcuts:
    """Test home, root, user and temporary shortcuts"""

    def test_home_directory(self, home):
        assert home_directory() == home

    def test_home_of_unknown_user(self):
        assert home_directory_for_user("no-such-user-pathfinder") is None
        assert home_directory_for_user("") is None

    def test_root_directory(self):
        assert root_directory() == Path("/")
        assert root_directory().name == "/"

    def test_user_names(self):
        assert user_name()
        assert full_user_name()

    def test_temporary_directory(self):
        assert temporary_directory() == Path(tempfile.gettempdir())

    def test_temporary_directory_override(self, temp_dir, monkeypatch):
        """Test the configured temporary directory wins"""
        monkeypatch.setenv("PATHFINDER_TEMPORARY_DIRECTORY", str(temp_dir))
        assert temporary_directory() == temp_dir

    def test_process_temporary_directory(self):
        """Test the process location is stable and names this process"""
        first = process_temporary_directory()

        assert first == process_temporary_directory()
        assert first.parent == temporary_directory()
        assert first.name.startswith(f"{os.getpid()}-")

    def test_unique_temporary_path(self):
        """Test every call yields a new location in the process directory"""
        paths = {unique_temporary_path() for _ in range(20)}

        assert len(paths) == 20
        for path in paths:
            assert path.parent == process_temporary_directory()
