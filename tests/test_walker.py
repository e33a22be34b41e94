"""Tests for directory listing, enumeration and name checks"""

import os
from unittest.mock import patch

import pytest

from pathfinder import (
    DirectoryListing,
    DirectoryWalker,
    FilesystemError,
    IsNotDirectoryError,
    Path,
)
from pathfinder.infrastructure.filesystem import LocalFileSystem

from tests.conftest import write_file


@pytest.fixture
def walker() -> DirectoryWalker:
    return DirectoryWalker()


class TestListContents:
    """Test one-level directory listings"""

    def test_partition_and_order(self, walker, tree):
        """Test directories and files are split and sorted by name"""
        directories, files = walker.list_contents(tree)

        assert directories == (tree / "dirA", tree / "dirB")
        assert files == (tree / "file1.txt", tree / "file2.txt")

    def test_all_puts_directories_first(self, walker, tree):
        """Test the combined view"""
        listing = walker.list_contents(tree)

        assert listing.all == (
            tree / "dirA",
            tree / "dirB",
            tree / "file1.txt",
            tree / "file2.txt",
        )
        assert len(listing) == 4

    def test_ordinal_sorting(self, walker, temp_dir):
        """Test names sort by code point, upper case first"""
        for name in ("b.txt", "a.txt", "B.txt", "_x.txt"):
            write_file(temp_dir / name)

        listing = walker.list_contents(temp_dir)

        assert [entry.name for entry in listing.files] == ["B.txt", "_x.txt", "a.txt", "b.txt"]

    def test_ignores_exact_names(self, walker, tree):
        """Test ignored names are skipped by exact match only"""
        write_file(tree / ".DS_Store")

        listing = walker.list_contents(tree, ignores=[".DS_Store", "dirB", "file*"])

        assert listing.directories == (tree / "dirA",)
        assert listing.files == (tree / "file1.txt", tree / "file2.txt")

    def test_ignores_case_sensitive(self, walker, tree):
        """Test ignore matching respects case"""
        listing = walker.list_contents(tree, ignores=["DIRA"])
        assert tree / "dirA" in listing.directories

    def test_default_ignores_from_settings(self, walker, tree, monkeypatch):
        """Test the configured ignores apply when none are given"""
        write_file(tree / ".DS_Store")
        monkeypatch.setenv("PATHFINDER_DEFAULT_IGNORES", '[".DS_Store"]')

        assert tree / ".DS_Store" not in walker.list_contents(tree).files
        assert tree / ".DS_Store" in walker.list_contents(tree, ignores=()).files

    def test_nonexistent_is_empty(self, walker, temp_dir):
        """Test listing a missing directory is not an error"""
        listing = walker.list_contents(temp_dir / "missing")

        assert listing == DirectoryListing()
        assert not listing

    def test_listing_is_repeatable(self, walker, tree):
        """Test two listings of an unchanged tree are equal"""
        assert walker.list_contents(tree) == walker.list_contents(tree)

    def test_partition_is_complete(self, walker, tree):
        """Test every non-ignored child lands in exactly one part"""
        listing = walker.list_contents(tree)

        names = sorted(entry.name for entry in listing.all)
        assert names == sorted(os.listdir(tree))
        assert not set(listing.directories) & set(listing.files)

    def test_symlinked_directory_is_a_directory(self, walker, tree):
        """Test classification follows the host's directory check"""
        os.symlink(tree / "dirA", tree / "linkA")

        assert tree / "linkA" in walker.list_contents(tree).directories

    def test_host_failure(self, tree):
        """Test a failed host listing surfaces as FilesystemError"""
        host = LocalFileSystem()
        walker = DirectoryWalker(host)

        with patch.object(host, "listdir", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FilesystemError, match="Permission denied") as exc_info:
                walker.list_contents(tree)

        error = exc_info.value
        assert error.operation == "list contents of"
        assert error.path == tree
        assert error.errno == 13
        assert isinstance(error.__cause__, PermissionError)


class TestEnumerate:
    """Test recursive enumeration"""

    def test_depth_first_order(self, walker, tree):
        """Test each directory is followed by its subtree, files last"""
        visited = []
        walker.enumerate(tree, visited.append)

        assert visited == [
            tree / "dirA",
            tree / "dirA" / "inner",
            tree / "dirA" / "inner" / "deep.txt",
            tree / "dirA" / "a.txt",
            tree / "dirB",
            tree / "file1.txt",
            tree / "file2.txt",
        ]

    def test_nested_order(self, walker, temp_dir):
        """Test files of a directory come before the next sibling directory"""
        os.makedirs(temp_dir / "dirA")
        os.makedirs(temp_dir / "dirB")
        write_file(temp_dir / "dirA" / "file2")
        write_file(temp_dir / "dirB" / "file1")

        visited = list(walker.iter_contents(temp_dir))

        assert visited == [
            temp_dir / "dirA",
            temp_dir / "dirA" / "file2",
            temp_dir / "dirB",
            temp_dir / "dirB" / "file1",
        ]

    def test_not_recursive(self, walker, tree):
        """Test only the immediate children are visited"""
        visited = []
        walker.enumerate(tree, visited.append, include_subdirectories=False)

        assert visited == list(walker.list_contents(tree).all)

    def test_ignores_apply_at_every_level(self, walker, tree):
        """Test ignored names are skipped inside subdirectories too"""
        visited = list(walker.iter_contents(tree, ignores=["inner", "file2.txt"]))

        assert tree / "dirA" / "inner" not in visited
        assert tree / "dirA" / "inner" / "deep.txt" not in visited
        assert tree / "file2.txt" not in visited
        assert tree / "dirA" / "a.txt" in visited

    def test_nonexistent_visits_nothing(self, walker, temp_dir):
        """Test enumerating a missing directory calls nothing"""
        visited = []
        walker.enumerate(temp_dir / "missing", visited.append)
        assert visited == []

    def test_deep_tree(self, walker, temp_dir):
        """Test depth is not limited by the call stack"""
        depth = 200
        deepest = temp_dir.joinpath(*["d"] * depth)
        os.makedirs(deepest)

        visited = list(walker.iter_contents(temp_dir))

        assert len(visited) == depth
        assert visited[-1] == deepest

    def test_failure_propagates(self, tree):
        """Test the first listing failure stops the walk"""
        host = LocalFileSystem()
        walker = DirectoryWalker(host)
        real_listdir = host.listdir

        def listdir(path):
            if path.endswith("dirB"):
                raise PermissionError(13, "Permission denied", path)
            return real_listdir(path)

        visited = []
        with patch.object(host, "listdir", side_effect=listdir):
            with pytest.raises(FilesystemError):
                walker.enumerate(tree, visited.append)

        assert visited[-1] == tree / "dirB"
        assert tree / "file1.txt" not in visited


class TestCheckNameUnique:
    """Test name uniqueness checks"""

    def test_unique_name(self, walker, tree):
        """Test an unused name"""
        assert walker.check_name_unique(tree, "new.txt") is True

    def test_taken_name(self, walker, tree):
        """Test files and directories both count"""
        assert walker.check_name_unique(tree, "file1.txt") is False
        assert walker.check_name_unique(tree, "dirB") is False

    def test_only_immediate_children(self, walker, tree):
        """Test names deeper in the tree do not count"""
        assert walker.check_name_unique(tree, "deep.txt") is True

    def test_case_sensitivity(self, walker, temp_dir):
        """Test case folding only when requested"""
        write_file(temp_dir / "Readme.md")

        assert walker.check_name_unique(temp_dir, "README.md") is True
        assert walker.check_name_unique(temp_dir, "README.md", case_sensitive=False) is False
        assert walker.check_name_unique(temp_dir, "Readme.md", case_sensitive=True) is False

    def test_ignores_do_not_apply(self, walker, tree, monkeypatch):
        """Test configured ignores never hide a taken name"""
        monkeypatch.setenv("PATHFINDER_DEFAULT_IGNORES", '["file1.txt"]')
        assert walker.check_name_unique(tree, "file1.txt") is False

    def test_not_a_directory(self, walker, tree):
        """Test a file or missing path is refused"""
        with pytest.raises(IsNotDirectoryError):
            walker.check_name_unique(tree / "file1.txt", "x")
        with pytest.raises(IsNotDirectoryError, match="missing"):
            walker.check_name_unique(tree / "missing", "x")

    def test_enumeration_failure_is_not_unique(self, tree):
        """Test a failed listing answers False instead of raising"""
        host = LocalFileSystem()
        walker = DirectoryWalker(host)

        with patch.object(host, "listdir", side_effect=OSError(5, "I/O error")):
            assert walker.check_name_unique(tree, "new.txt") is False


class TestPredicates:
    """Test existence and directory checks"""

    def test_exists(self, walker, tree):
        assert walker.exists(tree / "file1.txt")
        assert not walker.exists(tree / "missing")

    def test_is_directory(self, walker, tree):
        assert walker.is_directory(tree / "dirA")
        assert not walker.is_directory(tree / "file1.txt")
        assert not walker.is_directory(tree / "missing")

    def test_accepts_path_value(self, walker, tree):
        assert isinstance(tree, Path)
        assert walker.is_directory(tree)
