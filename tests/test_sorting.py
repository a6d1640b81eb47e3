"""Tests for preferred-first sorting and directory listing"""
import locale

from ghq_palette.utils.filesystem import list_directories
from ghq_palette.utils.sorting import sort_with_preferred


class TestSortWithPreferred:
    """Test sort_with_preferred()."""

    def test_preferred_first_in_given_order(self):
        """Test that preferred items come first in their configured order."""
        assert sort_with_preferred(["a", "b", "c"], ["b", "a"]) == ["b", "a", "c"]

    def test_no_preferred_is_alphabetical(self):
        """Test plain alphabetical order without preferences."""
        assert sort_with_preferred(["c", "a", "b"]) == ["a", "b", "c"]
        assert sort_with_preferred(["c", "a", "b"], []) == ["a", "b", "c"]

    def test_missing_preferred_never_invented(self):
        """Test that preferred names absent from the items are dropped."""
        result = sort_with_preferred(["x", "y"], ["z", "y"])
        assert result == ["y", "x"]
        assert "z" not in result

    def test_case_insensitive_order(self):
        """Test that ordering ignores case."""
        assert sort_with_preferred(["beta", "Alpha", "gamma"]) == ["Alpha", "beta", "gamma"]

    def test_accented_names_sort_with_their_letter(self):
        """Test that accented names sort next to their base letter, not after z."""
        assert sort_with_preferred(["zebra", "éclair", "apple"]) == ["apple", "éclair", "zebra"]
        assert sort_with_preferred(["zurich", "Österreich", "oslo"]) == ["oslo", "Österreich", "zurich"]

    def test_accent_breaks_ties_only(self):
        """Test that an unaccented spelling precedes its accented twin."""
        assert sort_with_preferred(["résumé", "resume"]) == ["resume", "résumé"]

    def test_accented_order_in_c_locale(self):
        """Test that accented ordering holds under the plain C collation."""
        previous = locale.setlocale(locale.LC_COLLATE)
        try:
            locale.setlocale(locale.LC_COLLATE, "C")
            assert sort_with_preferred(["zebra", "éclair", "apple"]) == ["apple", "éclair", "zebra"]
        finally:
            locale.setlocale(locale.LC_COLLATE, previous)

    def test_duplicates_collapsed(self):
        """Test that duplicated items and preferences appear once."""
        assert sort_with_preferred(["a", "b", "a"], ["b", "b"]) == ["b", "a"]

    def test_permutation_of_input(self):
        """Test that the result contains exactly the input items."""
        items = ["github.com", "gitlab.com", "bitbucket.org", "example.org"]
        result = sort_with_preferred(items, ["gitlab.com", "nowhere"])
        assert sorted(result) == sorted(items)
        assert result[0] == "gitlab.com"

    def test_empty_items(self):
        """Test that nothing in gives nothing out."""
        assert sort_with_preferred([], ["a"]) == []


class TestListDirectories:
    """Test list_directories()."""

    def test_skips_hidden_and_files(self, temp_dir):
        """Test that dot-directories and files are not listed."""
        for name in (".git", "foo", "bar"):
            (temp_dir / name).mkdir()
        (temp_dir / "README.md").write_text("hello\n")
        assert list_directories(temp_dir) == ["bar", "foo"]

    def test_missing_path(self, temp_dir):
        """Test that a missing directory yields an empty list."""
        assert list_directories(temp_dir / "missing") == []

    def test_file_path(self, temp_dir):
        """Test that a file is not treated as a directory."""
        path = temp_dir / "file.txt"
        path.write_text("x")
        assert list_directories(str(path)) == []
