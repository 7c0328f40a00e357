"""
Tests for the title search tree.

The tree is exercised on its own here, resolving ISBNs through a plain dict,
so these tests pin down ordering, duplicate handling and node removal without
the hash table in the way.
"""

import pytest

from smart_library.catalog.title_index import TitleIndex
from smart_library.models.book import Book


class Shelf:
    """Minimal book store backing a TitleIndex under test."""

    def __init__(self):
        self.books: dict[str, Book] = {}
        self.index = TitleIndex(self.books.get)

    def add(self, isbn: str, title: str) -> Book:
        book = Book(isbn=isbn, title=title)
        self.books[isbn] = book
        self.index.insert(title, isbn)
        return book

    def titles(self) -> list[str]:
        return [book.title for book in self.index.inorder()]

    def isbns(self) -> list[str]:
        return [book.isbn for book in self.index.inorder()]


@pytest.fixture
def shelf() -> Shelf:
    return Shelf()


class TestInsertAndTraverse:
    """Test insertion and in-order traversal."""

    def test_empty_tree(self, shelf):
        assert len(shelf.index) == 0
        assert shelf.index.height() == 0
        assert list(shelf.index.inorder()) == []
        assert shelf.index.search("Dune") is None

    def test_inorder_is_sorted(self, shelf):
        for isbn, title in [
            ("1", "Neuromancer"),
            ("2", "Dune"),
            ("3", "Solaris"),
            ("4", "Emma"),
            ("5", "Anathem"),
        ]:
            shelf.add(isbn, title)

        assert shelf.titles() == ["Anathem", "Dune", "Emma", "Neuromancer", "Solaris"]
        assert len(shelf.index) == 5

    def test_ordering_is_ordinal(self, shelf):
        shelf.add("1", "apple")
        shelf.add("2", "Zebra")
        shelf.add("3", "Apple")

        # Upper case sorts before lower case
        assert shelf.titles() == ["Apple", "Zebra", "apple"]

    def test_traversal_is_restartable(self, shelf):
        shelf.add("1", "Dune")
        shelf.add("2", "Emma")

        assert shelf.titles() == shelf.titles()
        assert [book.title for book in shelf.index] == ["Dune", "Emma"]

    def test_duplicate_titles_are_kept(self, shelf):
        shelf.add("1", "Dune")
        shelf.add("2", "Emma")
        shelf.add("3", "Dune")

        assert shelf.titles() == ["Dune", "Dune", "Emma"]
        # Ties go right, so the earlier node is met first on the way down
        assert shelf.index.search("Dune").isbn == "1"

    def test_search_exact_title(self, shelf):
        shelf.add("1", "Dune")
        shelf.add("2", "Dune Messiah")

        assert shelf.index.search("Dune Messiah").isbn == "2"
        assert shelf.index.search("dune") is None
        assert shelf.index.search("Dun") is None

    def test_sorted_inserts_do_not_recurse(self, shelf):
        count = 3000
        for i in range(count):
            shelf.add(str(i), f"Title {i:05d}")

        # Fully degenerate: one node per level
        assert shelf.index.height() == count
        titles = shelf.titles()
        assert len(titles) == count
        assert titles == sorted(titles)
        assert shelf.index.search(f"Title {count - 1:05d}").isbn == str(count - 1)


class TestPrefixSearch:
    """Test title prefix search."""

    @pytest.fixture
    def stocked(self, shelf):
        for isbn, title in [
            ("1", "Dune"),
            ("2", "Emma"),
            ("3", "Dust"),
            ("4", "Children of Dune"),
            ("5", "Dune Messiah"),
            ("6", "Du"),
        ]:
            shelf.add(isbn, title)
        return shelf

    def test_prefix_matches_in_order(self, stocked):
        titles = [book.title for book in stocked.index.search_prefix("Du")]

        assert titles == ["Du", "Dune", "Dune Messiah", "Dust"]

    def test_longer_prefix(self, stocked):
        titles = [book.title for book in stocked.index.search_prefix("Dune")]

        assert titles == ["Dune", "Dune Messiah"]

    def test_no_match(self, stocked):
        assert list(stocked.index.search_prefix("Z")) == []
        assert list(stocked.index.search_prefix("dune")) == []

    def test_empty_prefix_yields_everything(self, stocked):
        assert len(list(stocked.index.search_prefix(""))) == 6


class TestRemove:
    """Test node removal, including the two-children case."""

    def test_remove_missing(self, shelf):
        shelf.add("1", "Dune")

        assert shelf.index.remove("Emma", "2") is False
        assert shelf.index.remove("Dune", "2") is False
        assert len(shelf.index) == 1

    def test_remove_only_node(self, shelf):
        shelf.add("1", "Dune")

        assert shelf.index.remove("Dune", "1") is True
        assert len(shelf.index) == 0
        assert shelf.index.height() == 0
        assert shelf.titles() == []

    def test_remove_leaf(self, shelf):
        shelf.add("1", "M")
        shelf.add("2", "F")
        shelf.add("3", "T")

        assert shelf.index.remove("F", "2")
        assert shelf.titles() == ["M", "T"]

    def test_remove_node_with_one_child(self, shelf):
        shelf.add("1", "M")
        shelf.add("2", "F")
        shelf.add("3", "C")

        assert shelf.index.remove("F", "2")
        assert shelf.titles() == ["C", "M"]
        assert shelf.index.height() == 2

    def test_remove_root_with_two_children(self, shelf):
        # Successor of M is N, two levels down the right subtree
        for isbn, title in [("1", "M"), ("2", "F"), ("3", "T"), ("4", "P"), ("5", "W"), ("6", "N")]:
            shelf.add(isbn, title)

        assert shelf.index.remove("M", "1")

        assert shelf.titles() == ["F", "N", "P", "T", "W"]
        assert len(shelf.index) == 5
        assert shelf.index.search("M") is None
        assert shelf.index.search("N").isbn == "6"

    def test_remove_node_whose_successor_is_right_child(self, shelf):
        for isbn, title in [("1", "M"), ("2", "F"), ("3", "T"), ("4", "W")]:
            shelf.add(isbn, title)

        assert shelf.index.remove("M", "1")

        assert shelf.titles() == ["F", "T", "W"]
        assert shelf.index.height() == 2

    def test_remove_one_duplicate_keeps_the_other(self, shelf):
        shelf.add("1", "Dune")
        shelf.add("2", "Dune")
        shelf.add("3", "Dune")

        assert shelf.index.remove("Dune", "2")

        assert shelf.isbns() == ["1", "3"]
        assert shelf.index.search("Dune").isbn == "1"

    def test_remove_first_duplicate(self, shelf):
        shelf.add("1", "Dune")
        shelf.add("2", "Dune")

        assert shelf.index.remove("Dune", "1")

        assert shelf.index.search("Dune").isbn == "2"
        assert shelf.isbns() == ["2"]

    def test_clear(self, shelf):
        shelf.add("1", "Dune")
        shelf.add("2", "Emma")

        shelf.index.clear()

        assert len(shelf.index) == 0
        assert shelf.titles() == []
