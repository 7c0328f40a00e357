"""
Title index for the Smart Library catalog.

An unbalanced binary search tree ordered by title, used for alphabetical
listings and title lookups. Titles compare ordinally (case-sensitive, by code
point), which is Python's default ``str`` ordering.

Nodes do not hold book records. Each node stores the title it is filed under
and the ISBN of the book, and books are resolved through the owning
``BookIndex`` when they are read. Removing a book from the catalog removes its
node in the same call, so the tree never points at a book that is gone.

Duplicate titles are allowed. A title equal to a node's title is filed in that
node's right subtree, so every left subtree holds strictly smaller titles and
every right subtree holds titles greater than or equal to its parent.

All walks are iterative; a degenerate (sorted-insert) tree is as deep as the
catalog is large and must not hit the recursion limit.
"""

from collections.abc import Callable, Iterator

from ..models.book import Book

BookResolver = Callable[[str], Book | None]


class _TitleNode:
    __slots__ = ("isbn", "left", "right", "title")

    def __init__(self, title: str, isbn: str):
        self.title = title
        self.isbn = isbn
        self.left: _TitleNode | None = None
        self.right: _TitleNode | None = None


class TitleIndex:
    """
    Binary search tree of ISBN keys ordered by title.

    Args:
        resolve: Looks up a book by ISBN; normally ``BookIndex.find_by_isbn``
    """

    def __init__(self, resolve: BookResolver):
        self._resolve = resolve
        self._root: _TitleNode | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Book]:
        return self.inorder()

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def insert(self, title: str, isbn: str) -> None:
        """File ``isbn`` under ``title``; equal titles go to the right."""
        node = _TitleNode(title, isbn)
        self._size += 1

        if self._root is None:
            self._root = node
            return

        current = self._root
        while True:
            if title < current.title:
                if current.left is None:
                    current.left = node
                    return
                current = current.left
            else:
                if current.right is None:
                    current.right = node
                    return
                current = current.right

    def search(self, title: str) -> Book | None:
        """
        Find a book by exact title.

        With duplicate titles this returns the first matching node met on the
        way down from the root.
        """
        current = self._root
        while current is not None:
            if title == current.title:
                return self._resolve(current.isbn)
            current = current.left if title < current.title else current.right
        return None

    def remove(self, title: str, isbn: str) -> bool:
        """
        Remove the node filing ``isbn`` under ``title``.

        Returns:
            True if a node was removed, False if none matched
        """
        parent: _TitleNode | None = None
        current = self._root
        while current is not None:
            if title < current.title:
                parent, current = current, current.left
            elif title > current.title or current.isbn != isbn:
                # Same title, other book: duplicates live to the right
                parent, current = current, current.right
            else:
                break

        if current is None:
            return False

        if current.left is not None and current.right is not None:
            # Replace with the in-order successor, then unlink the successor
            successor_parent = current
            successor = current.right
            while successor.left is not None:
                successor_parent, successor = successor, successor.left

            current.title = successor.title
            current.isbn = successor.isbn

            if successor_parent is current:
                successor_parent.right = successor.right
            else:
                successor_parent.left = successor.right
        else:
            child = current.left if current.left is not None else current.right
            if parent is None:
                self._root = child
            elif parent.left is current:
                parent.left = child
            else:
                parent.right = child

        self._size -= 1
        return True

    def inorder(self) -> Iterator[Book]:
        """Yield books in ascending title order. Each call starts a fresh walk."""
        for node in self._walk_from(None):
            book = self._resolve(node.isbn)
            if book is not None:
                yield book

    def search_prefix(self, prefix: str) -> Iterator[Book]:
        """Yield books whose title starts with ``prefix``, in title order."""
        for node in self._walk_from(prefix):
            if not node.title.startswith(prefix):
                # Titles sharing a prefix are contiguous in sorted order
                return
            book = self._resolve(node.isbn)
            if book is not None:
                yield book

    def height(self) -> int:
        """Number of levels in the tree (0 when empty)."""
        levels = 0
        frontier = [self._root] if self._root is not None else []
        while frontier:
            levels += 1
            frontier = [
                child
                for node in frontier
                for child in (node.left, node.right)
                if child is not None
            ]
        return levels

    def _walk_from(self, lower: str | None) -> Iterator[_TitleNode]:
        """In-order walk over nodes, skipping titles below ``lower``."""
        stack: list[_TitleNode] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                if lower is not None and current.title < lower:
                    # Node and its left subtree are all below the bound
                    current = current.right
                else:
                    stack.append(current)
                    current = current.left
            node = stack.pop()
            yield node
            current = node.right
