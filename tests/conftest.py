"""Test configuration and fixtures for the Smart Library catalog.

1. Isolated record files - each test gets its own books/users files
2. Configuration overrides - test-specific settings, never the developer's .env
3. Library fixtures - empty, stocked, and installed as the served library
4. Global state cleanup - config and library singletons reset after every test
"""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from smart_library.config import LibraryConfig, reset_config
from smart_library.library import Library, reset_library, set_library

# === Configuration Fixtures ===


@pytest.fixture
def books_path(tmp_path: Path) -> Path:
    return tmp_path / "books.dat"


@pytest.fixture
def users_path(tmp_path: Path) -> Path:
    return tmp_path / "users.dat"


@pytest.fixture
def test_config(books_path: Path, users_path: Path) -> Generator[LibraryConfig, None, None]:
    """Provide a configuration pointing at per-test record files."""
    reset_config()

    config = LibraryConfig(
        _env_file=None,
        server_name="test-smart-library",
        server_version="0.0.1-test",
        books_file=books_path,
        users_file=users_path,
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()


# === Library Fixtures ===


@pytest.fixture
def library(test_config: LibraryConfig) -> Library:
    """An empty library wired to the test record files."""
    return Library.from_config(test_config)


@pytest.fixture
def stocked_library(library: Library) -> Library:
    """
    A library with four books and two users, nothing on loan.

    Users: Alice (1001), Bob (1002).
    """
    library.add_book("111", "Dune", "Frank Herbert", "Science Fiction")
    library.add_book("222", "Emma", "Jane Austen", "Classic")
    library.add_book("333", "Neuromancer", "William Gibson", "Science Fiction")
    library.add_book("444", "Children of Dune", "Frank Herbert", "Science Fiction")
    library.add_user("Alice")
    library.add_user("Bob")
    return library


@pytest.fixture
def installed_library(stocked_library: Library) -> Generator[Library, None, None]:
    """The stocked library installed as the one tools and resources serve."""
    set_library(stocked_library)
    yield stocked_library
    reset_library()


# === Environment Fixtures ===


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide an environment without SMART_LIBRARY_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("SMART_LIBRARY_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


# === Cleanup Fixtures ===


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Reset global configuration and the served library after each test."""
    yield

    reset_config()
    reset_library()
