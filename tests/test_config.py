"""Tests for library configuration.

1. Default values
2. Environment variable loading
3. Validation of paths, policy values and server metadata
4. The configuration singleton
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from smart_library.config import LibraryConfig, get_config, reset_config


class TestLibraryConfig:
    """Test configuration behavior."""

    def test_default_configuration(self, clean_env):
        config = LibraryConfig(_env_file=None)

        assert config.server_name == "smart-library"
        assert config.server_version == "0.1.0"
        assert config.transport == "stdio"

        # Record files default to data/ and are made absolute
        assert config.books_file == Path("data/books.dat").absolute()
        assert config.users_file == Path("data/users.dat").absolute()

        assert config.hash_table_size == 101
        assert config.max_borrowed_per_user == 10
        assert config.first_user_id == 1001
        assert config.most_borrowed_limit == 10

        assert config.debug is False
        assert config.log_level == "INFO"

    def test_environment_variable_loading(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("SMART_LIBRARY_SERVER_NAME", "branch-library")
        monkeypatch.setenv("SMART_LIBRARY_BOOKS_FILE", str(tmp_path / "b.dat"))
        monkeypatch.setenv("SMART_LIBRARY_MAX_BORROWED_PER_USER", "3")
        monkeypatch.setenv("SMART_LIBRARY_HASH_TABLE_SIZE", "211")
        monkeypatch.setenv("SMART_LIBRARY_DEBUG", "true")

        config = LibraryConfig(_env_file=None)

        assert config.server_name == "branch-library"
        assert config.books_file == tmp_path / "b.dat"
        assert config.max_borrowed_per_user == 3
        assert config.hash_table_size == 211
        assert config.debug is True

    def test_environment_names_are_case_insensitive(self, clean_env, monkeypatch):
        monkeypatch.setenv("smart_library_first_user_id", "5000")

        config = LibraryConfig(_env_file=None)

        assert config.first_user_id == 5000

    def test_relative_record_paths_become_absolute(self):
        config = LibraryConfig(_env_file=None, users_file=Path("state/users.dat"))

        assert config.users_file.is_absolute()
        assert config.users_file == Path("state/users.dat").absolute()

    def test_record_file_cannot_be_directory(self, tmp_path):
        with pytest.raises(ValidationError) as exc_info:
            LibraryConfig(_env_file=None, books_file=tmp_path)

        assert "is a directory" in str(exc_info.value)

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("hash_table_size", 0),
            ("max_borrowed_per_user", 0),
            ("max_borrowed_per_user", 101),
            ("first_user_id", 0),
            ("most_borrowed_limit", 0),
        ],
    )
    def test_policy_bounds(self, field, value):
        with pytest.raises(ValidationError):
            LibraryConfig(_env_file=None, **{field: value})

    def test_server_name_validation(self):
        with pytest.raises(ValidationError):
            LibraryConfig(_env_file=None, server_name="ab")

        with pytest.raises(ValidationError):
            LibraryConfig(_env_file=None, server_name="Smart Library")

        with pytest.raises(ValidationError):
            LibraryConfig(_env_file=None, server_name="a" * 51)

    def test_only_stdio_transport(self):
        with pytest.raises(ValidationError):
            LibraryConfig(_env_file=None, transport="http")

    def test_log_level_is_normalized(self):
        config = LibraryConfig(_env_file=None, log_level="warning")
        assert config.log_level == "WARNING"

        with pytest.raises(ValidationError):
            LibraryConfig(_env_file=None, log_level="verbose")

    def test_development_mode(self):
        assert LibraryConfig(_env_file=None, debug=True).is_development is True
        assert LibraryConfig(_env_file=None, log_level="DEBUG").is_development is True
        assert LibraryConfig(_env_file=None).is_development is False

    def test_server_info(self):
        config = LibraryConfig(_env_file=None, server_name="test-library", server_version="1.2.3")

        assert config.server_info == {
            "name": "test-library",
            "version": "1.2.3",
            "transport": "stdio",
        }


class TestConfigSingleton:
    """Test the process-wide configuration instance."""

    def test_get_config_returns_same_instance(self, clean_env):
        assert get_config() is get_config()

    def test_reset_config_rereads_environment(self, clean_env, monkeypatch):
        first = get_config()
        monkeypatch.setenv("SMART_LIBRARY_MOST_BORROWED_LIMIT", "5")

        # Still cached
        assert get_config() is first

        reset_config()
        second = get_config()

        assert second is not first
        assert second.most_borrowed_limit == 5
