"""Configuration management for the Smart Library catalog.

Settings are read from the environment (``SMART_LIBRARY_`` prefix) or a
``.env`` file and validated with Pydantic v2:

1. Server Metadata - name and version reported by the front end
2. Storage - locations of the books and users record files
3. Catalog Policy - hash table size, borrowing limit, first user id
4. Development - debug flag and log level
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LibraryConfig(BaseSettings):
    """Catalog and server configuration.

    The core indexes never read this object themselves; ``Library.from_config``
    and the server pass the relevant values down explicitly.
    """

    model_config = SettingsConfigDict(
        # Use SMART_LIBRARY_ prefix for all env vars
        env_prefix="SMART_LIBRARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="smart-library",
        description="Server name announced to clients",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    transport: str = Field(
        default="stdio",
        description="Front end transport",
        pattern=r"^stdio$",
    )

    # === Storage ===

    books_file: Path = Field(
        default=Path("data/books.dat"),
        description="Pipe-delimited book records file",
        validate_default=True,
    )

    users_file: Path = Field(
        default=Path("data/users.dat"),
        description="Pipe-delimited user records file",
        validate_default=True,
    )

    # === Catalog Policy ===

    hash_table_size: int = Field(
        default=101,
        description="Number of buckets in the ISBN hash table (fixed for the process lifetime)",
        ge=1,
        le=100003,
    )

    max_borrowed_per_user: int = Field(
        default=10,
        description="Maximum number of books a user may hold at once",
        ge=1,
        le=100,
    )

    first_user_id: int = Field(
        default=1001,
        description="Id assigned to the first registered user",
        ge=1,
    )

    most_borrowed_limit: int = Field(
        default=10,
        description="Number of entries in the most borrowed report",
        ge=1,
        le=100,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Validation Methods ===

    @field_validator("books_file", "users_file")
    @classmethod
    def validate_record_file(cls, v: Path) -> Path:
        """Make record file paths absolute and reject directories."""
        abs_path = v.absolute()
        if abs_path.is_dir():
            raise ValueError(f"Record file {abs_path} is a directory")
        return abs_path

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug or self.log_level == "DEBUG"

    @property
    def server_info(self) -> dict[str, str]:
        """Server information reported at startup."""
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LibraryConfig | None = None


def get_config() -> LibraryConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LibraryConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
