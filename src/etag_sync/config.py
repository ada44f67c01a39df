"""Configuration management for etag-sync."""

import hashlib
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from etag_sync.exceptions import PreconditionError
from etag_sync.utils.file_utils import new_digest

DEFAULT_CONCURRENCY = 5
DEFAULT_HASH_ALGORITHM = "md5"


class SyncConfig(BaseSettings):
    """Settings for one fingerprint/diff pass.

    Built once by the caller and passed explicitly to the services that need it.
    Values can come from keyword arguments, ``ETAG_SYNC_*`` environment variables
    or a ``.env`` file.
    """

    base_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory relative file names are resolved against",
    )
    concurrency: int = Field(
        default=DEFAULT_CONCURRENCY,
        ge=1,
        description="Maximum number of files processed at the same time",
    )
    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="hashlib algorithm used to fingerprint file content",
    )
    log_level: str = Field(default="INFO", description="Log level for setup_logging")

    model_config = SettingsConfigDict(
        env_prefix="ETAG_SYNC_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
    )

    @field_validator("base_dir")
    @classmethod
    def resolve_base_dir(cls, v: Path) -> Path:
        """Store the base directory as an absolute path."""
        return v.expanduser().resolve()

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, v: str) -> str:
        """Ensure hashlib knows the algorithm and it has a fixed digest size."""
        name = v.strip().lower()
        if name not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported hash algorithm: {v}")
        try:
            new_digest(name)
        except PreconditionError as e:
            raise ValueError(str(e)) from e
        return name

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure loguru knows the level name."""
        name = v.strip().upper()
        try:
            logger.level(name)
        except ValueError as e:
            raise ValueError(f"Unknown log level: {v}") from e
        return name
