"""Utilities for file operations."""

import base64
import errno
import hashlib
import os
import stat
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os
from loguru import logger

from etag_sync.exceptions import FileAccessError, PreconditionError
from etag_sync.models import FingerprintRecord

CHUNK_SIZE = 64 * 1024


def new_digest(algorithm: str):
    """Create a hashlib object for a content fingerprint (not a security primitive)."""
    try:
        digest = hashlib.new(algorithm, usedforsecurity=False)
    except (ValueError, TypeError) as e:
        raise PreconditionError(f"Unsupported hash algorithm: {algorithm!r}") from e
    # variable-length XOFs (shake_*) need an output length
    if digest.digest_size == 0:
        raise PreconditionError(f"Hash algorithm has no fixed digest size: {algorithm!r}")
    return digest


async def compute_file_hash(
    path: Union[str, Path], algorithm: str = "md5", chunk_size: int = CHUNK_SIZE
) -> bytes:
    """
    Compute the digest of a file, reading it in chunks.

    Args:
        path: File to hash
        algorithm: Any hashlib algorithm name
        chunk_size: Bytes read per call

    Returns:
        Raw digest bytes

    Raises:
        PreconditionError: If the algorithm or chunk size is invalid
        FileAccessError: If the file cannot be opened or read
    """
    if chunk_size < 1:
        raise PreconditionError(f"chunk_size must be positive, got {chunk_size}")
    digest = new_digest(algorithm)

    try:
        async with aiofiles.open(path, "rb") as f:
            while chunk := await f.read(chunk_size):
                digest.update(chunk)
    except OSError as e:
        logger.error(f"Failed to hash {path}: {e}")
        raise FileAccessError(path, e) from e

    return digest.digest()


async def stat_file(path: Union[str, Path]) -> Optional[os.stat_result]:
    """
    Stat a path, following symlinks.

    Returns:
        The stat result, or None if path is a broken symlink (missing target or a loop)

    Raises:
        FileAccessError: If the path cannot be stat'ed
    """
    try:
        return await aiofiles.os.stat(path)
    except FileNotFoundError as e:
        if await aiofiles.os.path.islink(path):
            logger.debug(f"Dangling symlink: {path}")
            return None
        logger.error(f"Failed to stat {path}: {e}")
        raise FileAccessError(path, e) from e
    except OSError as e:
        if e.errno == errno.ELOOP:
            logger.debug(f"Symlink loop: {path}")
            return None
        logger.error(f"Failed to stat {path}: {e}")
        raise FileAccessError(path, e) from e


def is_regular_file(file_stat: Optional[os.stat_result]) -> bool:
    return file_stat is not None and stat.S_ISREG(file_stat.st_mode)


def fingerprint_from_digest(digest: bytes) -> FingerprintRecord:
    """Build the etag/base64 pair the remote store uses for a digest."""
    return FingerprintRecord(
        etag=f'"{digest.hex()}"',
        content_digest_b64=base64.b64encode(digest).decode("ascii"),
    )
