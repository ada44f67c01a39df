"""Fingerprint local files for comparison with the remote store."""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from loguru import logger

from etag_sync.config import SyncConfig
from etag_sync.exceptions import PreconditionError
from etag_sync.models import FingerprintRecord, LocalFingerprintMap
from etag_sync.utils.file_utils import (
    compute_file_hash,
    fingerprint_from_digest,
    is_regular_file,
    stat_file,
)
from etag_sync.utils.parallel import gather_bounded

# matches the remote store's etag for single-part uploads
FINGERPRINT_ALGORITHM = "md5"


async def collect_local_fingerprints(
    file_names: Iterable[str],
    base_dir: Union[str, Path],
    concurrency: int,
    *,
    algorithm: str = FINGERPRINT_ALGORITHM,
) -> LocalFingerprintMap:
    """
    Fingerprint every regular file in ``file_names``.

    Names are resolved against ``base_dir``. Directories, special files and
    dangling symlinks are skipped. The result is keyed by the names as given.

    Args:
        file_names: Relative file names, e.g. from a glob over base_dir
        base_dir: Directory the names are relative to
        concurrency: Maximum number of files stat'ed/hashed at once
        algorithm: hashlib algorithm used for the fingerprint

    Returns:
        Dict mapping relative file name to FingerprintRecord

    Raises:
        PreconditionError: If arguments are missing or concurrency is not positive
        ExecutorError: If any file fails to stat or hash; nothing is returned then
    """
    if file_names is None or base_dir is None:
        raise PreconditionError("file_names and base_dir are required")
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise PreconditionError(f"concurrency must be a positive integer, got {concurrency!r}")

    base_path = Path(base_dir)
    fingerprints: Dict[str, FingerprintRecord] = {}

    async def fingerprint(file_name: str) -> Optional[FingerprintRecord]:
        path = base_path / file_name
        if not is_regular_file(await stat_file(path)):
            logger.debug(f"Skipping non-regular file: {file_name}")
            return None

        record = fingerprint_from_digest(await compute_file_hash(path, algorithm))
        # one lane per name, so keys never collide
        fingerprints[file_name] = record
        logger.debug(f"{file_name} {record.etag}")
        return record

    names = list(file_names)
    logger.debug(f"Fingerprinting {len(names)} files in {base_path}")
    await gather_bounded(names, fingerprint, concurrency)

    logger.debug(f"Fingerprinted {len(fingerprints)} of {len(names)} files")
    return fingerprints


class FileChangeScanner:
    """Collects local fingerprints using the settings of a SyncConfig."""

    def __init__(self, config: SyncConfig):
        self.config = config

    async def collect(self, file_names: Iterable[str]) -> LocalFingerprintMap:
        """Fingerprint ``file_names`` under the configured base directory."""
        return await collect_local_fingerprints(
            file_names,
            self.config.base_dir,
            self.config.concurrency,
            algorithm=self.config.hash_algorithm,
        )
