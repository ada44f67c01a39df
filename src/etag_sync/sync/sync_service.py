"""Service for planning a sync between the local tree and the remote store."""

from typing import Any, Iterable, Mapping, Optional

from loguru import logger

from etag_sync.config import SyncConfig
from etag_sync.sync.diff import DiffResult, detect_file_changes
from etag_sync.sync.file_change_scanner import FileChangeScanner


class SyncService:
    """Fingerprints local files and diffs them against the remote listing.

    The plan only says what to upload and delete; carrying it out is up to the
    caller's remote store client.
    """

    def __init__(self, config: SyncConfig, scanner: Optional[FileChangeScanner] = None):
        self.config = config
        self.scanner = scanner or FileChangeScanner(config)

    async def plan(self, file_names: Iterable[str], remote: Mapping[str, Any]) -> DiffResult:
        """Compute uploads and deletes for ``file_names`` against ``remote``."""
        local = await self.scanner.collect(file_names)
        changes = detect_file_changes(local, remote)

        logger.info(
            f"Found {changes.total_changes} changes in {self.config.base_dir}: "
            f"{len(changes.to_upload)} to upload, {len(changes.to_delete)} to delete, "
            f"{len(local) - len(changes.to_upload)} unchanged"
        )
        return changes
