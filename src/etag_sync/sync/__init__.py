from .diff import DiffResult, detect_file_changes
from .file_change_scanner import FileChangeScanner, collect_local_fingerprints
from .sync_service import SyncService

__all__ = [
    "DiffResult",
    "FileChangeScanner",
    "SyncService",
    "collect_local_fingerprints",
    "detect_file_changes",
]
