"""Reconcile a local fingerprint map against a remote one."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from loguru import logger

from etag_sync.exceptions import PreconditionError


@dataclass
class DiffResult:
    """Files to push to and remove from the remote store.

    Attributes:
        to_upload: Local records that are new or whose etag differs remotely
        to_delete: Remote descriptors with no local counterpart, unchanged
    """

    to_upload: Dict[str, Any] = field(default_factory=dict)
    to_delete: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_changes(self) -> int:
        """Total number of files that need remote I/O."""
        return len(self.to_upload) + len(self.to_delete)

    @property
    def has_changes(self) -> bool:
        return self.total_changes > 0


def etag_of(key: str, descriptor: Any) -> str:
    """Read the etag from a fingerprint record, remote listing entry, or plain dict."""
    if isinstance(descriptor, Mapping):
        for name in ("etag", "ETag"):
            if name in descriptor:
                return descriptor[name]
    else:
        value = getattr(descriptor, "etag", None)
        if value is not None:
            return value
    raise PreconditionError(f"No etag for {key!r}: {descriptor!r}")


def detect_file_changes(local: Mapping[str, Any], remote: Mapping[str, Any]) -> DiffResult:
    """
    Compute the uploads and deletes that make ``remote`` match ``local``.

    A path goes to ``to_upload`` if it is missing remotely or its etag differs.
    Paths only present remotely go to ``to_delete`` with their descriptor as is.
    Neither input is modified.

    Raises:
        PreconditionError: If either map is missing or an entry has no etag
    """
    if not isinstance(local, Mapping):
        raise PreconditionError(f"local fingerprint map is required, got {type(local).__name__}")
    if not isinstance(remote, Mapping):
        raise PreconditionError(f"remote fingerprint map is required, got {type(remote).__name__}")

    to_upload = {}
    for path, record in local.items():
        if path not in remote:
            logger.debug(f"New: {path}")
            to_upload[path] = record
        elif etag_of(path, remote[path]) != etag_of(path, record):
            logger.debug(f"Modified: {path}")
            to_upload[path] = record

    remote_only = remote.keys() - local.keys()
    to_delete = {path: descriptor for path, descriptor in remote.items() if path in remote_only}

    logger.debug(f"Diff: {len(to_upload)} to upload, {len(to_delete)} to delete")
    return DiffResult(to_upload=to_upload, to_delete=to_delete)
