"""Fingerprint records and the snapshot data format.

A snapshot is a JSON object mapping a relative path to the fingerprint the
remote store last held for it::

    {"images/logo.png": {"etag": "\\"5d41...\\"", "contentMD5": "XUFAKrxLKna5cZ2REBfFkg=="}}

The same shape is produced by ``dump_snapshot`` so snapshots written by older
runs stay readable.
"""

from typing import Dict, Mapping, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from etag_sync.exceptions import SnapshotError


class FingerprintRecord(BaseModel):
    """Content identity of one file at one point in time."""

    model_config = ConfigDict(frozen=True)

    # quoted lowercase hex digest, compared verbatim against the remote etag
    etag: str = Field(validation_alias=AliasChoices("etag", "ETag"))
    content_digest_b64: str = Field(
        validation_alias=AliasChoices("content_digest_b64", "contentMD5"),
        serialization_alias="contentMD5",
    )


LocalFingerprintMap = Dict[str, FingerprintRecord]

_snapshot_adapter = TypeAdapter(Dict[str, FingerprintRecord])


def parse_snapshot(data: Union[str, bytes, Mapping]) -> LocalFingerprintMap:
    """Parse snapshot data into fingerprint records.

    Args:
        data: JSON text, or an already decoded mapping

    Returns:
        Dict mapping relative path to FingerprintRecord

    Raises:
        SnapshotError: If the data is not a valid snapshot
    """
    try:
        if isinstance(data, (str, bytes)):
            return _snapshot_adapter.validate_json(data)
        return _snapshot_adapter.validate_python(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e


def dump_snapshot(records: Mapping[str, FingerprintRecord]) -> Dict[str, Dict[str, str]]:
    """Convert fingerprint records into the JSON-compatible snapshot format."""
    return _snapshot_adapter.dump_python(dict(records), by_alias=True)


def snapshot_to_json(records: Mapping[str, FingerprintRecord], indent: Union[int, None] = None) -> str:
    """Serialize fingerprint records to snapshot JSON text."""
    return _snapshot_adapter.dump_json(dict(records), by_alias=True, indent=indent).decode("utf-8")
