"""Common test fixtures."""

from pathlib import Path

import pytest

from etag_sync.config import SyncConfig
from etag_sync.sync import FileChangeScanner, SyncService


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Directory the test files are created in."""
    path = tmp_path / "site"
    path.mkdir()
    return path


@pytest.fixture
def sync_config(base_dir: Path, monkeypatch) -> SyncConfig:
    """Config pointing at the test directory, isolated from the environment."""
    for name in ("ETAG_SYNC_BASE_DIR", "ETAG_SYNC_CONCURRENCY", "ETAG_SYNC_HASH_ALGORITHM"):
        monkeypatch.delenv(name, raising=False)
    return SyncConfig(base_dir=base_dir, concurrency=3, _env_file=None)


@pytest.fixture
def file_change_scanner(sync_config: SyncConfig) -> FileChangeScanner:
    return FileChangeScanner(sync_config)


@pytest.fixture
def sync_service(sync_config: SyncConfig, file_change_scanner: FileChangeScanner) -> SyncService:
    return SyncService(sync_config, scanner=file_change_scanner)


def create_test_file(path: Path, content: str = "test content") -> Path:
    """Create a test file with given content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def make_file(base_dir: Path):
    """Factory creating files relative to base_dir."""

    def _make(name: str, content: str = "test content") -> Path:
        return create_test_file(base_dir / name, content)

    return _make
