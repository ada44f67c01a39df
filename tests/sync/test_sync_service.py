"""Test planning a sync end to end."""

import hashlib

import pytest

from etag_sync.exceptions import ExecutorError
from etag_sync.models import dump_snapshot, parse_snapshot
from etag_sync.sync import SyncService


def md5_etag(content: str) -> str:
    return f'"{hashlib.md5(content.encode()).hexdigest()}"'


@pytest.mark.asyncio
async def test_plan_first_sync(sync_service: SyncService, make_file):
    """With nothing remote every file is uploaded."""
    make_file("index.html", "home")
    make_file("about/index.html", "about")

    changes = await sync_service.plan(["index.html", "about/index.html"], {})

    assert set(changes.to_upload) == {"index.html", "about/index.html"}
    assert changes.to_delete == {}


@pytest.mark.asyncio
async def test_plan_against_remote(sync_service: SyncService, make_file):
    """Unchanged files are skipped, changed ones uploaded, vanished ones deleted."""
    make_file("same.txt", "same")
    make_file("changed.txt", "new content")
    make_file("added.txt", "added")
    remote = {
        "same.txt": {"ETag": md5_etag("same"), "Size": 4},
        "changed.txt": {"ETag": md5_etag("old content"), "Size": 11},
        "removed.txt": {"ETag": md5_etag("removed"), "Size": 7},
    }

    changes = await sync_service.plan(["same.txt", "changed.txt", "added.txt"], remote)

    assert set(changes.to_upload) == {"changed.txt", "added.txt"}
    assert changes.to_upload["changed.txt"].etag == md5_etag("new content")
    assert changes.to_delete == {"removed.txt": remote["removed.txt"]}


@pytest.mark.asyncio
async def test_plan_against_previous_snapshot(sync_service: SyncService, make_file):
    """A snapshot of the last run makes the next run a no-op."""
    make_file("a.txt", "a")
    make_file("b/c.txt", "c")
    names = ["a.txt", "b/c.txt"]

    first = await sync_service.plan(names, {})
    snapshot = parse_snapshot(dump_snapshot(first.to_upload))

    second = await sync_service.plan(names, snapshot)

    assert not second.has_changes


@pytest.mark.asyncio
async def test_plan_fails_on_missing_file(sync_service: SyncService, make_file):
    """A file that vanished before hashing fails the plan."""
    make_file("a.txt", "a")

    with pytest.raises(ExecutorError):
        await sync_service.plan(["a.txt", "gone.txt"], {})
