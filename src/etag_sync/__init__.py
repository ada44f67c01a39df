"""etag-sync - fingerprint a local file tree and plan uploads/deletes against a remote store."""

__version__ = "0.1.0"
