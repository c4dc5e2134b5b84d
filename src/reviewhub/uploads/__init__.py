"""Blob store abstraction: where uploaded review images end up."""

import os

_blob_store_instance = None


def get_blob_store():
    """Return the configured blob store (singleton).

    Uses LocalBlobStore by default. Select the in-memory store with
    ``BLOB_STORE=memory``.
    """
    global _blob_store_instance
    if _blob_store_instance is None:
        adapter = os.environ.get("BLOB_STORE", "local")
        if adapter == "local":
            from reviewhub.uploads.local_adapter import LocalBlobStore

            _blob_store_instance = LocalBlobStore(
                directory=os.environ.get("UPLOAD_DIR", "uploads"),
                url_prefix=os.environ.get("UPLOAD_URL_PREFIX", "/uploads"),
            )
        elif adapter == "memory":
            from reviewhub.uploads.fake_adapter import InMemoryBlobStore

            _blob_store_instance = InMemoryBlobStore()
        else:
            raise ValueError(f"Unknown blob store adapter: {adapter}")
    return _blob_store_instance


def set_blob_store(store):
    """Install a specific blob store (tests, custom deployments)."""
    global _blob_store_instance
    _blob_store_instance = store


def reset_blob_store():
    """Reset the blob store singleton (useful for testing)."""
    global _blob_store_instance
    _blob_store_instance = None
