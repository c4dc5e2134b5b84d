"""In-memory blob store: for tests and throwaway development servers."""

from reviewhub.uploads.local_adapter import blob_key
from reviewhub.uploads.port import BlobStorePort, StoredBlob


class InMemoryBlobStore(BlobStorePort):
    def __init__(self, url_prefix: str = "/uploads"):
        self.url_prefix = url_prefix.rstrip("/")
        self.blobs: dict[str, tuple[bytes, str]] = {}

    def put(self, data: bytes, content_type: str, filename: str | None = None) -> StoredBlob:
        key = blob_key(content_type, filename)
        self.blobs[key] = (data, content_type)
        return StoredBlob(key=key, url=f"{self.url_prefix}/{key}", content_type=content_type, size=len(data))

    def get(self, key: str) -> bytes:
        return self.blobs[key][0]
