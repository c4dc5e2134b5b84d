"""Local filesystem blob store: files under a directory served by the app."""

import mimetypes
from pathlib import Path
from uuid import uuid4

from reviewhub.uploads.port import BlobStorePort, StoredBlob


def blob_key(content_type: str, filename: str | None = None) -> str:
    """A fresh, collision-free key keeping the original file extension."""
    suffix = Path(filename).suffix.lower() if filename else ""
    if not suffix:
        suffix = mimetypes.guess_extension(content_type) or ""
    return f"{uuid4().hex}{suffix}"


class LocalBlobStore(BlobStorePort):
    def __init__(self, directory: str = "uploads", url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def put(self, data: bytes, content_type: str, filename: str | None = None) -> StoredBlob:
        self.directory.mkdir(parents=True, exist_ok=True)
        key = blob_key(content_type, filename)
        (self.directory / key).write_bytes(data)
        return StoredBlob(key=key, url=f"{self.url_prefix}/{key}", content_type=content_type, size=len(data))

    def get(self, key: str) -> bytes:
        path = self.directory / Path(key).name
        if not path.is_file():
            raise KeyError(key)
        return path.read_bytes()
