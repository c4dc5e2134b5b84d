"""Blob store port: abstract interface for image storage backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredBlob:
    key: str
    url: str
    content_type: str
    size: int


class BlobStorePort(ABC):
    """Abstract interface for blob store adapters."""

    @abstractmethod
    def put(self, data: bytes, content_type: str, filename: str | None = None) -> StoredBlob:
        """Persist ``data`` under a fresh key and return where it can be fetched."""
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the bytes stored under ``key``.

        Raises:
            KeyError: when nothing is stored under ``key``.
        """
        ...
