"""Blob store interface and in-memory implementation.

Blobs are addressed by the lowercase hex SHA-256 of their encrypted bytes.
Network-backed stores live outside this package and implement BlobStore.
"""

from abc import ABC, abstractmethod

from .types import BlobNotFoundError


class BlobStore(ABC):
    """Interface for content-addressed encrypted blob storage."""

    @abstractmethod
    async def put(self, hash_hex: str, data: bytes) -> None:
        """Store encrypted bytes under their hash."""
        ...

    @abstractmethod
    async def get(self, hash_hex: str) -> bytes:
        """Fetch encrypted bytes by hash."""
        ...

    @abstractmethod
    async def has(self, hash_hex: str) -> bool:
        """Check if a blob exists."""
        ...

    @abstractmethod
    async def delete(self, hash_hex: str) -> None:
        """Delete a blob."""
        ...


class InMemoryBlobStore(BlobStore):
    """
    In-memory implementation of BlobStore (for testing and offline use).

    Content is lost when the process exits.
    """

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    async def put(self, hash_hex: str, data: bytes) -> None:
        """Store encrypted bytes; storing the same hash again is a no-op."""
        self._blobs.setdefault(hash_hex.lower(), bytes(data))

    async def get(self, hash_hex: str) -> bytes:
        """Fetch encrypted bytes by hash."""
        data = self._blobs.get(hash_hex.lower())
        if data is None:
            raise BlobNotFoundError(hash_hex)
        return data

    async def has(self, hash_hex: str) -> bool:
        """Check if a blob exists."""
        return hash_hex.lower() in self._blobs

    async def delete(self, hash_hex: str) -> None:
        """Delete a blob."""
        self._blobs.pop(hash_hex.lower(), None)

    def __len__(self) -> int:
        return len(self._blobs)
