from abc import ABC, abstractmethod


class StorageError(RuntimeError):
    pass


class IStorage(ABC):
    """Blob storage for document version content - application layer"""

    @abstractmethod
    async def write(self, key: str, data: bytes, content_type: str | None = None) -> None:
        """Store data under key. Raises StorageError if the key already exists."""
        pass

    @abstractmethod
    async def read(self, key: str) -> bytes:
        """Read stored data. Raises StorageError if missing or unreadable."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove data; missing keys are ignored."""
        pass
