import asyncio
from pathlib import Path

from src.app.services.storage import IStorage, StorageError


class LocalStorage(IStorage):
    """Filesystem storage rooted at a directory. Keys map to relative paths."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        safe_key = key.lstrip("/").replace("\\", "/")
        path = (self.root / safe_key).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError("Storage key escapes storage root")
        return path

    def _write(self, key: str, data: bytes) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        # "xb" refuses to overwrite: a version path is written exactly once
        fh = path.open("xb")
        try:
            with fh:
                fh.write(data)
        except OSError:
            # Never leave a partial file behind
            path.unlink(missing_ok=True)
            raise

    async def write(self, key: str, data: bytes, content_type: str | None = None) -> None:
        try:
            await asyncio.to_thread(self._write, key, data)
        except FileExistsError as e:
            raise StorageError(f"Storage key already exists: {key}") from e
        except OSError as e:
            raise StorageError(f"Failed to write {key}") from e

    async def read(self, key: str) -> bytes:
        try:
            return await asyncio.to_thread(self._path(key).read_bytes)
        except OSError as e:
            raise StorageError(f"Failed to read {key}") from e

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._path(key).exists)

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._path(key).unlink, True)
        except OSError as e:
            raise StorageError(f"Failed to delete {key}") from e
