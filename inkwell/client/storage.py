"""
Device storage for the editor client.

Device storage plays the part of browser local storage: a small key/value
store that survives a lost connection. Blogs are cached under
``blog_<id>`` and optimistic snapshots of unsaved edits under
``blog_backup_<id>``. Values are JSON objects.
"""

from logging import getLogger
from pathlib import Path
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote, unquote

import aiofiles
import orjson
from pydantic import ValidationError

from inkwell.configs import file_logger, settings
from inkwell.schemas.blog import BlogDocument

logger = file_logger(getLogger(__name__))

# Errors a storage backend may raise for a single item
STORAGE_ERRORS = (OSError, ValueError)


def cache_key(blog_id: str) -> str:
    return f"blog_{blog_id}"


def backup_key(blog_id: str) -> str:
    return f"blog_backup_{blog_id}"


@runtime_checkable
class DeviceStorage(Protocol):
    """Async key/value storage for JSON objects."""

    async def get_item(self, key: str) -> dict[str, Any] | None: ...

    async def set_item(self, key: str, value: dict[str, Any]) -> None: ...

    async def remove_item(self, key: str) -> None: ...

    async def keys(self) -> list[str]: ...


class MemoryDeviceStorage:
    """Process-local device storage, used by default and in tests."""

    def __init__(self) -> None:
        self._items: dict[str, bytes] = {}

    async def get_item(self, key: str) -> dict[str, Any] | None:
        raw = self._items.get(key)
        return orjson.loads(raw) if raw is not None else None

    async def set_item(self, key: str, value: dict[str, Any]) -> None:
        self._items[key] = orjson.dumps(value)

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    async def keys(self) -> list[str]:
        return list(self._items)


class FileDeviceStorage:
    """
    Device storage that keeps one JSON file per key.

    Files live under ``DEVICE_STORAGE_DIR`` so cached blogs and snapshots
    survive a restart of the client.
    """

    def __init__(self, base_path: Path | None = None) -> None:
        self.base_path = base_path or settings.DEVICE_STORAGE_DIR
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, key: str) -> Path:
        """
        Get the file path for a key.

        Args:
            key: Storage key; escaped so it is always a single file name.

        Returns:
            Path: Full path to the key's JSON file
        """
        return self.base_path / f"{quote(key, safe='')}.json"

    async def get_item(self, key: str) -> dict[str, Any] | None:
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return None
        async with aiofiles.open(file_path, "rb") as f:
            return orjson.loads(await f.read())

    async def set_item(self, key: str, value: dict[str, Any]) -> None:
        async with aiofiles.open(self._get_file_path(key), "wb") as f:
            await f.write(orjson.dumps(value))

    async def remove_item(self, key: str) -> None:
        self._get_file_path(key).unlink(missing_ok=True)

    async def keys(self) -> list[str]:
        return sorted(unquote(path.stem) for path in self.base_path.glob("*.json"))


def get_device_storage() -> DeviceStorage:
    """
    Get the configured device storage.

    Returns the implementation selected by the ``DEVICE_STORAGE`` setting.

    Returns:
        DeviceStorage: Configured device storage instance
    """
    if settings.DEVICE_STORAGE == "file":
        return FileDeviceStorage()
    return MemoryDeviceStorage()


async def load_document(storage: DeviceStorage, key: str) -> BlogDocument | None:
    """Read a stored blog document; unreadable entries count as missing."""
    try:
        data = await storage.get_item(key)
        return BlogDocument.model_validate(data) if data is not None else None
    except (*STORAGE_ERRORS, ValidationError):
        logger.warning(f"Could not read {key} from device storage", exc_info=True)
        return None


async def store_document(storage: DeviceStorage, key: str, document: BlogDocument) -> None:
    """Write a blog document, logging and ignoring storage failures."""
    try:
        await storage.set_item(key, document.model_dump(mode="json", by_alias=True))
    except STORAGE_ERRORS:
        logger.warning(f"Could not write {key} to device storage", exc_info=True)


async def discard(storage: DeviceStorage, key: str) -> None:
    try:
        await storage.remove_item(key)
    except OSError:
        logger.warning(f"Could not remove {key} from device storage", exc_info=True)
