"""A directory of numbered chunk files sharing a common name prefix."""

from __future__ import annotations

import asyncio
import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

_INDEX_PATTERN = re.compile(r"\+?[0-9]+")
_USIZE_MAX = (1 << 64) - 1


class StorageDirectoryError(Exception):
    """Raised when a storage directory operation fails."""


def _parse_index(text: str) -> Optional[int]:
    if not _INDEX_PATTERN.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _USIZE_MAX else None


class StorageDirectory:
    """Stores chunks as files named ``<category><index>`` inside one directory."""

    def __init__(self, path: Union[str, "os.PathLike[str]"], category: str) -> None:
        self.path = Path(path)
        self.category = category
        self._last_index: Optional[int] = None

    @classmethod
    async def create(
        cls, path: Union[str, "os.PathLike[str]"], category: str
    ) -> StorageDirectory:
        """Create the directory if needed and return a storage over it."""
        directory = Path(path)
        try:
            await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageDirectoryError(f"I/O error occurred: {exc}") from exc
        logger.debug("StorageDirectory path=%s category=%s", directory, category)
        return cls(directory, category)

    @property
    def last_index(self) -> Optional[int]:
        """The highest chunk index known, or None when there is none."""
        return self._last_index

    async def list_files(self) -> list[Path]:
        """Return the regular files in the directory, sorted by path."""

        def scan() -> list[Path]:
            return sorted(entry for entry in self.path.iterdir() if entry.is_file())

        try:
            return await asyncio.to_thread(scan)
        except OSError as exc:
            raise StorageDirectoryError(f"I/O error occurred: {exc}") from exc

    async def load_bytes_from_file(self, filename: str) -> bytes:
        """Return the content of ``filename`` within the directory."""
        file_path = self.path / filename
        try:
            return await asyncio.to_thread(file_path.read_bytes)
        except FileNotFoundError as exc:
            raise StorageDirectoryError(f"File not found: {file_path}") from exc
        except OSError as exc:
            raise StorageDirectoryError(f"I/O error occurred: {exc}") from exc

    async def save_bytes_to_file(self, filename: str, data: bytes) -> None:
        """Write ``data`` to ``filename`` within the directory, replacing it."""
        file_path = self.path / filename
        logger.debug("StorageDirectory saving %s", filename)

        def write() -> None:
            try:
                handle = open(file_path, "wb")
            except OSError as exc:
                raise StorageDirectoryError(f"File creation failed: {exc}") from exc
            with handle:
                try:
                    handle.write(data)
                except OSError as exc:
                    raise StorageDirectoryError(f"I/O error occurred: {exc}") from exc

        await asyncio.to_thread(write)

    async def file_exists(self, filename: str) -> bool:
        """Tell whether ``filename`` exists within the directory."""
        return await asyncio.to_thread((self.path / filename).exists)

    async def init(self) -> None:
        """Scan the directory for the highest existing chunk index."""

        def scan() -> Optional[list[str]]:
            try:
                return [entry.name for entry in os.scandir(self.path)]
            except OSError:
                return None

        names = await asyncio.to_thread(scan)
        if names is None:
            return
        indices = (
            _parse_index(name[len(self.category):])
            for name in names
            if name.startswith(self.category)
        )
        self._last_index = max((i for i in indices if i is not None), default=None)

    async def add_chunk(self, chunk: bytes) -> None:
        """Store ``chunk`` under the current last index, then advance the index."""
        index = self._last_index if self._last_index is not None else 0
        await self.save_bytes_to_file(f"{self.category}{index}", bytes(chunk))
        self._last_index = 0 if self._last_index is None else self._last_index + 1

    async def get_chunk(self, height: int) -> bytes:
        """Return the chunk stored under index ``height``."""
        return await self.load_bytes_from_file(f"{self.category}{height}")