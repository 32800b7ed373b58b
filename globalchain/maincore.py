"""Chain core: stores confirmed blocks on disk and keeps their headers in memory."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Union

from .bigint import bigint_from_compact, compact_from_bigint
from .mainblock import Mainblock, MainblockError, unserialize_mainblock
from .mainheader import Mainheader
from .storage_directory import StorageDirectory, StorageDirectoryError

logger = logging.getLogger(__name__)

MAINBLOCKS_SUBDIR = "Mainblocks"
MAINBLOCK_CATEGORY = "Mainblock"
DEFAULT_CONFIRMATION_DEPTH = 6
RETARGET_INTERVAL = 4032
TARGET_BLOCK_SECONDS = 300
_U64_MASK = (1 << 64) - 1


class MaincoreInnerError(Exception):
    """Raised when the chain core cannot complete an operation."""


class MaincoreInner:
    """Confirmed blocks stored under ``path`` plus an in-memory header list."""

    def __init__(
        self,
        path: Union[str, "os.PathLike[str]"],
        storage: StorageDirectory,
        confirmation_depth: int = DEFAULT_CONFIRMATION_DEPTH,
    ) -> None:
        self.path = Path(path)
        self.storage = storage
        self.headers: list[Mainheader] = []
        self.confirmation_depth = confirmation_depth

    @classmethod
    async def create(cls, path: Union[str, "os.PathLike[str]"]) -> MaincoreInner:
        """Create the directories if needed and return a core over them."""
        directory = Path(path)
        try:
            await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise MaincoreInnerError(f"I/O error: {exc}") from exc
        logger.debug("MaincoreInner path=%s", directory)
        try:
            storage = await StorageDirectory.create(
                directory / MAINBLOCKS_SUBDIR, MAINBLOCK_CATEGORY
            )
        except StorageDirectoryError as exc:
            raise MaincoreInnerError(f"Storage directory error: {exc}") from exc
        return cls(directory, storage)

    async def init(self) -> None:
        """Scan the block storage for the blocks already present."""
        try:
            await self.storage.init()
        except StorageDirectoryError as exc:
            raise MaincoreInnerError(f"Storage directory error: {exc}") from exc
        if self.storage.last_index is None:
            logger.debug("storage files last index not initialized")
        else:
            logger.debug("storage files last index: %d", self.storage.last_index)

    @property
    def mainblocks_count(self) -> int:
        """The number of blocks the storage holds."""
        last = self.storage.last_index
        return 0 if last is None else last + 1

    async def add_confirmed_mainblock(self, mainblock: Mainblock) -> None:
        """Record the block's header in memory and store the block."""
        self.headers.append(mainblock.header)
        if len(self.headers) > 1:
            delta = self.headers[-1].timestamp - self.headers[-2].timestamp
            logger.debug("headers=%d deltatimestamp=%d", len(self.headers), delta)
        try:
            await self.storage.add_chunk(mainblock.serialize())
        except StorageDirectoryError as exc:
            raise MaincoreInnerError(f"Storage directory error: {exc}") from exc

    async def get_mainblock(self, height: int) -> Mainblock:
        """Load and decode the stored block at ``height``."""
        try:
            raw = await self.storage.get_chunk(height)
        except StorageDirectoryError as exc:
            raise MaincoreInnerError(f"Storage directory error: {exc}") from exc
        try:
            return unserialize_mainblock(raw)
        except MainblockError as exc:
            raise MaincoreInnerError(f"Mainblock error: {exc}") from exc

    async def get_mainheader(self, height: int) -> Mainheader:
        """Return the header of the stored block at ``height``."""
        return (await self.get_mainblock(height)).header

    async def load_mainheaders(self) -> None:
        """Append the headers of every stored block to the in-memory list."""
        count = self.mainblocks_count
        logger.debug("loading mainheaders - number of mainblocks %d", count)
        for height in range(count):
            self.headers.append(await self.get_mainheader(height))
        logger.debug("load_headers finished with %d mainheaders", len(self.headers))

    def last_inmem_mainheader(self) -> Mainheader:
        """Return the most recent header held in memory."""
        if not self.headers:
            raise MaincoreInnerError("no mainheaders in memory")
        return self.headers[-1]

    def inmem_mainheader(self, height: int) -> Mainheader:
        """Return the in-memory header at ``height``."""
        if not 0 <= height < len(self.headers):
            raise MaincoreInnerError(
                f"mainheader height {height} out of range 0..{len(self.headers)}"
            )
        return self.headers[height]

    def get_newbits(self) -> int:
        """Return the target bits for the next block.

        Every ``RETARGET_INTERVAL`` headers the previous target is scaled by the
        time actually taken over the interval against the ideal time.
        """
        if not self.headers:
            raise MaincoreInnerError("no mainheaders in memory")
        height = len(self.headers)
        previous = self.headers[-1]
        if height % RETARGET_INTERVAL:
            return previous.bits

        window = self.headers[height - RETARGET_INTERVAL:]
        summed = 0
        for before, after in zip(window, window[1:]):
            delta = after.timestamp - before.timestamp
            if delta == 0:
                logger.debug("zero deltatimestamp at timestamp %d", after.timestamp)
            summed += delta
        ideal = (RETARGET_INTERVAL - 1) * TARGET_BLOCK_SECONDS
        scaled = bigint_from_compact(previous.bits) * (summed & _U64_MASK) // ideal
        return compact_from_bigint(scaled)