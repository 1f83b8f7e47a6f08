"""
Destinations for response bodies: an in-memory buffer or a file written at a
fixed starting offset.
"""

import logging
from pathlib import Path

import aiofiles

log = logging.getLogger(__name__)


class MemorySink:
    """Accumulates the body in memory."""

    def __init__(self):
        self._buffer = bytearray()

    @property
    def position(self) -> int:
        return len(self._buffer)

    async def write(self, data: bytes) -> None:
        self._buffer.extend(data)

    async def rewind(self) -> None:
        self._buffer.clear()

    async def close(self) -> None:
        pass

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


class FileSink:
    """
    Writes sequentially into a file starting at `offset`.

    Each parallel segment owns one of these with its own handle, so seeks and
    writes of different segments never interleave on a shared file position.
    """

    def __init__(self, path: Path, offset: int = 0, truncate: bool = True):
        self.path = Path(path)
        self.offset = offset
        self._truncate = truncate
        self._file = None
        self._written = 0

    @property
    def position(self) -> int:
        return self._written

    async def open(self) -> "FileSink":
        if self._truncate:
            self._file = await aiofiles.open(self.path, "wb")
        else:
            self._file = await aiofiles.open(self.path, "r+b")
        if self.offset:
            await self._file.seek(self.offset)
        return self

    async def write(self, data: bytes) -> None:
        if self._file is None:
            await self.open()
        await self._file.write(data)
        self._written += len(data)

    async def rewind(self) -> None:
        """Discards everything written so far by this sink."""
        if self._file is None:
            return
        await self._file.seek(self.offset)
        if self._truncate:
            await self._file.truncate(self.offset)
        self._written = 0

    async def close(self) -> None:
        if self._file is not None:
            await self._file.close()
            self._file = None

    async def __aenter__(self) -> "FileSink":
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


async def preallocate(path: Path, size: int) -> None:
    """Creates (or truncates) `path` and extends it to `size` bytes."""
    async with aiofiles.open(path, "wb") as f:
        await f.truncate(size)
    log.debug(f"Preallocated {size} bytes for '{path.name}'")
