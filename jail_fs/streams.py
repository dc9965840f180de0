"""Async byte streams handed out by ``read`` and ``write``.

The caller owns a stream once it is returned and is responsible for closing it.
"""

import asyncio
import logging
from typing import BinaryIO

from jail_fs.storage.base import StorageBackend

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def _mark_retrieved(task: asyncio.Task) -> None:
    # the failure is already logged; wait_for_cleanup() still re-raises it
    if not task.cancelled():
        task.exception()


class ByteReadStream:
    """Reads a file opened by the storage backend without blocking the loop."""

    def __init__(self, handle: BinaryIO, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._handle = handle
        self.path = path
        self.chunk_size = chunk_size

    @property
    def closed(self) -> bool:
        return self._handle.closed

    async def read(self, size: int = -1) -> bytes:
        return await asyncio.to_thread(self._handle.read, size)

    async def close(self) -> None:
        if not self._handle.closed:
            await asyncio.to_thread(self._handle.close)

    def __aiter__(self) -> "ByteReadStream":
        return self

    async def __anext__(self) -> bytes:
        chunk = await self.read(self.chunk_size)
        if not chunk:
            raise StopAsyncIteration
        return chunk

    async def __aenter__(self) -> "ByteReadStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class ByteWriteStream:
    """
    Writes to a file opened by the storage backend.

    If a write, flush or close fails, the partially written file is removed.
    The removal runs as a task owned by the stream (``cleanup_task``) and the
    original error is re-raised straight away; callers that care about the
    outcome of the removal can ``await wait_for_cleanup()``.
    """

    def __init__(self, handle: BinaryIO, path: str, storage: StorageBackend) -> None:
        self._handle = handle
        self.path = path
        self._storage = storage
        self.bytes_written = 0
        self.cleanup_task: asyncio.Task | None = None

    @property
    def closed(self) -> bool:
        return self._handle.closed

    async def write(self, data: bytes) -> int:
        try:
            written = await asyncio.to_thread(self._handle.write, data)
        except OSError:
            await self._abort()
            raise
        self.bytes_written += written
        return written

    async def close(self) -> None:
        if self._handle.closed:
            return
        try:
            await asyncio.to_thread(self._handle.close)
        except OSError:
            await self._abort()
            raise

    async def wait_for_cleanup(self) -> bool:
        """
        Waits for the partial-file removal started by a failed write.

        Returns:
            True if a removal ran and succeeded, False if no write failed.

        Raises:
            OSError: If the partial file could not be removed.
        """
        if self.cleanup_task is None:
            return False
        await self.cleanup_task
        return True

    async def _abort(self) -> None:
        if self.cleanup_task is not None:
            return
        if not self._handle.closed:
            try:
                await asyncio.to_thread(self._handle.close)
            except OSError as e:
                logger.debug(f"Ignoring close error on failed stream {self.path}: {e}")
        logger.warning(f"Write to {self.path} failed, removing partial file")
        self.cleanup_task = asyncio.create_task(self._remove_partial_file())
        self.cleanup_task.add_done_callback(_mark_retrieved)

    async def _remove_partial_file(self) -> None:
        try:
            await self._storage.unlink(self.path)
        except OSError as e:
            logger.warning(f"Could not remove partial file {self.path}: {e}")
            raise

    async def __aenter__(self) -> "ByteWriteStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
