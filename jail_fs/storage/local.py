import asyncio
import os
from typing import BinaryIO, override

from jail_fs.storage.base import StorageBackend


class LocalStorage(StorageBackend):
    """
    Storage backend on the local disk.

    Every primitive runs in a worker thread so the event loop only suspends at
    the storage call boundary.
    """

    @override
    async def stat(self, path: str) -> os.stat_result:
        return await asyncio.to_thread(os.stat, path)

    @override
    async def readdir(self, path: str) -> list[str]:
        return await asyncio.to_thread(os.listdir, path)

    @override
    async def access(self, path: str, mode: int = os.F_OK) -> bool:
        return await asyncio.to_thread(os.access, path, mode)

    @override
    async def open_read_stream(self, path: str) -> BinaryIO:
        return await asyncio.to_thread(open, path, "rb")

    @override
    async def open_write_stream(self, path: str, append: bool = False) -> BinaryIO:
        return await asyncio.to_thread(open, path, "ab" if append else "wb")

    @override
    async def unlink(self, path: str) -> None:
        await asyncio.to_thread(os.unlink, path)

    @override
    async def rmdir(self, path: str) -> None:
        await asyncio.to_thread(os.rmdir, path)

    @override
    async def mkdir(self, path: str) -> None:
        await asyncio.to_thread(os.mkdir, path)

    @override
    async def rename(self, src: str, dst: str) -> None:
        await asyncio.to_thread(os.rename, src, dst)

    @override
    async def chmod(self, path: str, mode: int) -> None:
        await asyncio.to_thread(os.chmod, path, mode)
