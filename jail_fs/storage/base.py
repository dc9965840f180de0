"""Storage backend contract consumed by the jailed file system."""

import os
from abc import ABC, abstractmethod
from typing import BinaryIO


class StorageBackend(ABC):
    """
    Primitive storage operations on absolute, already-resolved paths.

    Implementations raise the ``OSError`` family on failure; the jail passes
    those errors through to its callers untouched.
    """

    @abstractmethod
    async def stat(self, path: str) -> os.stat_result:
        pass

    @abstractmethod
    async def readdir(self, path: str) -> list[str]:
        pass

    @abstractmethod
    async def access(self, path: str, mode: int = os.F_OK) -> bool:
        pass

    @abstractmethod
    async def open_read_stream(self, path: str) -> BinaryIO:
        pass

    @abstractmethod
    async def open_write_stream(self, path: str, append: bool = False) -> BinaryIO:
        pass

    @abstractmethod
    async def unlink(self, path: str) -> None:
        pass

    @abstractmethod
    async def rmdir(self, path: str) -> None:
        pass

    @abstractmethod
    async def mkdir(self, path: str) -> None:
        pass

    @abstractmethod
    async def rename(self, src: str, dst: str) -> None:
        pass

    @abstractmethod
    async def chmod(self, path: str, mode: int) -> None:
        pass
