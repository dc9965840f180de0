"""The jailed file system: one instance per session."""

import asyncio
import logging
import os
import posixpath
import re
import uuid
from typing import Any, List

from jail_fs.errors import CannotReadDirectoryError, InvalidDirectoryError, InvalidPathError
from jail_fs.models.session import FileEntry, SessionState
from jail_fs.storage import LocalStorage, StorageBackend
from jail_fs.streams import DEFAULT_CHUNK_SIZE, ByteReadStream, ByteWriteStream
from jail_fs.utils.path_utils import resolve_path, virtual_path

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"\W")


class JailedFileSystem:
    """
    File and directory operations confined to a jail root.

    Every path argument is normalized, joined under the session's cwd and
    anchored at the root before it reaches the storage backend. Operations on
    one instance are serialized, so a ``chdir`` racing with another call is
    observed either entirely before or entirely after it.
    """

    def __init__(
        self,
        connection: Any = None,
        *,
        root: str = "/",
        cwd: str = "/",
        storage: StorageBackend | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.connection = connection
        self.state = SessionState(root=root, cwd=cwd)
        self.storage = storage or LocalStorage()
        self.chunk_size = chunk_size
        self._lock = asyncio.Lock()

    @property
    def root(self) -> str:
        return self.state.root

    @property
    def cwd(self) -> str:
        return self.state.cwd

    def _resolve_path(self, path: str) -> str:
        return resolve_path(self.state, path)

    def current_directory(self) -> str:
        return self.state.cwd

    async def get(self, file_name: str) -> FileEntry:
        async with self._lock:
            path = self._resolve_path(file_name)
            stat_result = await self.storage.stat(path)
        return FileEntry.from_stat(file_name, stat_result)

    async def list(self, path: str = ".") -> List[FileEntry]:
        """
        Lists a directory.

        Entries that disappear between the directory read and their stat are
        left out instead of failing the listing.
        """
        async with self._lock:
            dir_path = self._resolve_path(path)
            file_names = await self.storage.readdir(dir_path)
            entries = await asyncio.gather(
                *(self._stat_entry(dir_path, file_name) for file_name in file_names)
            )
        return [entry for entry in entries if entry is not None]

    async def _stat_entry(self, dir_path: str, file_name: str) -> FileEntry | None:
        file_path = posixpath.join(dir_path, file_name)
        try:
            if not await self.storage.access(file_path, os.F_OK):
                return None
            stat_result = await self.storage.stat(file_path)
        except OSError as e:
            logger.debug(f"Skipping {file_path} in listing: {e}")
            return None
        return FileEntry.from_stat(file_name, stat_result)

    async def chdir(self, path: str = ".") -> str:
        async with self._lock:
            try:
                target = self._resolve_path(path)
                stat_result = await self.storage.stat(target)
            except (InvalidPathError, FileNotFoundError, NotADirectoryError) as e:
                raise InvalidDirectoryError(path) from e
            if not FileEntry.from_stat(path, stat_result).is_directory():
                raise InvalidDirectoryError(path)
            self.state.cwd = virtual_path(self.state, path)
            logger.info(f"Changed directory to {self.state.cwd}")
            return self.state.cwd

    async def write(self, file_name: str, append: bool = False) -> ByteWriteStream:
        async with self._lock:
            path = self._resolve_path(file_name)
            handle = await self.storage.open_write_stream(path, append=append)
        logger.info(f"Opened {path} for {'append' if append else 'write'}")
        return ByteWriteStream(handle, path, self.storage)

    async def read(self, file_name: str) -> ByteReadStream:
        async with self._lock:
            path = self._resolve_path(file_name)
            stat_result = await self.storage.stat(path)
            if FileEntry.from_stat(file_name, stat_result).is_directory():
                raise CannotReadDirectoryError(file_name)
            handle = await self.storage.open_read_stream(path)
        return ByteReadStream(handle, path, chunk_size=self.chunk_size)

    async def delete(self, path: str) -> None:
        async with self._lock:
            target = self._resolve_path(path)
            stat_result = await self.storage.stat(target)
            if FileEntry.from_stat(path, stat_result).is_directory():
                await self.storage.rmdir(target)
            else:
                await self.storage.unlink(target)
        logger.info(f"Deleted {target}")

    async def mkdir(self, path: str) -> str:
        async with self._lock:
            target = self._resolve_path(path)
            await self.storage.mkdir(target)
        logger.info(f"Created directory {target}")
        return target

    async def rename(self, src: str, dst: str) -> None:
        async with self._lock:
            src_path = self._resolve_path(src)
            dst_path = self._resolve_path(dst)
            await self.storage.rename(src_path, dst_path)
        logger.info(f"Renamed {src_path} to {dst_path}")

    async def chmod(self, path: str, mode: int) -> None:
        async with self._lock:
            target = self._resolve_path(path)
            await self.storage.chmod(target, mode)
        logger.info(f"Changed mode of {target} to {mode:o}")

    def get_unique_name(self) -> str:
        return _NON_WORD.sub("", str(uuid.uuid4()))
