import logging

from jail_fs.filesystem import JailedFileSystem
from jail_fs.utils.config import ServiceConfig

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages one jailed file system per user session."""

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self._config = config or ServiceConfig()
        # Simple dict as an in-process session storage.
        self._storage: dict[str, JailedFileSystem] = {}

    def get_filesystem(self, session_id: str = "default", connection=None) -> JailedFileSystem:
        """Returns or creates the file system for a given session."""
        if session_id not in self._storage:
            logger.info(f"Opening jail session {session_id} at {self._config.JAIL_ROOT}")
            self._storage[session_id] = JailedFileSystem(
                connection,
                root=self._config.JAIL_ROOT,
                cwd=self._config.JAIL_CWD,
                chunk_size=self._config.JAIL_READ_CHUNK_SIZE,
            )
        return self._storage[session_id]

    def close_session(self, session_id: str) -> bool:
        """Discards a session's state. Returns False if it did not exist."""
        fs = self._storage.pop(session_id, None)
        if fs is None:
            return False
        logger.info(f"Closed jail session {session_id}")
        return True

    def active_sessions(self) -> list[str]:
        return list(self._storage)
