from .errors import (
    CannotReadDirectoryError,
    FileSystemError,
    InvalidDirectoryError,
    InvalidPathError,
    PathEscapeError,
)
from .filesystem import JailedFileSystem
from .models.session import FileEntry, SessionState

__all__ = [
    "CannotReadDirectoryError",
    "FileEntry",
    "FileSystemError",
    "InvalidDirectoryError",
    "InvalidPathError",
    "JailedFileSystem",
    "PathEscapeError",
    "SessionState",
]
