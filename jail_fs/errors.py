"""Error kinds raised by the jailed file system.

Missing paths and other storage failures are not wrapped: they surface as the
``OSError`` family (``FileNotFoundError``, ``NotADirectoryError``, ...) raised by
the storage backend.
"""


class FileSystemError(Exception):
    """Base class for errors raised by the jail itself."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message}: {self.path}"


class InvalidDirectoryError(FileSystemError):
    """Raised when a chdir target is missing or is not a directory."""

    def __init__(self, path: str | None = None) -> None:
        super().__init__("Not a valid directory", path)


class CannotReadDirectoryError(FileSystemError):
    """Raised when a directory is opened for reading."""

    def __init__(self, path: str | None = None) -> None:
        super().__init__("Cannot read a directory", path)


class PathEscapeError(FileSystemError):
    """Raised when a resolved path would land outside the jail root."""

    def __init__(self, path: str | None = None) -> None:
        super().__init__("Path is outside the jail root", path)


class InvalidPathError(FileSystemError):
    """Raised when a requested path cannot name a file, e.g. it holds a NUL byte."""

    def __init__(self, path: str | None = None) -> None:
        super().__init__("Invalid path", path)
