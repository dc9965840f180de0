import logging
import posixpath
import re

from jail_fs.errors import InvalidPathError, PathEscapeError

logger = logging.getLogger(__name__)

_REPEATED_SEPARATORS = re.compile(r"/{2,}")


def normalize_path(path: str) -> str:
    """
    Canonicalizes a client-supplied path string.

    Backslashes become forward slashes, runs of separators collapse into one,
    and ``.``/``..`` segments and trailing slashes are resolved. This is pure
    string work: the filesystem is never touched.

    Args:
        path: The raw path string, possibly Windows-style or malformed.

    Returns:
        The normalized path. Empty input normalizes to ``"."``.
    """
    path = path.replace("\\", "/")
    path = _REPEATED_SEPARATORS.sub("/", path)
    return posixpath.normpath(path)


def virtual_path(state, path_str: str) -> str:
    """
    Joins a requested path under the session's cwd.

    Absolute requests are joined under the cwd exactly like relative ones.
    The result always starts with ``/`` so ``..`` segments can never climb
    above the jail's root.
    """
    return normalize_path(state.cwd + "/" + normalize_path(path_str))


def resolve_path(state, path_str: str) -> str:
    """
    Resolves a user-provided path to an absolute on-disk path inside the jail.

    Args:
        state: The SessionState (root and cwd) for the session.
        path_str: The path string provided by the caller.

    Returns:
        The jail root followed by the normalized virtual path.

    Raises:
        InvalidPathError: If the path contains a NUL byte.
        PathEscapeError: If the resolved path is not the root or below it.
    """
    if "\x00" in path_str:
        raise InvalidPathError(path_str.replace("\x00", "\\x00"))
    joined = virtual_path(state, path_str)
    resolved = state.root_prefix + joined if joined != "/" else state.root
    if not is_within_root(state.root, resolved):
        logger.error(f"Rejected path {path_str!r}: resolved outside of jail root")
        raise PathEscapeError(path_str)
    logger.debug(f"Resolved {path_str!r} (cwd {state.cwd}) to {resolved}")
    return resolved


def is_within_root(root: str, path: str) -> bool:
    """Checks that ``path`` is ``root`` or one of its descendants."""
    if root == "/":
        return path.startswith("/") and ".." not in path.split("/")
    return (path == root or path.startswith(root + "/")) and ".." not in path.split("/")
