import os
import posixpath
import stat as stat_module

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jail_fs.utils.path_utils import normalize_path


class SessionState(BaseModel):
    """Stores the jail root and working directory for a single session."""

    model_config = ConfigDict(validate_assignment=True)

    root: str = Field(default="/", frozen=True)
    cwd: str = "/"

    @field_validator("root")
    @classmethod
    def _normalize_root(cls, value: str) -> str:
        root = normalize_path(value)
        if not posixpath.isabs(root):
            root = normalize_path(os.path.abspath(root))
        return root

    @field_validator("cwd")
    @classmethod
    def _normalize_cwd(cls, value: str) -> str:
        # cwd is a virtual path and is always anchored at the jail's "/"
        return normalize_path("/" + value)

    @property
    def root_prefix(self) -> str:
        """The root as a prefix for virtual paths (no trailing slash)."""
        return self.root.rstrip("/")


class FileEntry(BaseModel):
    """Storage metadata for one entry, plus the name it was requested by."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: int
    mode: int
    mtime: float
    atime: float
    ctime: float
    uid: int = 0
    gid: int = 0

    @classmethod
    def from_stat(cls, name: str, stat_result: os.stat_result) -> "FileEntry":
        return cls(
            name=name,
            size=stat_result.st_size,
            mode=stat_result.st_mode,
            mtime=stat_result.st_mtime,
            atime=stat_result.st_atime,
            ctime=stat_result.st_ctime,
            uid=stat_result.st_uid,
            gid=stat_result.st_gid,
        )

    def is_directory(self) -> bool:
        return stat_module.S_ISDIR(self.mode)

    def is_file(self) -> bool:
        return stat_module.S_ISREG(self.mode)

    @property
    def permissions(self) -> int:
        """Permission bits only, e.g. ``0o644``."""
        return stat_module.S_IMODE(self.mode)
