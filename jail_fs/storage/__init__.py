from .base import StorageBackend
from .local import LocalStorage

__all__ = ["LocalStorage", "StorageBackend"]
