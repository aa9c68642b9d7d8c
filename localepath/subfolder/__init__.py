"""Subfolder package."""

from .config import SubFolderConfig
from .middleware import BadUriPrefixError, SubFolderMiddleware

__all__ = [
    "BadUriPrefixError",
    "SubFolderConfig",
    "SubFolderMiddleware",
]
