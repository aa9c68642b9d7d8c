"""Routing collaborators: URL generation and path aliases."""

from .aliases import Aliases
from .url_generator import UrlGenerator

__all__ = [
    "Aliases",
    "UrlGenerator",
]
