"""
Collection providers package for the Collection Manager.

This package contains the provider contract and the bundled provider
implementations (in-memory and JSON filesystem).
"""

from .base import CollectionProvider, ProviderResult
from .filesystem import FilesystemCollectionProvider
from .memory import MemoryCollectionProvider

__all__ = [
    "CollectionProvider",
    "ProviderResult",
    "FilesystemCollectionProvider",
    "MemoryCollectionProvider",
]
