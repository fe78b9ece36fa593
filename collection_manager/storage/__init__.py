"""
Storage module for the Collection Manager

This module provides the collection service, the provider contract and
registry, change notifications and the configuration-driven factory.
"""

from .service import CollectionService
from .factory import create_default_collection_service, create_collection_service, create_provider_registry
from .notifications import CollectionChanged, ObserverList
from .registry import ProviderConfigurationError, ProviderRegistry
from .providers.base import CollectionProvider, ProviderResult
from .providers.filesystem import FilesystemCollectionProvider
from .providers.memory import MemoryCollectionProvider

__all__ = [
    "CollectionService",
    "create_default_collection_service",
    "create_collection_service",
    "create_provider_registry",
    "CollectionChanged",
    "ObserverList",
    "ProviderConfigurationError",
    "ProviderRegistry",
    "CollectionProvider",
    "ProviderResult",
    "FilesystemCollectionProvider",
    "MemoryCollectionProvider"
]
