"""
Abstract base class for collection storage providers.

This module defines the CollectionProvider interface that all storage
implementations must follow, and the ProviderResult value every provider
operation returns.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from ...models.collection import Collection

T = TypeVar('T')


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """
    Explicit result-or-error value returned by provider operations.

    A result is successful when ``error`` is None. A successful result may
    still carry a negative value (an empty id or False), which callers treat
    the same way as a failure.
    """
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> 'ProviderResult[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> 'ProviderResult[T]':
        return cls(error=error or "unknown provider error")


class CollectionProvider(ABC):
    """
    Abstract base class for collection storage providers.

    Providers persist collections and are the sole source of truth for them.
    They are expected to enforce title uniqueness and the single-active
    constraint themselves. Every operation is a coroutine and may raise a
    StorageError in addition to returning a failed ProviderResult.
    """

    @property
    def provider_name(self) -> str:
        """Human-readable provider name used in diagnostics."""
        return type(self).__name__

    @abstractmethod
    async def get_collection_id(self, title: str) -> ProviderResult[str]:
        """
        Look up the id of the collection with the given title.

        Args:
            title: Exact collection title

        Returns:
            Result holding the id, or an empty string if no collection has
            this title

        Raises:
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    async def add_collection(self, title: str, is_active: bool) -> ProviderResult[str]:
        """
        Create a new collection.

        Args:
            title: Title of the new collection
            is_active: Whether the new collection becomes the active one

        Returns:
            Result holding the new collection id

        Raises:
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    async def delete_collection(self, collection_id: str) -> ProviderResult[bool]:
        """
        Delete a collection.

        Args:
            collection_id: The collection identifier

        Returns:
            Result holding True if the collection was deleted

        Raises:
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    async def edit_collection(self, collection_id: str, title: str) -> ProviderResult[bool]:
        """
        Rename a collection.

        Args:
            collection_id: The collection identifier
            title: New title

        Returns:
            Result holding True if the collection was renamed

        Raises:
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    async def activate_collection(self, collection_id: str) -> ProviderResult[bool]:
        """
        Make a collection the active one, deactivating any other.

        Args:
            collection_id: The collection identifier

        Returns:
            Result holding True if the collection is now active

        Raises:
            StorageError: If storage operation fails
        """
        pass

    @abstractmethod
    async def get_collections(self) -> ProviderResult[List[Collection]]:
        """
        Get all collections, in no particular order.

        Returns:
            Result holding the list of collections

        Raises:
            StorageError: If storage operation fails
        """
        pass


class StorageError(Exception):
    """Exception raised for storage-related errors."""
    pass


class StorageCorruptionError(StorageError):
    """Exception raised when persisted collection data cannot be read."""
    pass


class StoragePermissionError(StorageError):
    """Exception raised for storage permission errors."""
    pass
