"""
In-memory collection provider.

Keeps collections in a dictionary for the lifetime of the process. It is
the default provider for tests and the base of the filesystem provider,
which adds loading and persisting around the same logic.
"""

import asyncio
import logging
import uuid
from typing import Dict, Iterable, List, Optional

from .base import CollectionProvider, ProviderResult
from ...models.collection import Collection

logger = logging.getLogger(__name__)


class MemoryCollectionProvider(CollectionProvider):
    """
    Dictionary-backed implementation of CollectionProvider.

    Titles are unique and at most one collection is active; both constraints
    are enforced here under a lock, so concurrent callers cannot create two
    collections with the same title.
    """

    def __init__(self, collections: Optional[Iterable[Collection]] = None):
        """
        Initialize the provider.

        Args:
            collections: Optional initial collections
        """
        self._collections: Dict[str, Collection] = {}
        self._lock = asyncio.Lock()
        for collection in collections or []:
            self._collections[collection.id] = collection

    async def _ensure_loaded(self) -> None:
        """Hook for subclasses that load collections lazily."""
        pass

    async def _commit(self) -> None:
        """Hook for subclasses that persist collections after a mutation."""
        pass

    def _find_by_title(self, title: str) -> Optional[Collection]:
        for collection in self._collections.values():
            if collection.title == title:
                return collection
        return None

    def _deactivate_all(self) -> None:
        for collection_id, collection in self._collections.items():
            if collection.is_active:
                self._collections[collection_id] = collection.model_copy(update={"is_active": False})

    async def get_collection_id(self, title: str) -> ProviderResult[str]:
        async with self._lock:
            await self._ensure_loaded()
            existing = self._find_by_title(title)
            return ProviderResult.success(existing.id if existing else "")

    async def add_collection(self, title: str, is_active: bool) -> ProviderResult[str]:
        async with self._lock:
            await self._ensure_loaded()
            if self._find_by_title(title) is not None:
                return ProviderResult.failure(f"title '{title}' is already in use")

            if is_active:
                self._deactivate_all()

            collection = Collection(id=uuid.uuid4().hex, title=title, is_active=is_active)
            self._collections[collection.id] = collection
            await self._commit()

            logger.debug(f"Stored collection {collection.id} ({title})")
            return ProviderResult.success(collection.id)

    async def delete_collection(self, collection_id: str) -> ProviderResult[bool]:
        async with self._lock:
            await self._ensure_loaded()
            if self._collections.pop(collection_id, None) is None:
                return ProviderResult.failure(f"unknown collection id '{collection_id}'")

            await self._commit()
            return ProviderResult.success(True)

    async def edit_collection(self, collection_id: str, title: str) -> ProviderResult[bool]:
        async with self._lock:
            await self._ensure_loaded()
            collection = self._collections.get(collection_id)
            if collection is None:
                return ProviderResult.failure(f"unknown collection id '{collection_id}'")

            existing = self._find_by_title(title)
            if existing is not None and existing.id != collection_id:
                return ProviderResult.failure(f"title '{title}' is already in use")

            self._collections[collection_id] = collection.model_copy(update={"title": title})
            await self._commit()
            return ProviderResult.success(True)

    async def activate_collection(self, collection_id: str) -> ProviderResult[bool]:
        async with self._lock:
            await self._ensure_loaded()
            collection = self._collections.get(collection_id)
            if collection is None:
                return ProviderResult.failure(f"unknown collection id '{collection_id}'")

            self._deactivate_all()
            self._collections[collection_id] = collection.model_copy(update={"is_active": True})
            await self._commit()
            return ProviderResult.success(True)

    async def get_collections(self) -> ProviderResult[List[Collection]]:
        async with self._lock:
            await self._ensure_loaded()
            return ProviderResult.success(list(self._collections.values()))
