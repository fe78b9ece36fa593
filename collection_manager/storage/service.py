"""
Collection service layer for validated, notified collection operations.

This module provides the CollectionService class that acts as the single
interface between callers (the API) and the selected collection provider.
It validates input, checks for duplicate titles, calls the provider and
raises change notifications after successful mutations.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from ..models.collection import Collection, CollectionView, OperationOutcome
from .notifications import ObserverList
from .providers.base import CollectionProvider, ProviderResult

logger = logging.getLogger(__name__)

T = TypeVar('T')


class CollectionService:
    """
    Façade over a collection provider.

    Every public operation is total: provider failures and provider
    exceptions are logged and reported as ``OperationOutcome.ERROR`` or
    ``False``, never raised. The service holds no state besides the provider
    reference and its listener lists, and does not serialize concurrent
    calls; title uniqueness under concurrency is the provider's job.
    """

    def __init__(self, provider: CollectionProvider):
        """
        Initialize collection service.

        Args:
            provider: The selected collection provider
        """
        self.provider = provider
        self.collection_added = ObserverList("collection_added")
        self.collection_edited = ObserverList("collection_edited")
        self.collection_deleted = ObserverList("collection_deleted")
        self.active_collection_changed = ObserverList("active_collection_changed")

    async def _call(self, method: Callable[..., Awaitable[ProviderResult[T]]], *args: Any) -> ProviderResult[T]:
        """Call and await a provider method, turning any exception into a failed result."""
        try:
            result = await method(*args)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            return ProviderResult.failure("provider call was cancelled")
        except Exception as e:
            return ProviderResult.failure(f"{type(e).__name__}: {e}")

        if not isinstance(result, ProviderResult):
            return ProviderResult.failure(f"provider returned {type(result).__name__}, expected ProviderResult")
        return result

    @staticmethod
    def _has_id(view: Optional[CollectionView]) -> bool:
        if view is None:
            logger.error("collection is None")
            return False
        if not view.id:
            logger.error("collection.id is empty")
            return False
        return True

    async def _find_existing_id(self, operation: str, title: str) -> str:
        """Id of the collection holding ``title``, or "" if none or the lookup failed."""
        result = await self._call(self.provider.get_collection_id, title)
        if not result.ok:
            logger.error(f"{operation}: duplicate check for title={title!r} failed, continuing. Error: {result.error}")
            return ""
        return result.value or ""

    async def activate_collection(self, collection: Optional[CollectionView]) -> bool:
        """
        Make a collection the active one.

        Returns:
            True if the provider activated the collection
        """
        if not self._has_id(collection):
            return False

        result = await self._call(self.provider.activate_collection, collection.id)
        if not (result.ok and result.value):
            logger.error(f"Activate failed. collection.id={collection.id}. Error: {result.error or 'declined'}")
            return False

        self.active_collection_changed.notify(collection.id)
        logger.info(f"Activate successful. collection.id={collection.id}")
        return True

    async def add_collection(self, title: Optional[str], is_active: bool) -> OperationOutcome:
        """
        Create a collection with a unique, non-blank title.

        Returns:
            OK, INVALID for a blank title, DUPLICATE if the title is taken,
            ERROR if the provider did not create the collection
        """
        if not title or not title.strip():
            logger.error("title is empty")
            return OperationOutcome.INVALID

        if await self._find_existing_id("Add", title):
            logger.error(f"There is already a collection with the title '{title}'")
            return OperationOutcome.DUPLICATE

        result = await self._call(self.provider.add_collection, title, is_active)
        if not (result.ok and result.value):
            logger.error(f"Add failed. title={title}. Error: {result.error or 'empty collection id'}")
            return OperationOutcome.ERROR

        self.collection_added.notify(result.value)
        logger.info(f"Add successful. title={title}, collection.id={result.value}")
        return OperationOutcome.OK

    async def delete_collection(self, collection: Optional[CollectionView]) -> bool:
        """
        Delete a collection.

        Returns:
            True if the provider deleted the collection
        """
        if not self._has_id(collection):
            return False

        result = await self._call(self.provider.delete_collection, collection.id)
        if not (result.ok and result.value):
            logger.error(f"Delete failed. collection.id={collection.id}. Error: {result.error or 'declined'}")
            return False

        self.collection_deleted.notify(collection.id)
        logger.info(f"Delete successful. collection.id={collection.id}")
        return True

    async def edit_collection(self, collection: Optional[CollectionView], title: Optional[str]) -> OperationOutcome:
        """
        Rename a collection.

        The duplicate check does not exclude the collection being edited, so
        renaming a collection to its current title returns DUPLICATE.

        Returns:
            OK, INVALID for a missing id or blank title, DUPLICATE if the
            title is taken, ERROR if the provider did not rename
        """
        if not self._has_id(collection):
            return OperationOutcome.INVALID

        if not title or not title.strip():
            logger.error("title is empty")
            return OperationOutcome.INVALID

        if await self._find_existing_id("Edit", title):
            logger.error(f"Collection with title={title} already exists")
            return OperationOutcome.DUPLICATE

        result = await self._call(self.provider.edit_collection, collection.id, title)
        if not (result.ok and result.value):
            logger.error(
                f"Edit failed. collection.id={collection.id}, title={title}. "
                f"Error: {result.error or 'declined'}"
            )
            return OperationOutcome.ERROR

        self.collection_edited.notify(collection.id)
        logger.info(f"Edit successful. collection.id={collection.id}, title={title}")
        return OperationOutcome.OK

    async def get_collections(self) -> List[CollectionView]:
        """
        Get all collections sorted ascending by title.

        An unavailable provider and an empty store both yield an empty list.
        """
        result = await self._call(self.provider.get_collections)
        if not result.ok:
            logger.error(f"Get failed. Error: {result.error}")
            return []

        if not result.value:
            logger.error("collections is None or empty")
            return []

        collections = result.value
        if not isinstance(collections, list) or not all(isinstance(c, Collection) for c in collections):
            logger.error(f"Get failed. Provider returned malformed collections: {collections!r}")
            return []

        views = [CollectionView.from_collection(c) for c in collections]
        return sorted(views, key=lambda v: v.title)
