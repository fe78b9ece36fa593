"""
Filesystem collection provider implementation.

This module contains the FilesystemCollectionProvider that persists
collections to a single JSON document on the local filesystem.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

from .base import StorageCorruptionError, StorageError, StoragePermissionError
from .memory import MemoryCollectionProvider
from ...models.collection import Collection

logger = logging.getLogger(__name__)


class FilesystemCollectionProvider(MemoryCollectionProvider):
    """
    Filesystem implementation of CollectionProvider.

    Collections are loaded from ``storage_path`` on first use and the whole
    document is rewritten after every mutation. The file looks like::

        {"collections": [{"id": "...", "title": "...", "is_active": false}]}
    """

    def __init__(self, storage_path: Path):
        """
        Initialize filesystem collection provider.

        Args:
            storage_path: Path to the JSON document holding the collections
        """
        super().__init__()
        self.storage_path = Path(storage_path)
        self._loaded = False

    def _read_document(self) -> Dict[str, Collection]:
        """
        Read and validate the collections document.

        Returns:
            Dictionary mapping collection id to Collection, empty if the
            document does not exist yet

        Raises:
            StorageCorruptionError: If the document cannot be parsed
            StoragePermissionError: If the document cannot be read
        """
        if not self.storage_path.exists():
            logger.info(f"Collections file not found, starting empty: {self.storage_path}")
            return {}

        try:
            with open(self.storage_path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {self.storage_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise StorageCorruptionError(f"Invalid JSON in {self.storage_path}: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get('collections'), list):
            raise StorageCorruptionError(f"Invalid collections document format in {self.storage_path}")

        collections: Dict[str, Collection] = {}
        try:
            for entry in document['collections']:
                collection = Collection.model_validate(entry)
                collections[collection.id] = collection
        except ValidationError as e:
            raise StorageCorruptionError(f"Invalid collection entry in {self.storage_path}: {e}") from e

        logger.debug(f"Loaded {len(collections)} collections from {self.storage_path}")
        return collections

    def _write_document(self, collections: List[Collection]) -> None:
        """
        Atomically replace the collections document.

        Raises:
            StoragePermissionError: If the document cannot be written
            StorageError: For any other write failure
        """
        document = {"collections": [c.model_dump() for c in collections]}
        temp_path = self.storage_path.with_name(self.storage_path.name + '.tmp')

        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2)
            os.replace(temp_path, self.storage_path)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write {self.storage_path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to write {self.storage_path}: {e}") from e

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._collections = await asyncio.to_thread(self._read_document)
        self._loaded = True

    async def _commit(self) -> None:
        try:
            await asyncio.to_thread(self._write_document, list(self._collections.values()))
        except BaseException:
            # Unpersisted changes are dropped; the next call reloads from disk.
            self._loaded = False
            raise
