"""
Pydantic models for the Collection Manager

This module provides the collection data models, the operation outcome
vocabulary and the API request/response shapes.
"""

from .collection import Collection, CollectionView, OperationOutcome
from .responses import (
    AddCollectionRequest,
    CollectionListResponse,
    EditCollectionRequest,
    ErrorResponse,
    SuccessResponse,
)

__all__ = [
    "Collection",
    "CollectionView",
    "OperationOutcome",
    "AddCollectionRequest",
    "CollectionListResponse",
    "EditCollectionRequest",
    "ErrorResponse",
    "SuccessResponse"
]
