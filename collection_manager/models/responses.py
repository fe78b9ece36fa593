"""
API request and response models for consistent response formatting.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .collection import CollectionView, OperationOutcome


class ErrorResponse(BaseModel):
    """Standard error response format."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Duplicate",
                "message": "A collection titled 'Notes' already exists",
                "outcome": "duplicate"
            }
        }
    )

    success: bool = Field(
        False,
        description="Always false for error responses"
    )

    error: str = Field(
        ...,
        description="Brief error description"
    )

    message: str = Field(
        ...,
        description="Detailed error message"
    )

    outcome: Optional[OperationOutcome] = Field(
        None,
        description="Outcome reported by the collection service, if any"
    )


class SuccessResponse(BaseModel):
    """Standard success response format for simple operations."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Collection added",
                "outcome": "ok",
                "data": None
            }
        }
    )

    success: bool = Field(
        True,
        description="Always true for success responses"
    )

    message: str = Field(
        ...,
        description="Success message"
    )

    outcome: OperationOutcome = Field(
        OperationOutcome.OK,
        description="Outcome reported by the collection service"
    )

    data: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional response data"
    )


class CollectionListResponse(BaseModel):
    """All collections, sorted by title."""

    success: bool = Field(
        True,
        description="Always true; an unavailable provider yields an empty list"
    )

    data: List[CollectionView] = Field(
        default_factory=list,
        description="Collections sorted ascending by title"
    )

    total_count: int = Field(
        0,
        description="Number of collections returned",
        ge=0
    )


class AddCollectionRequest(BaseModel):
    """Body for creating a collection."""

    title: str = Field(
        ...,
        description="Title of the new collection"
    )

    is_active: bool = Field(
        False,
        description="Make the new collection the active one"
    )


class EditCollectionRequest(BaseModel):
    """Body for renaming a collection."""

    title: str = Field(
        ...,
        description="New title for the collection"
    )
