"""
Collection models shared by the service layer, providers and API.
"""

from enum import Enum

from pydantic import BaseModel, Field, ConfigDict


class OperationOutcome(str, Enum):
    """Result of a mutating collection operation."""
    OK = "ok"
    INVALID = "invalid"
    DUPLICATE = "duplicate"
    ERROR = "error"


class Collection(BaseModel):
    """
    A named collection as stored by a provider.

    Providers own these objects. The service layer never mutates them and
    only hands out CollectionView projections to callers.
    """

    id: str = Field(
        ...,
        description="Provider-assigned, stable collection identifier",
        min_length=1
    )

    title: str = Field(
        ...,
        description="User-visible title, unique across all collections",
        min_length=1
    )

    is_active: bool = Field(
        False,
        description="Whether this is the active collection (at most one is)"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "3f2b9c0e8a4d4d5c9b1f6e7a2c3d4e5f",
                "title": "Notes",
                "is_active": True
            }
        }
    )


class CollectionView(BaseModel):
    """
    Read-only projection of a Collection used as input and output of the
    collection service.

    Fields are deliberately unconstrained: a view with an empty id is a
    valid object and is rejected by the service, not by validation.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    is_active: bool = False

    @classmethod
    def from_collection(cls, collection: Collection) -> 'CollectionView':
        """Project a provider collection to a view."""
        return cls(
            id=collection.id,
            title=collection.title,
            is_active=collection.is_active
        )
