"""
Collections API endpoint implementation.

This module exposes the collection service over HTTP: listing, creating,
renaming, deleting and activating collections.
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from ..models.collection import CollectionView, OperationOutcome
from ..models.responses import (
    AddCollectionRequest,
    CollectionListResponse,
    EditCollectionRequest,
    ErrorResponse,
    SuccessResponse,
)
from ..storage.service import CollectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Collections"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid collection or title"},
    409: {"model": ErrorResponse, "description": "Title already in use"},
    500: {"model": ErrorResponse, "description": "Provider failed to apply the change"}
}

_OUTCOME_STATUS = {
    OperationOutcome.INVALID: 400,
    OperationOutcome.DUPLICATE: 409,
    OperationOutcome.ERROR: 500
}


def _service(request: Request) -> CollectionService:
    return request.app.state.collection_service


def _raise_for_outcome(outcome: OperationOutcome, message: str) -> None:
    """Raise the HTTPException matching a non-OK outcome."""
    if outcome == OperationOutcome.OK:
        return
    raise HTTPException(
        status_code=_OUTCOME_STATUS[outcome],
        detail={"outcome": outcome.value, "message": message}
    )


@router.get(
    "/collections",
    response_model=CollectionListResponse,
    summary="List all collections",
    description="Retrieve all collections sorted by title"
)
async def list_collections(request: Request):
    """
    Get all collections sorted by title.

    An unavailable provider is reported as an empty list, the same as a
    store without collections.
    """
    views = await _service(request).get_collections()
    logger.info(f"Returning {len(views)} collections")
    return CollectionListResponse(success=True, data=views, total_count=len(views))


@router.post(
    "/collections",
    status_code=201,
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Create a collection"
)
async def add_collection(request: Request, body: AddCollectionRequest):
    """Create a collection with a unique title."""
    outcome = await _service(request).add_collection(body.title, body.is_active)
    _raise_for_outcome(outcome, f"Could not add collection '{body.title}'")
    return SuccessResponse(message="Collection added", outcome=outcome)


@router.put(
    "/collections/{collection_id}",
    response_model=SuccessResponse,
    responses=_ERROR_RESPONSES,
    summary="Rename a collection"
)
async def edit_collection(request: Request, collection_id: str, body: EditCollectionRequest):
    """Rename a collection. Renaming to its current title is a conflict."""
    outcome = await _service(request).edit_collection(CollectionView(id=collection_id), body.title)
    _raise_for_outcome(outcome, f"Could not rename collection {collection_id} to '{body.title}'")
    return SuccessResponse(message="Collection edited", outcome=outcome)


@router.delete(
    "/collections/{collection_id}",
    response_model=SuccessResponse,
    responses={500: _ERROR_RESPONSES[500]},
    summary="Delete a collection"
)
async def delete_collection(request: Request, collection_id: str):
    """Delete a collection."""
    if not await _service(request).delete_collection(CollectionView(id=collection_id)):
        _raise_for_outcome(OperationOutcome.ERROR, f"Could not delete collection {collection_id}")
    return SuccessResponse(message="Collection deleted")


@router.post(
    "/collections/{collection_id}/activate",
    response_model=SuccessResponse,
    responses={500: _ERROR_RESPONSES[500]},
    summary="Activate a collection"
)
async def activate_collection(request: Request, collection_id: str):
    """Make a collection the active one."""
    if not await _service(request).activate_collection(CollectionView(id=collection_id)):
        _raise_for_outcome(OperationOutcome.ERROR, f"Could not activate collection {collection_id}")
    return SuccessResponse(message="Collection activated")
