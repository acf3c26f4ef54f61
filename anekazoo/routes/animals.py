"""
Anekazoo Animals API - Animal Route Handlers
=============================================

What:  CRUD endpoints for the `animals` resource.
How:   Each handler decodes the path/body, calls the injected AnimalStore,
       and returns the matching status code. Failures propagate as
       AnekazooError subclasses to the global exception handlers.

Endpoints:
    POST   /animals        → 201 Animal        | 400 | 409 | 500
    GET    /animals        → 200 [Animal, ...] | 404 | 500
    GET    /animals/{id}   → 200 Animal        | 404
    PUT    /animals/{id}   → 200 (empty)       | 400 | 404 | 500
    DELETE /animals/{id}   → 204 (empty)       | 404 | 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from anekazoo.dependencies import get_animal_store
from anekazoo.exceptions import NotFoundError, StorageError
from anekazoo.schemas.animal import AnimalCreate, AnimalResponse, ErrorResponse
from anekazoo.services.store_base import AnimalStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Animals"])

# Upper bound of a PostgreSQL SERIAL column
MAX_ANIMAL_ID = 2**31 - 1


def parse_animal_id(raw_id: str) -> int:
    """
    Decode the `{id}` path segment.

    A segment that is not a decimal integer in SERIAL range cannot name
    any row, so it is reported the same way as a missing animal.
    PUT and DELETE included: no statement is sent for such an id, so they
    answer 404 rather than a store error.
    """
    try:
        animal_id = int(raw_id)
    except ValueError:
        raise NotFoundError(resource_id=raw_id, context={"reason": "malformed id"})
    if not -MAX_ANIMAL_ID - 1 <= animal_id <= MAX_ANIMAL_ID:
        raise NotFoundError(resource_id=raw_id, context={"reason": "id out of range"})
    return animal_id


@router.post(
    "/animals",
    status_code=201,
    response_model=AnimalResponse,
    responses={
        201: {"description": "Animal created", "model": AnimalResponse},
        400: {"description": "Invalid input", "model": ErrorResponse},
        409: {"description": "Name already taken", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an animal",
)
async def create_animal(
    payload: AnimalCreate,
    store: AnimalStore = Depends(get_animal_store),
) -> AnimalResponse:
    """Insert a new animal; any `id` in the body is ignored."""
    return await store.insert(payload.name, payload.class_, payload.legs)


@router.get(
    "/animals",
    response_model=List[AnimalResponse],
    responses={
        200: {"description": "All animals"},
        404: {"description": "No animals stored", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all animals",
)
async def list_animals(
    store: AnimalStore = Depends(get_animal_store),
) -> List[AnimalResponse]:
    """
    Return every stored animal, in store order.

    An empty table is answered with 404 "No animals found" rather than
    an empty array. Clients rely on this.
    """
    animals = await store.fetch_all()
    if not animals:
        raise NotFoundError(message="No animals found")
    return animals


@router.get(
    "/animals/{animal_id}",
    response_model=AnimalResponse,
    responses={
        200: {"description": "The animal", "model": AnimalResponse},
        404: {"description": "Animal not found", "model": ErrorResponse},
    },
    summary="Get an animal by id",
)
async def get_animal(
    animal_id: str,
    store: AnimalStore = Depends(get_animal_store),
) -> AnimalResponse:
    """
    Fetch one animal.

    This endpoint answers 200 or 404 only: a store failure while looking the
    animal up is logged and reported as not found.
    """
    parsed_id = parse_animal_id(animal_id)
    try:
        return await store.fetch_by_id(parsed_id)
    except StorageError as e:
        logger.error("Lookup of animal %s failed: %s | Context: %s", parsed_id, e.message, e.context)
        raise NotFoundError(resource_id=parsed_id)


@router.put(
    "/animals/{animal_id}",
    status_code=200,
    response_class=Response,
    responses={
        200: {"description": "Animal replaced (empty body)"},
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "Animal not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace an animal",
)
async def update_animal(
    animal_id: str,
    payload: AnimalCreate,
    store: AnimalStore = Depends(get_animal_store),
) -> Response:
    """Replace name, class and legs; the id never changes."""
    parsed_id = parse_animal_id(animal_id)
    await store.update(parsed_id, payload.name, payload.class_, payload.legs)
    return Response(status_code=200)


@router.delete(
    "/animals/{animal_id}",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Animal deleted"},
        404: {"description": "Animal not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete an animal",
)
async def delete_animal(
    animal_id: str,
    store: AnimalStore = Depends(get_animal_store),
) -> Response:
    parsed_id = parse_animal_id(animal_id)
    await store.delete(parsed_id)
    return Response(status_code=204)
