"""Shared FastAPI dependencies."""

import logging

from fastapi import Request

from anekazoo.exceptions import StorageError
from anekazoo.services.store_base import AnimalStore

logger = logging.getLogger(__name__)


def get_animal_store(request: Request) -> AnimalStore:
    """Return the store the application was started with.

    The lifespan (or ``create_app(store=...)``) places it on ``app.state``.
    """
    store = getattr(request.app.state, "animal_store", None)
    if store is None:
        logger.error("Animal store requested before the application finished starting")
        raise StorageError(message="Animal store is not available")
    return store
