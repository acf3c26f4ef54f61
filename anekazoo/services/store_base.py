"""
Anekazoo Animals API - Abstract Animal Store Interface
=======================================================

What:  Abstract base class defining the contract of the persistence component.
How:   SQLAnimalStore implements it on top of async SQLAlchemy; tests provide
       an in-memory implementation. Route handlers depend only on this class.
Who:   Injected into route handlers through anekazoo.dependencies.

Outcome contract:
    Every method either returns its result or raises one of
    ConflictError, NotFoundError, StorageError. Driver exceptions never
    cross this boundary.
"""

from abc import ABC, abstractmethod
from typing import List

from anekazoo.schemas.animal import AnimalResponse


class AnimalStore(ABC):
    """
    Persistence component for animals.

    Implementations:
        - SQLAnimalStore: relational store via async SQLAlchemy
    """

    @abstractmethod
    async def insert(self, name: str, class_: str, legs: int) -> AnimalResponse:
        """
        Insert a new animal.

        Returns:
            The stored animal, including the id assigned by the store.

        Raises:
            ConflictError: An animal with the same name already exists.
                Nothing was written.
            StorageError: Any other store failure.
        """
        ...

    @abstractmethod
    async def fetch_all(self) -> List[AnimalResponse]:
        """
        Return every animal.

        Order is whatever the store yields and may differ between calls.
        An empty table yields an empty list; deciding what that means is
        the caller's job.

        Raises:
            StorageError: Query failed.
        """
        ...

    @abstractmethod
    async def fetch_by_id(self, animal_id: int) -> AnimalResponse:
        """
        Return the animal with `animal_id`.

        Raises:
            NotFoundError: No such animal.
            StorageError: Query failed.
        """
        ...

    @abstractmethod
    async def update(self, animal_id: int, name: str, class_: str, legs: int) -> None:
        """
        Replace all fields of the animal with `animal_id`.

        Absence is detected from the affected-row count of the UPDATE itself,
        not from a prior read: zero rows changed means NotFoundError, a failed
        statement means StorageError.

        Raises:
            NotFoundError: Zero rows matched.
            StorageError: The statement failed.
        """
        ...

    @abstractmethod
    async def delete(self, animal_id: int) -> None:
        """
        Remove the animal with `animal_id`.

        Same zero-rows-affected convention as update().

        Raises:
            NotFoundError: Zero rows matched.
            StorageError: The statement failed.
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        ...
