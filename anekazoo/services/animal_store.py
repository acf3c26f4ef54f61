"""
Anekazoo Animals API - SQL Animal Store
========================================

What:  Relational implementation of AnimalStore on async SQLAlchemy.
How:   Each operation opens its own session from the injected factory, runs
       one statement, commits, and classifies any failure.
Who:   Constructed once by the application lifespan and shared by all requests.
When:  On every CRUD request.

Statements:
    insert      INSERT INTO animals (name, class, legs) ... (id from the store)
    fetch_all   SELECT id, name, class, legs FROM animals
    fetch_by_id SELECT ... WHERE id = :id
    update      UPDATE animals SET name, class, legs WHERE id = :id  → rowcount
    delete      DELETE FROM animals WHERE id = :id                   → rowcount

Error classification:
    IntegrityError with SQLSTATE 23505 on insert  → ConflictError
    zero rows affected on update/delete           → NotFoundError
    any other SQLAlchemy error or OSError         → StorageError
"""

import logging
from typing import List

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from anekazoo.exceptions import ConflictError, NotFoundError, StorageError
from anekazoo.models.animal import Animal
from anekazoo.schemas.animal import AnimalResponse
from anekazoo.services.store_base import AnimalStore

logger = logging.getLogger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"

# Driver connection failures (e.g. ConnectionRefusedError from asyncpg) are
# raised as OSError, outside the SQLAlchemy hierarchy
STORE_ERRORS = (SQLAlchemyError, OSError)


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Whether `exc` was caused by a unique constraint.

    PostgreSQL drivers expose the SQLSTATE on the wrapped DBAPI error
    (`sqlstate` for asyncpg, `pgcode` for psycopg). SQLite has no SQLSTATE
    and reports the constraint in the message instead.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(orig)


def _to_response(row: Animal) -> AnimalResponse:
    return AnimalResponse(id=row.id, name=row.name, class_=row.class_, legs=row.legs)


class SQLAnimalStore(AnimalStore):
    """
    AnimalStore backed by the `animals` table.

    Each method runs in its own session, so every statement is its own
    transaction. Uniqueness and row-count consistency come from the store.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, name: str, class_: str, legs: int) -> AnimalResponse:
        async with self._session_factory() as session:
            row = Animal(name=name, class_=class_, legs=legs)
            session.add(row)
            try:
                # Flush sends the INSERT and loads the generated id
                await session.flush()
                created = _to_response(row)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if is_unique_violation(e):
                    logger.info("Rejected duplicate animal name '%s'", name)
                    raise ConflictError(context={"name": name})
                logger.error("Integrity error inserting animal '%s': %s", name, e.orig)
                raise StorageError(
                    message="Could not create animal",
                    context={"name": name, "error_type": type(e).__name__},
                )
            except STORE_ERRORS as e:
                await session.rollback()
                logger.error("Database error inserting animal '%s': %s", name, e)
                raise StorageError(
                    message="Could not create animal",
                    context={"name": name, "error_type": type(e).__name__},
                )

        logger.info("Animal created: id=%s name='%s'", created.id, created.name)
        return created

    async def fetch_all(self) -> List[AnimalResponse]:
        async with self._session_factory() as session:
            try:
                result = await session.execute(select(Animal))
                rows = result.scalars().all()
            except STORE_ERRORS as e:
                logger.error("Database error listing animals: %s", e, exc_info=True)
                raise StorageError(
                    message="Could not fetch animals",
                    context={"error_type": type(e).__name__},
                )
            return [_to_response(row) for row in rows]

    async def fetch_by_id(self, animal_id: int) -> AnimalResponse:
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    select(Animal).where(Animal.id == animal_id)
                )
                row = result.scalar_one_or_none()
            except STORE_ERRORS as e:
                logger.error("Database error fetching animal %s: %s", animal_id, e)
                raise StorageError(
                    message="Could not fetch animal",
                    context={"animal_id": animal_id, "error_type": type(e).__name__},
                )

            if row is None:
                raise NotFoundError(resource_id=animal_id)
            return _to_response(row)

    async def update(self, animal_id: int, name: str, class_: str, legs: int) -> None:
        statement = (
            update(Animal)
            .where(Animal.id == animal_id)
            .values({Animal.name: name, Animal.class_: class_, Animal.legs: legs})
            .execution_options(synchronize_session=False)
        )
        affected = await self._execute_write(
            statement, animal_id, failure_message="Could not update animal"
        )
        if affected == 0:
            raise NotFoundError(resource_id=animal_id)
        logger.info("Animal updated: id=%s", animal_id)

    async def delete(self, animal_id: int) -> None:
        statement = (
            delete(Animal)
            .where(Animal.id == animal_id)
            .execution_options(synchronize_session=False)
        )
        affected = await self._execute_write(
            statement, animal_id, failure_message="Could not delete animal"
        )
        if affected == 0:
            raise NotFoundError(resource_id=animal_id)
        logger.info("Animal deleted: id=%s", animal_id)

    async def ping(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except STORE_ERRORS as e:
            logger.warning("Store ping failed: %s", e)
            return False
        return True

    async def _execute_write(self, statement, animal_id: int, failure_message: str) -> int:
        """
        Execute an UPDATE/DELETE and return the number of affected rows.

        A failed statement is a StorageError; zero affected rows is returned
        as 0 for the caller to interpret.
        """
        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                affected = result.rowcount
                await session.commit()
            except STORE_ERRORS as e:
                await session.rollback()
                logger.error("%s %s: %s", failure_message, animal_id, e)
                raise StorageError(
                    message=failure_message,
                    context={"animal_id": animal_id, "error_type": type(e).__name__},
                )
        return affected
