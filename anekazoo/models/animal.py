"""
Anekazoo Animals API - Animal SQLAlchemy Model
===============================================

What:  ORM model representing the `animals` table.
How:   Inherits from the shared DeclarativeBase; the schema bootstrap and
       Alembic both read this table definition.
Who:   Used by SQLAnimalStore for every CRUD statement.

Table:
    animals(
        id     SERIAL PRIMARY KEY,
        name   VARCHAR(50) NOT NULL UNIQUE,
        class  VARCHAR(50) NOT NULL,
        legs   INT NOT NULL
    )

The `class` column is mapped to the `class_` attribute because `class`
is a reserved word in Python.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from anekazoo.database import Base


class Animal(Base):
    """
    A single animal row.

    Lifecycle:
        1. Inserted by POST /animals (id assigned by the store)
        2. Read by GET /animals and GET /animals/{id}
        3. Fully replaced by PUT /animals/{id} (id never changes)
        4. Removed by DELETE /animals/{id} (hard delete)
    """

    __tablename__ = "animals"

    # ── Primary Key ───────────────────────────────────────────────────────
    # Integer autoincrement renders as SERIAL on PostgreSQL
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Unique across all animals; a duplicate insert is a conflict
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
    )

    # Free-form taxonomic classification (e.g. "Mammal")
    class_: Mapped[str] = mapped_column(
        "class",
        String(50),
        nullable=False,
    )

    # No range validation
    legs: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Animal(id={self.id}, name='{self.name}', class='{self.class_}', legs={self.legs})>"
