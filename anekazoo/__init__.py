"""
Anekazoo Animals API - Application Package Initializer
=======================================================

What: Marks the `anekazoo` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Animal Store)        │  ← SQL statements, error classification
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine, sessions, bootstrap
    └─────────────────────────────────────┘

    Routes translate HTTP to store calls and store outcomes back to HTTP.
    The store is the only layer that talks SQL.
"""

__version__ = "1.0.0"
