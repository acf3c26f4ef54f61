# Services package init
"""
Anekazoo Animals API - Services Layer
======================================

What:  Persistence layer sitting between routes (HTTP) and the relational store.
How:   Route handlers call an AnimalStore; the store runs SQL and returns
       schema objects or raises classified exceptions.

Service Inventory:
    - AnimalStore (abstract): Contract for animal persistence
    - SQLAnimalStore: Concrete implementation on async SQLAlchemy
"""
