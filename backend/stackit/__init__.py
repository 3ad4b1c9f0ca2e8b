"""
StackIt Backend - Application Package Initializer
==================================================

What: Marks the `stackit` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn stackit.main:app`), Alembic, pytest and the seed script.

Architecture Note:
    The backend is layered:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← votes, notifications, mentions
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes receive a request-scoped AsyncSession and hand it to services.
    Services never keep state between calls; everything lives in the database.
"""

__version__ = "1.0.0"
