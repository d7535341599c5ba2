"""
Malls API Backend — Application Package Initializer
====================================================

What: Marks the `mallsapi` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │      Routes + Dependencies (API)    │  ← HTTP concerns, auth gate
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Relationship integrity, credentials
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes handle status codes and headers and delegate to services.
    Services contain the mall/store/employee bookkeeping and can be tested
    against a session without HTTP.
"""

__version__ = "0.1.0"
