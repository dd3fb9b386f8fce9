"""
Zense Backend - Application Package
====================================

What: Journaling, forum and AI "venting" social backend.
Who:  Imported by uvicorn (`zense.main:app`), Alembic and pytest.

Architecture Note:
    The backend is layered the same way for every resource:

    ┌─────────────────────────────────────┐
    │     Routes (FastAPI routers)        │  ← binding, status codes
    ├─────────────────────────────────────┤
    │     Services (business rules)       │  ← ownership checks, projections
    ├─────────────────────────────────────┤
    │     Repositories (persistence)      │  ← one adapter per entity
    ├─────────────────────────────────────┤
    │     Models (SQLAlchemy ORM)         │  ← users, journals, forums, ...
    └─────────────────────────────────────┘

    Cross-cutting pieces (auth middleware, request ids, access logs,
    rate limiting) live in `zense.middleware`.
"""

__version__ = "1.0.0"
