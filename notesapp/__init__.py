"""
Notes App — Application Package
================================

What: Personal note-taking service. A JSON CRUD API over a single `notes`
      table plus a small server-rendered UI that talks to that API.

Layers:

    ┌─────────────────────────────────────┐
    │     UI (Jinja2 pages + httpx)       │  ← calls the API like any client
    ├─────────────────────────────────────┤
    │        Routes (API Layer)           │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (Note CRUD)         │  ← validation, store calls
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (process-wide store)     │  ← async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
