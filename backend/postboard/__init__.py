"""
Postboard API: Application Package
====================================

What: Marks the `postboard` directory as a Python package.
Who:  Imported by uvicorn (`postboard.main:app`), pytest, and `python -m postboard`.

Architecture Note:
    The service is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← CRUD rules, auth, pagination
    ├─────────────────────────────────────┤
    │        Schemas (pydantic models)    │  ← Validation + serialization
    ├─────────────────────────────────────┤
    │     Repositories (In-memory store)  │  ← Ordered lists, linear scans
    └─────────────────────────────────────┘

    Routes never touch a store directly; services never build HTTP responses.
"""

__version__ = "1.0.0"
