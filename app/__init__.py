"""
Words API — Application Package
=================================

A two-endpoint REST service over a single `words` table.

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (WordService)       │  ← one SQL statement per operation
    ├─────────────────────────────────────┤
    │      Models & Schemas (Data)        │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Connection Provider)    │  ← one async pool per process
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
