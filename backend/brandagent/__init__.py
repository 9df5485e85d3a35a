"""
BrandAgent Backend - Application Package
==========================================

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Dependencies (token / role checks) │
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← register, login, submit, list
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │          Store (Persistence)        │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
