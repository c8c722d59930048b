"""
Flight Information API Package.

CRUD and search service for scheduled flights built with Flask,
SQLAlchemy, and Pydantic.

Modules:
    api/         REST endpoints for flight records
    models/      SQLAlchemy ORM models (Flight) and session management
    services/    Flight query service (paging, search, partial updates)
    schemas.py   Pydantic request models and response envelopes
    errors.py    JSON error handlers for validation and unhandled failures
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
