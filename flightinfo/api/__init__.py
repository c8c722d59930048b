"""
API module for the Flight Information API.

Provides REST endpoints for:
- Flight records (list, lookup, create, update, delete, search)
"""

from flightinfo.api.flights import flights_bp

__all__ = ['flights_bp']
