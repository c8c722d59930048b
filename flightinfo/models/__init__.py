"""
Database models for the Flight Information API.

A single `flights` table, indexed for the search endpoint's
airline, route and departure-date filters.
"""

from flightinfo.models.base import (
    Base,
    SessionLocal,
    build_engine,
    configure_database,
    get_session,
    init_db,
)
from flightinfo.models.flight import Flight, FlightStatus

__all__ = [
    'Base',
    'SessionLocal',
    'build_engine',
    'configure_database',
    'get_session',
    'init_db',
    'Flight',
    'FlightStatus',
]
