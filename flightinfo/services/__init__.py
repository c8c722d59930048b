"""
Service layer.

Business operations over the database, shared by the API blueprints.
"""

from flightinfo.services.flight_service import FlightPage, FlightService, build_search_filters

__all__ = ['FlightPage', 'FlightService', 'build_search_filters']
