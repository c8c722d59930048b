"""
Flight record API endpoints.

Provides endpoints for:
- GET    /api/flights                - Paginated list of flights
- GET    /api/flights/<id>           - Single flight
- POST   /api/flights                - Create a flight
- PUT    /api/flights/<id>           - Partially update a flight
- DELETE /api/flights/<id>           - Delete a flight
- GET    /api/flights/search         - Filtered search (not paginated)

Every response body is an envelope from flightinfo.schemas. Request
bodies and query strings are validated with pydantic before the service
is called; validation errors are rendered by flightinfo.errors.
"""

import logging
from typing import List

from flask import Blueprint, jsonify, request, url_for
from pydantic import BaseModel

from flightinfo.models import get_session
from flightinfo.schemas import (
    ApiResponse,
    CreateFlightRequest,
    FlightResponse,
    ListFlightsQuery,
    PaginatedResponse,
    SearchFlightsQuery,
    UpdateFlightRequest,
)
from flightinfo.services import FlightService

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')

FLIGHT_NOT_FOUND = 'Flight not found'


def envelope(body: BaseModel, status: int = 200):
    """Serialize a response model with its camelCase field names."""
    return jsonify(body.model_dump(mode='json', by_alias=True)), status


def not_found():
    return envelope(ApiResponse(success=False, message=FLIGHT_NOT_FOUND), 404)


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List flights one page at a time.

    Query parameters:
    - pageNumber: int, 1-based page (default 1, values < 1 become 1)
    - pageSize: int, items per page (default 10, clamped to 1..100)
    """
    query = ListFlightsQuery.model_validate(request.args.to_dict())
    logger.info(f'Getting flights. Page: {query.page_number}, Size: {query.page_size}')

    with get_session() as session:
        page = FlightService(session).list_flights(query.page_number, query.page_size)

    return envelope(PaginatedResponse[FlightResponse].create(
        data=page.items,
        total_count=page.total_count,
        page_number=page.page_number,
        page_size=page.page_size,
    ))


@flights_bp.route('/<int:flight_id>', methods=['GET'])
def get_flight(flight_id: int):
    with get_session() as session:
        flight = FlightService(session).get_by_id(flight_id)

    if flight is None:
        logger.warning(f'Flight with ID {flight_id} not found')
        return not_found()

    return envelope(ApiResponse[FlightResponse](data=flight))


@flights_bp.route('', methods=['POST'])
def create_flight():
    """
    Create a flight from a JSON body carrying every field.

    Responds 201 with a Location header pointing at the new flight.
    """
    flight_request = CreateFlightRequest.model_validate(request.get_json(silent=True))
    logger.info(f'Creating new flight: {flight_request.flight_number}')

    with get_session() as session:
        created = FlightService(session).create(flight_request)

    response, status = envelope(
        ApiResponse[FlightResponse](data=created, message='Flight created successfully'),
        201,
    )
    response.headers['Location'] = url_for('flights.get_flight', flight_id=created.id, _external=True)
    return response, status


@flights_bp.route('/<int:flight_id>', methods=['PUT'])
def update_flight(flight_id: int):
    """Apply only the fields present in the JSON body."""
    update_request = UpdateFlightRequest.model_validate(request.get_json(silent=True))

    with get_session() as session:
        updated = FlightService(session).update(flight_id, update_request)

    if not updated:
        logger.warning(f'Flight with ID {flight_id} not found for update')
        return not_found()

    return envelope(ApiResponse(message='Flight updated successfully'))


@flights_bp.route('/<int:flight_id>', methods=['DELETE'])
def delete_flight(flight_id: int):
    with get_session() as session:
        deleted = FlightService(session).delete(flight_id)

    if not deleted:
        logger.warning(f'Flight with ID {flight_id} not found for delete')
        return not_found()

    return envelope(ApiResponse(message='Flight deleted successfully'))


@flights_bp.route('/search', methods=['GET'])
def search_flights():
    """
    Search flights. All criteria are optional and combined with AND.

    Query parameters:
    - airline, departureAirport, arrivalAirport: case-insensitive substring
    - date: departure calendar date
    - startDate, endDate: inclusive departure date range (both required;
      overrides date)
    """
    query = SearchFlightsQuery.model_validate(request.args.to_dict())
    logger.info(
        f'Searching flights. Airline: {query.airline}, '
        f'Dep: {query.departure_airport}, Arr: {query.arrival_airport}'
    )

    with get_session() as session:
        flights = FlightService(session).search(
            airline=query.airline,
            departure_airport=query.departure_airport,
            arrival_airport=query.arrival_airport,
            date=query.date,
            start_date=query.start_date,
            end_date=query.end_date,
        )

    return envelope(ApiResponse[List[FlightResponse]](data=flights))
