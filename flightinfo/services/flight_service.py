"""
Flight query service.

Sits between the API layer and the database:
- Maps Flight entities to FlightResponse DTOs (and requests to entities)
- Pages through the flight table in id order
- Applies partial updates field by field
- Builds search filters from whichever criteria were supplied

Not-found is reported through the return value (None / False), never by
raising. Database errors propagate to the caller unchanged.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import ColumnElement, and_, func, select
from sqlalchemy.orm import Session

from flightinfo.config import config
from flightinfo.models import Flight
from flightinfo.schemas import CreateFlightRequest, FlightResponse, UpdateFlightRequest

logger = logging.getLogger(__name__)

# Ids outside the signed 64-bit INTEGER range can never be stored
MAX_FLIGHT_ID = 2 ** 63 - 1


@dataclass
class FlightPage:
    """One page of flights plus the (clamped) paging parameters used."""
    items: List[FlightResponse]
    total_count: int
    page_number: int
    page_size: int


@dataclass
class PageRequest:
    """Paging parameters clamped into their valid range."""
    page_number: int = 1
    page_size: int = config.pagination.default_page_size

    @classmethod
    def clamp(cls, page_number: int, page_size: int) -> 'PageRequest':
        if page_number < 1:
            page_number = 1
        if page_size < 1:
            page_size = config.pagination.default_page_size
        if page_size > config.pagination.max_page_size:
            page_size = config.pagination.max_page_size
        return cls(page_number=page_number, page_size=page_size)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


def _day_start(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def build_search_filters(
    airline: Optional[str] = None,
    departure_airport: Optional[str] = None,
    arrival_airport: Optional[str] = None,
    date: Optional[datetime] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List[ColumnElement[bool]]:
    """
    Build one predicate per supplied search criterion.

    Text criteria are case-insensitive substring matches. A complete
    start/end pair selects departures on any calendar day in the inclusive
    range and takes precedence over a single `date`. Day boundaries are
    expressed as [day 00:00, next day 00:00) on the raw timestamp.
    """
    filters: List[ColumnElement[bool]] = []

    if airline:
        filters.append(Flight.airline.icontains(airline, autoescape=True))
    if departure_airport:
        filters.append(Flight.departure_airport.icontains(departure_airport, autoescape=True))
    if arrival_airport:
        filters.append(Flight.arrival_airport.icontains(arrival_airport, autoescape=True))

    if start_date is not None and end_date is not None:
        filters.append(Flight.departure_time >= _day_start(start_date))
        filters.append(Flight.departure_time < _day_start(end_date) + timedelta(days=1))
    elif date is not None:
        filters.append(Flight.departure_time >= _day_start(date))
        filters.append(Flight.departure_time < _day_start(date) + timedelta(days=1))

    return filters


class FlightService:
    """
    CRUD and search operations over the flights table.

    Bound to one session for the lifetime of a request. Every mutation
    re-fetches the row and commits immediately.
    """

    def __init__(self, session: Session):
        self.session = session

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_flights(
        self,
        page_number: int = 1,
        page_size: int = config.pagination.default_page_size,
    ) -> FlightPage:
        """Return one page of flights ordered by id, with the total row count."""
        page = PageRequest.clamp(page_number, page_size)

        total_count = self.session.scalar(select(func.count()).select_from(Flight)) or 0

        flights = self.session.scalars(
            select(Flight)
            .order_by(Flight.id.asc())
            .offset(page.offset)
            .limit(page.page_size)
        ).all()

        return FlightPage(
            items=[self._to_response(f) for f in flights],
            total_count=total_count,
            page_number=page.page_number,
            page_size=page.page_size,
        )

    def get_by_id(self, flight_id: int) -> Optional[FlightResponse]:
        flight = self._find(flight_id)
        return self._to_response(flight) if flight else None

    def search(
        self,
        airline: Optional[str] = None,
        departure_airport: Optional[str] = None,
        arrival_airport: Optional[str] = None,
        date: Optional[datetime] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[FlightResponse]:
        """Return every flight matching all supplied criteria, in id order."""
        filters = build_search_filters(
            airline=airline,
            departure_airport=departure_airport,
            arrival_airport=arrival_airport,
            date=date,
            start_date=start_date,
            end_date=end_date,
        )

        query = select(Flight).order_by(Flight.id.asc())
        if filters:
            query = query.where(and_(*filters))

        flights = self.session.scalars(query).all()
        logger.debug(f'Search matched {len(flights)} flights using {len(filters)} filters')
        return [self._to_response(f) for f in flights]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, request: CreateFlightRequest) -> FlightResponse:
        flight = Flight(
            flight_number=request.flight_number,
            airline=request.airline,
            departure_airport=request.departure_airport,
            arrival_airport=request.arrival_airport,
            departure_time=request.departure_time,
            arrival_time=request.arrival_time,
            status=request.status,
        )

        self.session.add(flight)
        self.session.commit()

        logger.info(f'Created flight {flight.id} ({flight.flight_number})')
        return self._to_response(flight)

    def update(self, flight_id: int, request: UpdateFlightRequest) -> bool:
        """
        Apply a partial update.

        Only fields present in the request overwrite stored values.
        Returns False without touching the database if the flight is missing.
        """
        flight = self._find(flight_id)
        if flight is None:
            return False

        changes = request.changes()
        for name, value in changes.items():
            setattr(flight, name, value)

        self.session.commit()

        logger.info(f'Updated flight {flight_id}: {sorted(changes)}')
        return True

    def delete(self, flight_id: int) -> bool:
        flight = self._find(flight_id)
        if flight is None:
            return False

        self.session.delete(flight)
        self.session.commit()

        logger.info(f'Deleted flight {flight_id}')
        return True

    def _find(self, flight_id: int) -> Optional[Flight]:
        if not 1 <= flight_id <= MAX_FLIGHT_ID:
            return None
        return self.session.get(Flight, flight_id)

    @staticmethod
    def _to_response(flight: Flight) -> FlightResponse:
        return FlightResponse.model_validate(flight)
