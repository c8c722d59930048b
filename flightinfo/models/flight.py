"""
Flight model - scheduled flight records.

One row per flight. Rows are created, partially updated and hard-deleted
through the flight service; the database assigns the integer id.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import String, Integer, DateTime, Index
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, validates

from flightinfo.models.base import Base

# Column length limits, shared with the request schemas
FLIGHT_NUMBER_MAX_LENGTH = 10
AIRLINE_MAX_LENGTH = 50
AIRPORT_CODE_MAX_LENGTH = 3


class FlightStatus(str, Enum):
    """
    Operational status of a flight.

    Member order matches the numeric codes accepted on input
    (0=Scheduled .. 4=Landed).
    """
    SCHEDULED = 'Scheduled'
    DELAYED = 'Delayed'
    CANCELLED = 'Cancelled'
    IN_AIR = 'InAir'
    LANDED = 'Landed'

    @classmethod
    def from_code(cls, code: int) -> 'FlightStatus':
        members = list(cls)
        if not 0 <= code < len(members):
            raise ValueError(f'Unknown flight status code: {code}')
        return members[code]


class Flight(Base):
    """
    A scheduled flight between two airports.

    Fields:
        id: Database-assigned identity
        flight_number: Carrier flight number (e.g., 'NZ101')
        airline: Operating airline name
        departure_airport: IATA code of origin (e.g., 'AKL')
        arrival_airport: IATA code of destination
        departure_time: Scheduled departure (naive UTC)
        arrival_time: Scheduled arrival (naive UTC)
        status: Current FlightStatus
    """

    __tablename__ = 'flights'

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    flight_number: Mapped[str] = mapped_column(
        String(FLIGHT_NUMBER_MAX_LENGTH),
        nullable=False,
        comment='Carrier flight number'
    )

    airline: Mapped[str] = mapped_column(
        String(AIRLINE_MAX_LENGTH),
        nullable=False,
        index=True,
        comment='Operating airline name'
    )

    departure_airport: Mapped[str] = mapped_column(
        String(AIRPORT_CODE_MAX_LENGTH),
        nullable=False,
        comment='Origin airport code'
    )

    arrival_airport: Mapped[str] = mapped_column(
        String(AIRPORT_CODE_MAX_LENGTH),
        nullable=False,
        comment='Destination airport code'
    )

    departure_time: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        index=True,  # Date and date-range search
        comment='Scheduled departure time (UTC)'
    )

    arrival_time: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        comment='Scheduled arrival time (UTC)'
    )

    status: Mapped[FlightStatus] = mapped_column(
        SAEnum(
            FlightStatus,
            name='flight_status',
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        comment='Flight status'
    )

    __table_args__ = (
        Index('ix_flights_route', 'departure_airport', 'arrival_airport'),
    )

    def __repr__(self) -> str:
        return f'<Flight {self.id} {self.flight_number} {self.departure_airport}->{self.arrival_airport}>'

    # -------------------------------------------------------------------------
    # Attribute validation
    # -------------------------------------------------------------------------

    @validates('flight_number')
    def _validate_flight_number(self, key: str, value: str) -> str:
        return _check_length(key, value, FLIGHT_NUMBER_MAX_LENGTH)

    @validates('airline')
    def _validate_airline(self, key: str, value: str) -> str:
        return _check_length(key, value, AIRLINE_MAX_LENGTH)

    @validates('departure_airport', 'arrival_airport')
    def _validate_airport(self, key: str, value: str) -> str:
        return _check_length(key, value, AIRPORT_CODE_MAX_LENGTH)

    @validates('departure_time', 'arrival_time')
    def _validate_time(self, key: str, value: datetime) -> datetime:
        if value is None:
            raise ValueError(f'{key} is required')
        return value


def _check_length(key: str, value: str, max_length: int) -> str:
    if not value or not value.strip():
        raise ValueError(f'{key} is required')
    if len(value) > max_length:
        raise ValueError(f'{key} must be at most {max_length} characters')
    return value
