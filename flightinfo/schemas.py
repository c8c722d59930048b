"""
Request/response schemas for the flights API.

Pydantic models for the JSON wire format. All fields are exposed with
camelCase aliases (flightNumber, departureAirport, ...) and accept either
the alias or the Python name on input.

Response envelopes:
    ApiResponse          {success, data, message}
    PaginatedResponse    {success, data, pageNumber, pageSize, totalCount,
                          totalPages, hasPreviousPage, hasNextPage, message}
    ValidationErrorResponse {success, message, errors}
"""

import math
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from flightinfo.config import config
from flightinfo.models.flight import (
    AIRLINE_MAX_LENGTH,
    AIRPORT_CODE_MAX_LENGTH,
    FLIGHT_NUMBER_MAX_LENGTH,
    FlightStatus,
)

T = TypeVar('T')

VALIDATION_FAILED_MESSAGE = 'Validation failed'
INVALID_VALUE_MESSAGE = 'Invalid value'


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _to_naive_utc(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _parse_status(value: Any) -> Any:
    """Accept numeric status codes alongside symbolic names."""
    if isinstance(value, int) and not isinstance(value, bool):
        return FlightStatus.from_code(value)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]
StatusInput = Annotated[FlightStatus, BeforeValidator(_parse_status)]

# Required text: surrounding whitespace is trimmed and a blank value is rejected
FlightNumberText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=FLIGHT_NUMBER_MAX_LENGTH)
]
AirlineText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=AIRLINE_MAX_LENGTH)
]
AirportCode = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=AIRPORT_CODE_MAX_LENGTH)
]

# Paging values are bound like 32-bit integers
INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

class CreateFlightRequest(CamelModel):
    """Body of POST /api/flights. Every field is required."""
    flight_number: FlightNumberText
    airline: AirlineText
    departure_airport: AirportCode
    arrival_airport: AirportCode
    departure_time: UtcDatetime
    arrival_time: UtcDatetime
    status: StatusInput


class UpdateFlightRequest(CamelModel):
    """
    Body of PUT /api/flights/<id>.

    Every field is optional. Only fields present in the payload are applied;
    omitted fields and explicit nulls leave the stored value untouched.
    """
    flight_number: Optional[FlightNumberText] = None
    airline: Optional[AirlineText] = None
    departure_airport: Optional[AirportCode] = None
    arrival_airport: Optional[AirportCode] = None
    departure_time: Optional[UtcDatetime] = None
    arrival_time: Optional[UtcDatetime] = None
    status: Optional[StatusInput] = None

    def changes(self) -> Dict[str, Any]:
        """Fields supplied with a value, keyed by attribute name."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ListFlightsQuery(CamelModel):
    """Query string of GET /api/flights. Out-of-range values are clamped by the service."""
    page_number: int = Field(1, ge=INT32_MIN, le=INT32_MAX)
    page_size: int = Field(config.pagination.default_page_size, ge=INT32_MIN, le=INT32_MAX)


class SearchFlightsQuery(CamelModel):
    """Query string of GET /api/flights/search."""
    airline: Optional[str] = None
    departure_airport: Optional[str] = None
    arrival_airport: Optional[str] = None
    date: Optional[UtcDatetime] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None

    @field_validator('*', mode='before')
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------

class FlightResponse(CamelModel):
    """A flight as returned by the API. Status is rendered by name."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    flight_number: str
    airline: str
    departure_airport: str
    arrival_airport: str
    departure_time: datetime
    arrival_time: datetime
    status: str

    @field_validator('status', mode='before')
    @classmethod
    def status_name(cls, value: Any) -> Any:
        if isinstance(value, FlightStatus):
            return value.value
        return value


class ApiResponse(CamelModel, Generic[T]):
    """Uniform envelope for single items, lists and bare acknowledgements."""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class PaginatedResponse(CamelModel, Generic[T]):
    """Envelope for one page of a list, with page navigation metadata."""
    success: bool = True
    data: List[T] = Field(default_factory=list)
    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
    message: Optional[str] = None

    @classmethod
    def create(cls, data: List[T], total_count: int, page_number: int, page_size: int) -> 'PaginatedResponse[T]':
        total_pages = math.ceil(total_count / page_size) if page_size > 0 else 0
        return cls(
            data=data,
            page_number=page_number,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_previous_page=page_number > 1,
            has_next_page=page_number < total_pages,
        )


class ValidationErrorResponse(CamelModel):
    """Envelope listing every field-level validation failure."""
    success: bool = False
    message: str = VALIDATION_FAILED_MESSAGE
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> 'ValidationErrorResponse':
        """
        Collect errors by field.

        Fields are keyed by their wire name; errors on the payload as a
        whole (wrong JSON type, unparseable body) are keyed 'body'.
        """
        errors: Dict[str, List[str]] = {}
        for detail in error.errors():
            field = '.'.join(str(part) for part in detail.get('loc', ())) or 'body'
            errors.setdefault(field, []).append(detail.get('msg') or INVALID_VALUE_MESSAGE)
        return cls(errors=errors)
