from datetime import datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from conftest import make_flight
from flightinfo.models import FlightStatus
from flightinfo.schemas import (
    ApiResponse,
    CreateFlightRequest,
    FlightResponse,
    ListFlightsQuery,
    PaginatedResponse,
    SearchFlightsQuery,
    UpdateFlightRequest,
    ValidationErrorResponse,
)

VALID_BODY = {
    'flightNumber': 'NZ101',
    'airline': 'Air New Zealand',
    'departureAirport': 'AKL',
    'arrivalAirport': 'SYD',
    'departureTime': '2025-03-01T10:00:00',
    'arrivalTime': '2025-03-01T13:30:00',
    'status': 'Scheduled',
}


# -----------------------------------------------------------------------------
# PaginatedResponse
# -----------------------------------------------------------------------------

@pytest.mark.parametrize('total_count, page_number, page_size, total_pages, has_previous, has_next', [
    (0, 1, 10, 0, False, False),
    (1, 1, 10, 1, False, False),
    (10, 1, 10, 1, False, False),
    (11, 1, 10, 2, False, True),
    (25, 2, 10, 3, True, True),
    (25, 3, 10, 3, True, False),
    (25, 5, 10, 3, True, False),
    (2, 1, 1, 2, False, True),
])
def test_paginated_response_page_math(total_count, page_number, page_size, total_pages, has_previous, has_next):
    response = PaginatedResponse.create([], total_count, page_number, page_size)

    assert response.total_pages == total_pages
    assert response.has_previous_page is has_previous
    assert response.has_next_page is has_next
    assert response.success is True
    assert response.message is None


def test_paginated_response_wire_format():
    body = PaginatedResponse.create(['a'], 3, 1, 2).model_dump(mode='json', by_alias=True)

    assert body == {
        'success': True,
        'data': ['a'],
        'pageNumber': 1,
        'pageSize': 2,
        'totalCount': 3,
        'totalPages': 2,
        'hasPreviousPage': False,
        'hasNextPage': True,
        'message': None,
    }


def test_api_response_defaults():
    assert ApiResponse().model_dump(by_alias=True) == {'success': True, 'data': None, 'message': None}


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

def test_create_request_accepts_numeric_status():
    request = CreateFlightRequest.model_validate({**VALID_BODY, 'status': 3})

    assert request.status is FlightStatus.IN_AIR


def test_create_request_rejects_unknown_status():
    with pytest.raises(ValidationError):
        CreateFlightRequest.model_validate({**VALID_BODY, 'status': 'Diverted'})
    with pytest.raises(ValidationError):
        CreateFlightRequest.model_validate({**VALID_BODY, 'status': 7})


def test_create_request_normalizes_aware_times_to_utc():
    request = CreateFlightRequest.model_validate({**VALID_BODY, 'departureTime': '2025-03-01T10:00:00+13:00'})

    assert request.departure_time == datetime(2025, 2, 28, 21, 0)
    assert request.departure_time.tzinfo is None


def test_create_request_does_not_check_time_order():
    request = CreateFlightRequest.model_validate({
        **VALID_BODY,
        'departureTime': '2025-03-02T10:00:00',
        'arrivalTime': '2025-03-01T10:00:00',
    })

    assert request.arrival_time < request.departure_time


def test_update_request_changes_only_supplied_fields():
    request = UpdateFlightRequest.model_validate({'flightNumber': 'NZ9', 'airline': None})

    assert request.changes() == {'flight_number': 'NZ9'}
    assert UpdateFlightRequest().changes() == {}


def test_update_request_enforces_lengths():
    with pytest.raises(ValidationError):
        UpdateFlightRequest.model_validate({'departureAirport': 'AKLX'})


def test_create_request_trims_text():
    request = CreateFlightRequest.model_validate({**VALID_BODY, 'flightNumber': '  NZ1 ', 'departureAirport': ' AKL '})

    assert request.flight_number == 'NZ1'
    assert request.departure_airport == 'AKL'


def test_create_request_rejects_whitespace_only_text():
    with pytest.raises(ValidationError) as exc_info:
        CreateFlightRequest.model_validate({
            **VALID_BODY,
            'flightNumber': '   ',
            'airline': '\t',
            'departureAirport': ' ',
            'arrivalAirport': '  ',
        })

    errors = ValidationErrorResponse.from_validation_error(exc_info.value).errors
    assert set(errors) == {'flightNumber', 'airline', 'departureAirport', 'arrivalAirport'}


def test_update_request_rejects_whitespace_only_text():
    with pytest.raises(ValidationError):
        UpdateFlightRequest.model_validate({'airline': '   '})

    assert UpdateFlightRequest.model_validate({'airline': ' Qantas '}).changes() == {'airline': 'Qantas'}


@pytest.mark.parametrize('field', ['pageNumber', 'pageSize'])
def test_list_query_rejects_values_beyond_32_bits(field):
    with pytest.raises(ValidationError):
        ListFlightsQuery.model_validate({field: str(2 ** 31)})

    query = ListFlightsQuery.model_validate({field: str(-2 ** 31)})
    assert query.model_dump(by_alias=True)[field] == -2 ** 31


def test_search_query_treats_blank_as_missing():
    query = SearchFlightsQuery.model_validate({'airline': '', 'date': '', 'startDate': '2025-03-01'})

    assert query.airline is None
    assert query.date is None
    assert query.start_date == datetime(2025, 3, 1)


# -----------------------------------------------------------------------------
# FlightResponse
# -----------------------------------------------------------------------------

def test_flight_response_renders_status_name():
    flight = make_flight(status=FlightStatus.IN_AIR)
    flight.id = 7

    body = FlightResponse.model_validate(flight).model_dump(mode='json', by_alias=True)

    assert body == {
        'id': 7,
        'flightNumber': 'NZ101',
        'airline': 'Air New Zealand',
        'departureAirport': 'AKL',
        'arrivalAirport': 'SYD',
        'departureTime': '2025-03-01T10:00:00',
        'arrivalTime': '2025-03-01T13:30:00',
        'status': 'InAir',
    }


# -----------------------------------------------------------------------------
# ValidationErrorResponse
# -----------------------------------------------------------------------------

def test_validation_error_response_collects_every_field():
    with pytest.raises(ValidationError) as exc_info:
        CreateFlightRequest.model_validate({
            'flightNumber': 'TOO-LONG-NUMBER',
            'airline': '',
            'departureAirport': 'AKL',
            'departureTime': 'not a time',
            'arrivalTime': '2025-03-01T13:30:00',
            'status': 'Scheduled',
        })

    response = ValidationErrorResponse.from_validation_error(exc_info.value)

    assert response.success is False
    assert response.message == 'Validation failed'
    assert set(response.errors) == {'flightNumber', 'airline', 'arrivalAirport', 'departureTime'}
    assert all(messages for messages in response.errors.values())


def test_validation_error_response_keys_whole_payload_as_body():
    with pytest.raises(ValidationError) as exc_info:
        CreateFlightRequest.model_validate(None)

    response = ValidationErrorResponse.from_validation_error(exc_info.value)

    assert list(response.errors) == ['body']


def test_validation_error_response_falls_back_to_generic_message():
    class SilentModel(BaseModel):
        value: int

        @field_validator('value')
        @classmethod
        def reject(cls, value):
            raise PydanticCustomError('silent', '')

    with pytest.raises(ValidationError) as exc_info:
        SilentModel(value=1)

    response = ValidationErrorResponse.from_validation_error(exc_info.value)

    assert response.errors == {'value': ['Invalid value']}


def test_validation_error_wire_format():
    body = ValidationErrorResponse(errors={'airline': ['Field required']}).model_dump(by_alias=True)

    assert body == {'success': False, 'message': 'Validation failed', 'errors': {'airline': ['Field required']}}


def test_naive_utc_offsets():
    aware = datetime(2025, 3, 1, 0, 30, tzinfo=timezone(timedelta(hours=-5)))
    query = SearchFlightsQuery(date=aware)

    assert query.date == datetime(2025, 3, 1, 5, 30)
