from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from flightinfo.app import create_app
from flightinfo.models import Base, Flight, FlightStatus, build_engine, get_session


def make_flight(**overrides) -> Flight:
    fields = dict(
        flight_number='NZ101',
        airline='Air New Zealand',
        departure_airport='AKL',
        arrival_airport='SYD',
        departure_time=datetime(2025, 3, 1, 10, 0),
        arrival_time=datetime(2025, 3, 1, 13, 30),
        status=FlightStatus.SCHEDULED,
    )
    fields.update(overrides)
    return Flight(**fields)


@pytest.fixture
def session():
    engine = build_engine('sqlite://')
    Base.metadata.create_all(engine)
    with Session(engine, expire_on_commit=False) as session:
        yield session
    engine.dispose()


@pytest.fixture
def app():
    app = create_app(database_url='sqlite://')
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed(app):
    """Insert flights straight into the app's database, returning their ids."""
    def _seed(*flights: Flight):
        with get_session() as session:
            session.add_all(flights)
            session.flush()
            return [f.id for f in flights]
    return _seed
