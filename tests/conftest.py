"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for all tests.
"""

import pytest
from datetime import date, datetime, time
from typing import Callable

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.catalog import FlightCatalog
from core.config import PricingConfig
from core.models import Flight, Route, Seasonality


FIXED_NOW = datetime(2025, 7, 15, 12, 0)  # High season


class StubRandom:
    """
    Deterministic stand-in for ``numpy.random.Generator``.

    ``uniform`` returns the point at ``position`` within the range and
    ``random`` returns ``position`` itself.
    """

    def __init__(self, position: float = 0.5):
        self.position = position

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.position

    def random(self) -> float:
        return self.position


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def stub_rng() -> StubRandom:
    """Random source with neutral market signals (competitor at par, no weather)."""
    return StubRandom(0.5)


@pytest.fixture
def config() -> PricingConfig:
    return PricingConfig(random_seed=42)


@pytest.fixture
def make_flight() -> Callable[..., Flight]:
    """Factory for flights with sensible defaults."""
    def _make(**overrides) -> Flight:
        values = dict(
            id="F1",
            flight_number="AA100",
            airline="American Airlines",
            origin="JFK",
            destination="LAX",
            departure_time=time(14, 0),
            arrival_time=time(17, 0),
            aircraft="Boeing 737",
            total_seats=200,
            booked_seats=100,
            price=300,
            date=date(2025, 7, 20),
        )
        values.update(overrides)
        return Flight(**values)
    return _make


@pytest.fixture
def sample_flights(make_flight):
    return [
        make_flight(),
        make_flight(id="F2", flight_number="UA200", origin="ORD", destination="SFO",
                    departure_time=time(6, 0), arrival_time=time(8, 30),
                    total_seats=100, booked_seats=90, price=100),
        make_flight(id="F3", flight_number="DL300", origin="BOS", destination="DEN",
                    departure_time=time(22, 0), arrival_time=time(1, 0),
                    total_seats=180, booked_seats=54, price=150, date=date(2025, 7, 16)),
    ]


@pytest.fixture
def sample_routes():
    return [
        Route(id="R1", origin="JFK", destination="LAX", distance=3983,
              average_load_factor=88, frequency=14, seasonality=Seasonality.HIGH),
        Route(id="R2", origin="ORD", destination="SFO", distance=2963,
              average_load_factor=75, frequency=10),
        Route(id="R3", origin="BOS", destination="DEN", distance=2824,
              average_load_factor=40, frequency=8, seasonality=Seasonality.LOW),
    ]


@pytest.fixture
def catalog(sample_flights, sample_routes) -> FlightCatalog:
    return FlightCatalog(sample_flights, sample_routes)
