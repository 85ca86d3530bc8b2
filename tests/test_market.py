"""
Tests for MarketConditionsGenerator
===================================
"""

import pytest
from datetime import date, datetime, time

from core.config import PricingConfig
from core.models import DemandLevel
from pricing.market import MarketConditionsGenerator


class TestDemandLevel:
    """Demand classification from route popularity and time to departure."""

    def test_popular_route_close_to_departure_is_high(self, make_flight, clock):
        generator = MarketConditionsGenerator(seed=1, clock=clock)
        flight = make_flight(date=date(2025, 7, 16), departure_time=time(10, 0))

        conditions = generator.generate(flight)

        assert conditions.hours_to_departure == pytest.approx(22.0)
        assert conditions.demand_level == DemandLevel.HIGH

    def test_popular_route_within_week_is_medium(self, make_flight, clock):
        generator = MarketConditionsGenerator(seed=1, clock=clock)
        flight = make_flight(date=date(2025, 7, 20))  # 122 hours out

        assert generator.generate(flight).demand_level == DemandLevel.MEDIUM

    def test_popular_route_far_out_is_low(self, make_flight, clock):
        generator = MarketConditionsGenerator(seed=1, clock=clock)
        flight = make_flight(date=date(2025, 8, 30))

        assert generator.generate(flight).demand_level == DemandLevel.LOW

    def test_unpopular_route_is_low(self, make_flight, clock):
        generator = MarketConditionsGenerator(seed=1, clock=clock)
        flight = make_flight(origin="BOS", destination="DEN", date=date(2025, 7, 16))

        assert generator.generate(flight).demand_level == DemandLevel.LOW

    def test_custom_popular_routes(self, make_flight, clock):
        config = PricingConfig(popular_routes=frozenset({"BOS-DEN"}))
        generator = MarketConditionsGenerator(config=config, seed=1, clock=clock)
        flight = make_flight(origin="BOS", destination="DEN", date=date(2025, 7, 16))

        assert generator.generate(flight).demand_level == DemandLevel.HIGH


class TestMarketSignals:
    """Seasonality, hours to departure and random components."""

    def test_departed_flight_has_zero_hours(self, make_flight, clock):
        generator = MarketConditionsGenerator(seed=1, clock=clock)
        flight = make_flight(date=date(2025, 7, 1))

        assert generator.generate(flight).hours_to_departure == 0.0

    def test_high_season_multiplier(self, make_flight, clock):
        generator = MarketConditionsGenerator(seed=1, clock=clock)
        assert generator.generate(make_flight()).seasonal_multiplier == 1.1

    def test_low_season_multiplier(self, make_flight):
        generator = MarketConditionsGenerator(seed=1, clock=lambda: datetime(2025, 1, 10, 9, 0))
        assert generator.generate(make_flight()).seasonal_multiplier == 0.95

    def test_configurable_season_months(self, make_flight, clock):
        config = PricingConfig(high_season_months=(6, 9))
        generator = MarketConditionsGenerator(config=config, seed=1, clock=clock)

        assert generator.generate(make_flight()).seasonal_multiplier == 0.95

    def test_random_components_within_bounds(self, make_flight, clock):
        generator = MarketConditionsGenerator(seed=7, clock=clock)
        flight = make_flight(price=250)

        for _ in range(200):
            conditions = generator.generate(flight)
            assert 200 <= conditions.competitor_price <= 300
            assert -0.1 <= conditions.weather_impact <= 0.1

    def test_same_seed_is_reproducible(self, make_flight, clock):
        flight = make_flight()
        first = MarketConditionsGenerator(seed=123, clock=clock).generate(flight)
        second = MarketConditionsGenerator(seed=123, clock=clock).generate(flight)

        assert first == second

    def test_stub_random_source(self, make_flight, clock, stub_rng):
        generator = MarketConditionsGenerator(rng=stub_rng, clock=clock)
        conditions = generator.generate(make_flight(price=300))

        assert conditions.competitor_price == pytest.approx(300)
        assert conditions.weather_impact == pytest.approx(0.0)
