"""
Market condition signals for real-time pricing.

Combines deterministic components (time to departure, seasonality, route
popularity) with bounded random components (competitor price, weather).
In production these would come from external feeds; here they are
simulated from an injectable random generator and clock.
"""

from datetime import datetime
from typing import Callable, Optional
import logging
import threading
import numpy as np

from core.config import PricingConfig
from core.models import Flight, MarketConditions, DemandLevel


Clock = Callable[[], datetime]

# Competitor fares observed within +/-20% of our base fare
COMPETITOR_PRICE_RANGE = (0.8, 1.2)
# Weather shifts demand by at most +/-10%
WEATHER_IMPACT_RANGE = (-0.1, 0.1)

HIGH_DEMAND_WINDOW_HOURS = 48
LOW_DEMAND_HORIZON_HOURS = 168  # One week


class MarketConditionsGenerator:
    """
    Derive market conditions for a flight.

    The generator holds no per-flight state, so one instance may serve
    many flights. Pass ``rng`` (or ``seed``) and ``clock`` to make the
    output reproducible.
    """

    def __init__(
        self,
        config: Optional[PricingConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        clock: Optional[Clock] = None
    ):
        """
        Initialize generator.

        Args:
            config: Engine configuration (popular routes, season months)
            rng: Random generator for competitor and weather signals
            seed: Seed used when no generator is given (falls back to config.random_seed)
            clock: Returns the current time
        """
        self.config = config or PricingConfig()
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else self.config.random_seed)
        self.rng = rng
        self.clock = clock or datetime.now
        self._rng_lock = threading.Lock()
        self.logger = logging.getLogger('MarketConditionsGenerator')

    def is_popular_route(self, flight: Flight) -> bool:
        return flight.route_key in self.config.popular_routes

    def demand_level(self, flight: Flight, hours_to_departure: float) -> DemandLevel:
        """Classify demand from route popularity and time to departure."""
        popular = self.is_popular_route(flight)
        if popular and hours_to_departure < HIGH_DEMAND_WINDOW_HOURS:
            return DemandLevel.HIGH
        if not popular or hours_to_departure > LOW_DEMAND_HORIZON_HOURS:
            return DemandLevel.LOW
        return DemandLevel.MEDIUM

    def seasonal_multiplier(self, now: datetime) -> float:
        if now.month in self.config.high_season_months:
            return self.config.high_season_multiplier
        return self.config.low_season_multiplier

    def competitor_price(self, flight: Flight) -> float:
        low, high = COMPETITOR_PRICE_RANGE
        with self._rng_lock:
            return float(flight.price * self.rng.uniform(low, high))

    def weather_impact(self) -> float:
        low, high = WEATHER_IMPACT_RANGE
        with self._rng_lock:
            return float(self.rng.uniform(low, high))

    def generate(self, flight: Flight) -> MarketConditions:
        """
        Generate market conditions for a flight.

        Args:
            flight: Flight to price

        Returns:
            MarketConditions snapshot for the current time
        """
        now = self.clock()
        hours = flight.hours_until_departure(now)

        conditions = MarketConditions(
            demand_level=self.demand_level(flight, hours),
            competitor_price=self.competitor_price(flight),
            seasonal_multiplier=self.seasonal_multiplier(now),
            hours_to_departure=hours,
            weather_impact=self.weather_impact()
        )
        self.logger.debug(f"{flight.id}: {conditions}")
        return conditions
