"""
Real-time price calculation.

The new price is the base fare scaled by a multiplicative adjustment
factor built from, in order:
1. Demand level
2. Urgency (time to departure vs. predicted occupancy)
3. Competitor pricing
4. Seasonality
5. Weather
"""

from datetime import datetime, timedelta
from typing import Callable, Optional
import logging
import math

from core.config import PricingConfig
from core.models import Flight, MarketConditions, PriceUpdate, DemandLevel
from pricing.state import PricingState


# Demand factors
DEMAND_FACTORS = {
    DemandLevel.HIGH: 1.2,
    DemandLevel.MEDIUM: 1.0,
    DemandLevel.LOW: 0.8,
}

# Price change reasons
REASON_FLASH_SALE = "Flash sale - Low demand detected"
REASON_COMMUNITY_DISCOUNT = "Community discount - Empty seats available"
REASON_HIGH_DEMAND = "High demand pricing"
REASON_LAST_MINUTE = "Last-minute pricing adjustment"
REASON_WEATHER = "Weather-related demand increase"
REASON_MARKET = "Market-based pricing update"


def round_half_up(value: float) -> int:
    """Round to the nearest integer; halves round up (toward positive infinity)."""
    return int(math.floor(value + 0.5))


def calculate_discount(old_price: float, new_price: float) -> int:
    """Percentage reduction from old to new price, never negative."""
    if old_price <= 0:
        return 0
    return max(0, round_half_up((old_price - new_price) / old_price * 100))


class PriceCalculator:
    """
    Multi-factor real-time pricing.

    Every computed price is appended to the shared history and pushed to
    the flight's subscribers and matching price alerts before returning.
    """

    def __init__(
        self,
        state: Optional[PricingState] = None,
        config: Optional[PricingConfig] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.config = config or PricingConfig()
        self.state = state or PricingState.from_config(self.config)
        self.clock = clock or datetime.now
        self.logger = logging.getLogger('PriceCalculator')

    @staticmethod
    def demand_factor(conditions: MarketConditions) -> float:
        return DEMAND_FACTORS[conditions.demand_level]

    @staticmethod
    def urgency_factor(hours_to_departure: float, predicted_occupancy: float) -> float:
        """Closer to departure, pricing reacts harder to occupancy."""
        if hours_to_departure < 24:
            # Last 24 hours
            if predicted_occupancy < 60:
                return 0.6
            if predicted_occupancy > 90:
                return 1.3
        elif hours_to_departure < 72:
            # 1-3 days out
            if predicted_occupancy < 70:
                return 0.8
        return 1.0

    @staticmethod
    def competitor_factor(base_price: float, competitor_price: float) -> float:
        ratio = competitor_price / base_price
        if ratio < 0.9:
            return 0.95  # Follow competitors down
        if ratio > 1.1:
            return 1.05  # Room to go up
        return 1.0

    def adjustment_factor(
        self,
        flight: Flight,
        conditions: MarketConditions,
        predicted_occupancy: float
    ) -> float:
        """Combined multiplicative factor applied to the base price."""
        factor = 1.0
        factor *= self.demand_factor(conditions)
        factor *= self.urgency_factor(conditions.hours_to_departure, predicted_occupancy)
        factor *= self.competitor_factor(flight.price, conditions.competitor_price)
        factor *= conditions.seasonal_multiplier
        factor *= 1 + conditions.weather_impact
        return factor

    @staticmethod
    def price_change_reason(adjustment_factor: float, conditions: MarketConditions) -> str:
        """Human-readable justification, first matching rule wins."""
        if adjustment_factor < 0.7:
            return REASON_FLASH_SALE
        if adjustment_factor < 0.9:
            return REASON_COMMUNITY_DISCOUNT
        if adjustment_factor > 1.2:
            return REASON_HIGH_DEMAND
        if conditions.hours_to_departure < 24:
            return REASON_LAST_MINUTE
        if conditions.weather_impact > 0.1:
            return REASON_WEATHER
        return REASON_MARKET

    def quote(
        self,
        flight: Flight,
        conditions: MarketConditions,
        predicted_occupancy: float
    ) -> PriceUpdate:
        """
        Compute a price update without recording or publishing it.

        Args:
            flight: Flight to price
            conditions: Current market conditions for the flight
            predicted_occupancy: Expected final load factor (0-100)

        Returns:
            PriceUpdate valid for the configured window
        """
        base_price = flight.price
        factor = self.adjustment_factor(flight, conditions, predicted_occupancy)

        new_price = max(0, round_half_up(base_price * factor))
        timestamp = self.clock()

        return PriceUpdate(
            flight_id=flight.id,
            old_price=base_price,
            new_price=new_price,
            discount=calculate_discount(base_price, new_price),
            reason=self.price_change_reason(factor, conditions),
            timestamp=timestamp,
            valid_until=timestamp + timedelta(minutes=self.config.price_validity_minutes),
            adjustment_factor=factor
        )

    def publish(self, update: PriceUpdate) -> None:
        """Record an update and notify subscribers and alerts for its flight."""
        with self.state.flight_lock(update.flight_id):
            self.state.history.append(update)
            self.state.subscriptions.notify(update)
            self.state.alerts.check(update)

    def calculate(
        self,
        flight: Flight,
        conditions: MarketConditions,
        predicted_occupancy: float
    ) -> PriceUpdate:
        """
        Compute, record and publish a new price for a flight.

        Args:
            flight: Flight to price
            conditions: Current market conditions for the flight
            predicted_occupancy: Expected final load factor (0-100)

        Returns:
            The published PriceUpdate
        """
        # Timestamp inside the lock keeps history in creation order
        with self.state.flight_lock(flight.id):
            update = self.quote(flight, conditions, predicted_occupancy)
            self.publish(update)

        self.logger.debug(
            f"Priced {flight.id}: ${update.old_price:.0f} -> ${update.new_price} "
            f"(factor {update.adjustment_factor:.3f}, {update.reason})"
        )
        return update
