"""
Seat utilization prediction and community pricing.

This module provides:
- Occupancy prediction with confidence and risk tier
- Discount recommendations targeted at community/leisure audiences
- Cancellation risk scoring

Predictions are heuristic: they scale the current load factor by time,
route popularity and price competitiveness multipliers.
"""

from datetime import datetime
from typing import Callable, List, Optional
import logging
import numpy as np

from core.models import (
    Flight, SeatUtilization, PricingRecommendation, CancellationRisk,
    RiskLevel, TargetAudience, Urgency
)
from pricing.calculator import round_half_up


MAJOR_AIRPORTS = frozenset({"JFK", "LAX", "ORD", "ATL", "DFW", "DEN", "SFO", "LAS"})

MAX_PREDICTED_OCCUPANCY = 95
HOURS_IN_WEEK = 168

# Seats a discount can realistically fill
MAX_SEATS_FROM_PRICING = 30


class SeatUtilizationPredictor:
    """Predict final occupancy for a flight."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or datetime.now

    @staticmethod
    def time_multiplier(hours_until_departure: float) -> float:
        """Closer to departure the current load factor is more telling."""
        return max(0.5, 1 - hours_until_departure / HOURS_IN_WEEK)

    @staticmethod
    def route_popularity_multiplier(origin: str, destination: str) -> float:
        origin_major = origin in MAJOR_AIRPORTS
        destination_major = destination in MAJOR_AIRPORTS
        if origin_major and destination_major:
            return 1.1
        if origin_major or destination_major:
            return 1.05
        return 0.95

    @staticmethod
    def price_competitiveness_multiplier(price: float) -> float:
        """Lower fares attract more demand."""
        if price < 150:
            return 1.15
        if price < 250:
            return 1.05
        if price < 350:
            return 1.0
        return 0.9

    @staticmethod
    def recommendations(occupancy: float, empty_seats: int, hours_until: float) -> List[str]:
        recommendations = []

        if occupancy < 50:
            recommendations.append("Consider flight consolidation or cancellation")
            recommendations.append("Implement aggressive community pricing")

        if occupancy < 70 and hours_until < 48:
            recommendations.append("Activate last-minute pricing strategy")
            recommendations.append("Target local community outreach")

        if empty_seats > 50:
            recommendations.append("Offer group booking incentives")
            recommendations.append("Consider aircraft downsizing for future schedules")

        if hours_until > 72 and occupancy < 60:
            recommendations.append("Adjust marketing spend for this route")
            recommendations.append("Consider route timing optimization")

        return recommendations

    def predict(self, flight: Flight) -> SeatUtilization:
        """
        Predict occupancy for a flight.

        Args:
            flight: Flight to analyze

        Returns:
            SeatUtilization with rounded occupancy and confidence
        """
        hours_until = flight.hours_until_departure(self.clock())
        time_mult = self.time_multiplier(hours_until)

        predicted = min(
            MAX_PREDICTED_OCCUPANCY,
            flight.occupancy
            * time_mult
            * self.route_popularity_multiplier(flight.origin, flight.destination)
            * self.price_competitiveness_multiplier(flight.price)
        )
        confidence = min(95, 60 + time_mult * 35)
        empty_seats = max(0, flight.total_seats - round_half_up(flight.total_seats * predicted / 100))

        if predicted < 50:
            risk_level = RiskLevel.HIGH
        elif predicted < 70:
            risk_level = RiskLevel.MEDIUM
        else:
            risk_level = RiskLevel.LOW

        return SeatUtilization(
            flight_id=flight.id,
            predicted_occupancy=round_half_up(predicted),
            confidence=round_half_up(confidence),
            empty_seats=empty_seats,
            risk_level=risk_level,
            recommendations=self.recommendations(predicted, empty_seats, hours_until)
        )


class CommunityPricingEngine:
    """
    Discount recommendations driven by predicted occupancy.

    Discount bands (percent):
    - occupancy < 40: 40-60, community audience, high urgency
    - occupancy < 60: 20-40, community audience, medium urgency
    - occupancy < 80: 10-25, leisure audience, low urgency
    - otherwise: no discount
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.logger = logging.getLogger('CommunityPricingEngine')

    def recommend(self, flight: Flight, utilization: SeatUtilization) -> PricingRecommendation:
        occupancy = utilization.predicted_occupancy
        discount = 0.0
        audience = TargetAudience.LEISURE
        urgency = Urgency.LOW

        if occupancy < 40:
            discount = 40 + self.rng.random() * 20
            urgency = Urgency.HIGH
            audience = TargetAudience.COMMUNITY
        elif occupancy < 60:
            discount = 20 + self.rng.random() * 20
            urgency = Urgency.MEDIUM
            audience = TargetAudience.COMMUNITY
        elif occupancy < 80:
            discount = 10 + self.rng.random() * 15

        return PricingRecommendation(
            flight_id=flight.id,
            current_price=flight.price,
            recommended_price=round_half_up(flight.price * (1 - discount / 100)),
            discount=round_half_up(discount),
            target_audience=audience,
            urgency=urgency
        )

    @staticmethod
    def revenue_impact(flight: Flight, recommendation: PricingRecommendation) -> int:
        """Extra revenue from seats the discount is expected to fill."""
        additional_seats = min(
            flight.empty_seats,
            round_half_up(recommendation.discount / 100 * MAX_SEATS_FROM_PRICING)
        )
        return additional_seats * recommendation.recommended_price


class CancellationRiskAssessor:
    """Score the risk that a flight is cancelled or consolidated."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or datetime.now

    def assess(self, flight: Flight, utilization: SeatUtilization) -> CancellationRisk:
        occupancy = utilization.predicted_occupancy
        risk_score = 0
        factors = []

        if occupancy < 40:
            risk_score += 40
            factors.append("Very low predicted occupancy")
        elif occupancy < 60:
            risk_score += 20
            factors.append("Below-average occupancy")

        hours_until = flight.hours_until_departure(self.clock())
        if hours_until > 48 and occupancy < 50:
            risk_score += 25
            factors.append("Low advance bookings")

        if flight.price < 200 and occupancy < 70:
            risk_score += 15
            factors.append("Low-margin route with poor performance")

        recommendation = "Monitor closely"
        if risk_score > 60:
            recommendation = "Consider consolidation or cancellation"
        elif risk_score > 40:
            recommendation = "Implement aggressive marketing"

        return CancellationRisk(
            flight_id=flight.id,
            risk_score=min(100, risk_score),
            factors=factors,
            recommendation=recommendation
        )
