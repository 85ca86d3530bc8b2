"""
Tests for seat utilization, community pricing and cancellation risk
===================================================================
"""

import pytest
from datetime import date

from core.models import SeatUtilization, RiskLevel, TargetAudience, Urgency
from pricing.utilization import (
    SeatUtilizationPredictor, CommunityPricingEngine, CancellationRiskAssessor
)


def utilization(occupancy: int, flight_id: str = "F1") -> SeatUtilization:
    return SeatUtilization(
        flight_id=flight_id,
        predicted_occupancy=occupancy,
        confidence=80,
        empty_seats=0,
        risk_level=RiskLevel.MEDIUM
    )


class TestSeatUtilizationPredictor:

    def test_far_out_half_full_flight(self, clock, make_flight):
        result = SeatUtilizationPredictor(clock=clock).predict(make_flight())

        # 50% x 0.5 time x 1.1 route x 1.0 price
        assert result.predicted_occupancy == 28
        assert result.confidence == 78
        assert result.empty_seats == 145
        assert result.risk_level == RiskLevel.HIGH
        assert len(result.recommendations) == 6

    def test_medium_risk(self, clock, make_flight):
        flight = make_flight(origin="BOS", destination="DEN", booked_seats=110,
                             date=date(2025, 7, 15))
        result = SeatUtilizationPredictor(clock=clock).predict(flight)

        assert result.predicted_occupancy == 52
        assert result.risk_level == RiskLevel.MEDIUM

    def test_prediction_capped(self, clock, make_flight):
        flight = make_flight(booked_seats=180, date=date(2025, 7, 15))
        result = SeatUtilizationPredictor(clock=clock).predict(flight)

        assert result.predicted_occupancy == 95
        assert result.risk_level == RiskLevel.LOW
        assert result.recommendations == []

    def test_multipliers(self):
        assert SeatUtilizationPredictor.time_multiplier(0) == 1.0
        assert SeatUtilizationPredictor.time_multiplier(500) == 0.5
        assert SeatUtilizationPredictor.route_popularity_multiplier("JFK", "LAX") == 1.1
        assert SeatUtilizationPredictor.route_popularity_multiplier("JFK", "BOS") == 1.05
        assert SeatUtilizationPredictor.route_popularity_multiplier("BOS", "MIA") == 0.95
        assert SeatUtilizationPredictor.price_competitiveness_multiplier(99) == 1.15
        assert SeatUtilizationPredictor.price_competitiveness_multiplier(200) == 1.05
        assert SeatUtilizationPredictor.price_competitiveness_multiplier(300) == 1.0
        assert SeatUtilizationPredictor.price_competitiveness_multiplier(400) == 0.9


class TestCommunityPricingEngine:

    @pytest.mark.parametrize("occupancy,discount,audience,urgency", [
        (28, 50, TargetAudience.COMMUNITY, Urgency.HIGH),
        (52, 30, TargetAudience.COMMUNITY, Urgency.MEDIUM),
        (70, 18, TargetAudience.LEISURE, Urgency.LOW),
        (95, 0, TargetAudience.LEISURE, Urgency.LOW),
    ])
    def test_discount_bands(self, stub_rng, make_flight, occupancy, discount, audience, urgency):
        engine = CommunityPricingEngine(rng=stub_rng)
        recommendation = engine.recommend(make_flight(), utilization(occupancy))

        assert recommendation.discount == discount
        assert recommendation.target_audience == audience
        assert recommendation.urgency == urgency

    def test_recommended_price_and_revenue_impact(self, stub_rng, make_flight):
        engine = CommunityPricingEngine(rng=stub_rng)
        flight = make_flight()
        recommendation = engine.recommend(flight, utilization(28))

        assert recommendation.recommended_price == 150
        # min(100 empty seats, 15 filled by pricing) x 150
        assert engine.revenue_impact(flight, recommendation) == 2250

    def test_seeded_discounts_within_bands(self, make_flight):
        engine = CommunityPricingEngine(seed=11)
        for _ in range(50):
            recommendation = engine.recommend(make_flight(), utilization(30))
            assert 40 <= recommendation.discount <= 60


class TestCancellationRiskAssessor:

    def test_high_risk(self, clock, make_flight):
        risk = CancellationRiskAssessor(clock=clock).assess(make_flight(), utilization(28))

        assert risk.risk_score == 65
        assert risk.recommendation == "Consider consolidation or cancellation"
        assert risk.factors == ["Very low predicted occupancy", "Low advance bookings"]

    def test_marketing_band(self, clock, make_flight):
        risk = CancellationRiskAssessor(clock=clock).assess(make_flight(), utilization(45))

        assert risk.risk_score == 45
        assert risk.recommendation == "Implement aggressive marketing"

    def test_low_margin_route(self, clock, make_flight):
        risk = CancellationRiskAssessor(clock=clock).assess(make_flight(price=150), utilization(65))

        assert risk.risk_score == 15
        assert risk.recommendation == "Monitor closely"
