"""
Tests for ScenarioGenerator
===========================
"""

from datetime import time

from core.models import Route, Seasonality, ComplexityTier
from optimization.scenarios import ScenarioGenerator, shift_arrival, clamp_frequency


def route(route_id="R1", origin="JFK", destination="LAX", load_factor=75.0,
          frequency=10, seasonality=Seasonality.MEDIUM):
    return Route(id=route_id, origin=origin, destination=destination, distance=1000,
                 average_load_factor=load_factor, frequency=frequency,
                 seasonality=seasonality)


class TestScenarioCatalogue:

    def test_exactly_four_fixed_scenarios(self, sample_flights, sample_routes):
        scenarios = ScenarioGenerator().generate(sample_flights, sample_routes)

        assert [s.id for s in scenarios] == [
            "peak-time-optimization",
            "route-consolidation",
            "aircraft-rightsizing",
            "frequency-optimization",
        ]

    def test_declared_impacts(self, sample_flights, sample_routes):
        scenarios = {s.id: s for s in ScenarioGenerator().generate(sample_flights, sample_routes)}

        peak = scenarios["peak-time-optimization"]
        assert peak.projected_impact.revenue_increase == 180000
        assert peak.projected_impact.cost_savings == 45000
        assert peak.implementation_complexity == ComplexityTier.MEDIUM
        assert peak.time_to_implement == "2-4 weeks"
        assert scenarios["route-consolidation"].implementation_complexity == ComplexityTier.HIGH
        assert scenarios["frequency-optimization"].implementation_complexity == ComplexityTier.LOW

    def test_empty_inputs(self):
        scenarios = ScenarioGenerator().generate([], [])

        assert len(scenarios) == 4
        assert scenarios[0].changes.schedule_adjustments == []
        assert scenarios[2].changes.aircraft_changes == []

    def test_to_dict_omits_absent_change_lists(self, sample_flights, sample_routes):
        peak = ScenarioGenerator().generate(sample_flights, sample_routes)[0]
        changes = peak.to_dict()['changes']

        assert set(changes) == {'schedule_adjustments'}


class TestPeakTimeAdjustments:

    def test_off_peak_moved_to_nine(self, make_flight):
        flights = [
            make_flight(id="EARLY", departure_time=time(6, 0), arrival_time=time(9, 0)),
            make_flight(id="NOON", departure_time=time(12, 0), arrival_time=time(15, 0)),
            make_flight(id="LATE", departure_time=time(22, 0), arrival_time=time(1, 30)),
            make_flight(id="EIGHT_PM", departure_time=time(20, 59), arrival_time=time(23, 0)),
        ]

        adjustments = ScenarioGenerator.peak_time_adjustments(flights)

        assert [a.flight_id for a in adjustments] == ["EARLY", "LATE"]
        assert all(a.new_departure_time == time(9, 0) for a in adjustments)
        assert adjustments[0].new_arrival_time == time(12, 0)
        # Overnight block time of 3h30 preserved
        assert adjustments[1].new_arrival_time == time(12, 30)

    def test_at_most_five(self, make_flight):
        flights = [make_flight(id=f"F{i}", departure_time=time(5, 0), arrival_time=time(7, 0))
                   for i in range(8)]
        assert len(ScenarioGenerator.peak_time_adjustments(flights)) == 5

    def test_shift_arrival_wraps_midnight(self):
        assert shift_arrival(time(23, 0), time(10, 0), time(12, 30)) == time(1, 30)


class TestConsolidation:

    def test_pairs_low_load_flights_in_order(self, make_flight):
        flights = [
            make_flight(id="A", booked_seats=80),
            make_flight(id="B", booked_seats=190),
            make_flight(id="C", booked_seats=100),
            make_flight(id="D", booked_seats=50),
        ]

        consolidations = ScenarioGenerator.consolidation_recommendations(flights)

        assert len(consolidations) == 1
        assert consolidations[0].flight_ids == ["A", "C"]
        assert consolidations[0].consolidated_flight_id == "CONSOLIDATED_A_C"

    def test_at_most_three_pairs(self, make_flight):
        flights = [make_flight(id=f"F{i}", booked_seats=20) for i in range(9)]
        assert len(ScenarioGenerator.consolidation_recommendations(flights)) == 3

    def test_frequency_adjustments_clamped(self):
        routes = [
            route("HIGH", load_factor=90, frequency=20),
            route("LOW", load_factor=50, frequency=7),
            route("MID", load_factor=70, frequency=12),
            route("DROP", load_factor=50, frequency=12),
        ]

        changes = {c.route_id: c.new_frequency for c in ScenarioGenerator.frequency_adjustments(routes)}

        assert changes == {"HIGH": 21, "LOW": 7, "MID": 12, "DROP": 11}


class TestAircraftRightsizing:

    def test_downsize_and_upsize(self, make_flight):
        flights = [
            make_flight(id="EMPTY", total_seats=200, booked_seats=60),
            make_flight(id="PACKED", total_seats=180, booked_seats=175),
            make_flight(id="SMALL_EMPTY", total_seats=150, booked_seats=30),
            make_flight(id="NORMAL", total_seats=200, booked_seats=150),
        ]

        changes = ScenarioGenerator.aircraft_optimizations(flights)

        assert [(c.flight_id, c.new_aircraft, c.new_capacity) for c in changes] == [
            ("EMPTY", "Airbus A320", 150),
            ("PACKED", "Boeing 777", 300),
        ]

    def test_at_most_six(self, make_flight):
        flights = [make_flight(id=f"F{i}", total_seats=200, booked_seats=10) for i in range(10)]
        assert len(ScenarioGenerator.aircraft_optimizations(flights)) == 6


class TestSmartFrequency:

    def test_seasonal_changes(self, make_flight):
        routes = [
            route("PEAK", "JFK", "LAX", frequency=10, seasonality=Seasonality.HIGH),
            route("QUIET", "BOS", "DEN", frequency=10, seasonality=Seasonality.LOW),
            route("NONE", "SEA", "LAS", frequency=10, seasonality=Seasonality.LOW),
        ]
        flights = [
            make_flight(id="F1", booked_seats=180),
            make_flight(id="F2", origin="BOS", destination="DEN", booked_seats=80),
        ]

        changes = {c.route_id: c.new_frequency
                   for c in ScenarioGenerator.smart_frequency_changes(routes, flights)}

        assert changes == {"PEAK": 13, "QUIET": 8, "NONE": 10}

    def test_clamp_frequency(self):
        assert clamp_frequency(3) == 7
        assert clamp_frequency(30) == 21
        assert clamp_frequency(14) == 14
