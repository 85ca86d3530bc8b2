"""
Optimization scenario generation.

Produces a fixed catalogue of four scenarios. Change lists are derived
from the flight and route data; projected impact, complexity and time to
implement are declared constants per scenario kind.
"""

from dataclasses import dataclass
from datetime import time
from enum import Enum
from typing import Dict, List, Sequence
import logging

from core.models import (
    Flight, Route, Seasonality, ComplexityTier, OptimizationScenario,
    ScenarioChanges, ProjectedImpact, ScheduleAdjustment, FrequencyChange,
    AircraftChange, RouteConsolidation
)


class ScenarioKind(Enum):
    """Scenario identifiers."""
    PEAK_TIME = "peak-time-optimization"
    CONSOLIDATION = "route-consolidation"
    AIRCRAFT_RIGHTSIZING = "aircraft-rightsizing"
    FREQUENCY = "frequency-optimization"


@dataclass(frozen=True)
class ScenarioDefinition:
    """Declared, data-independent properties of a scenario kind."""
    name: str
    description: str
    impact: ProjectedImpact
    complexity: ComplexityTier
    time_to_implement: str


SCENARIO_DEFINITIONS: Dict[ScenarioKind, ScenarioDefinition] = {
    ScenarioKind.PEAK_TIME: ScenarioDefinition(
        name="Peak Time Schedule Optimization",
        description="Adjust flight times to match peak demand periods and reduce off-peak empty seats",
        impact=ProjectedImpact(
            load_factor_improvement=12,
            revenue_increase=180000,
            cost_savings=45000,
            empty_seats_reduction=320
        ),
        complexity=ComplexityTier.MEDIUM,
        time_to_implement="2-4 weeks"
    ),
    ScenarioKind.CONSOLIDATION: ScenarioDefinition(
        name="Low-Performance Route Consolidation",
        description="Merge underperforming flights to improve load factors and reduce operational costs",
        impact=ProjectedImpact(
            load_factor_improvement=18,
            revenue_increase=95000,
            cost_savings=125000,
            empty_seats_reduction=450
        ),
        complexity=ComplexityTier.HIGH,
        time_to_implement="6-8 weeks"
    ),
    ScenarioKind.AIRCRAFT_RIGHTSIZING: ScenarioDefinition(
        name="Aircraft Capacity Optimization",
        description="Match aircraft size to route demand to minimize empty seats and maximize efficiency",
        impact=ProjectedImpact(
            load_factor_improvement=15,
            revenue_increase=220000,
            cost_savings=85000,
            empty_seats_reduction=380
        ),
        complexity=ComplexityTier.MEDIUM,
        time_to_implement="4-6 weeks"
    ),
    ScenarioKind.FREQUENCY: ScenarioDefinition(
        name="Route Frequency Adjustment",
        description="Optimize flight frequency based on demand patterns and seasonal variations",
        impact=ProjectedImpact(
            load_factor_improvement=10,
            revenue_increase=150000,
            cost_savings=65000,
            empty_seats_reduction=280
        ),
        complexity=ComplexityTier.LOW,
        time_to_implement="1-2 weeks"
    ),
}

# Schedule
PEAK_DEPARTURE = time(9, 0)
OFF_PEAK_EARLY_HOUR = 8  # Departures before 08:00
OFF_PEAK_LATE_HOUR = 20  # Departures from 21:00
MAX_SCHEDULE_ADJUSTMENTS = 5

# Consolidation
CONSOLIDATION_LOAD_FACTOR = 0.6
MAX_CONSOLIDATIONS = 3

# Aircraft
SMALL_AIRCRAFT = ("Airbus A320", 150)
LARGE_AIRCRAFT = ("Boeing 777", 300)
MAX_AIRCRAFT_CHANGES = 6

# Weekly frequency bounds
MIN_WEEKLY_FREQUENCY = 7
MAX_WEEKLY_FREQUENCY = 21


def clamp_frequency(frequency: int) -> int:
    return max(MIN_WEEKLY_FREQUENCY, min(MAX_WEEKLY_FREQUENCY, frequency))


def shift_arrival(new_departure: time, old_departure: time, old_arrival: time) -> time:
    """Arrival time for a new departure, preserving the block time."""
    old_dep_minutes = old_departure.hour * 60 + old_departure.minute
    old_arr_minutes = old_arrival.hour * 60 + old_arrival.minute
    # Overnight flights arrive "before" they depart on the clock
    duration = (old_arr_minutes - old_dep_minutes) % (24 * 60)

    new_arr_minutes = (new_departure.hour * 60 + new_departure.minute + duration) % (24 * 60)
    return time(new_arr_minutes // 60, new_arr_minutes % 60)


class ScenarioGenerator:
    """
    Generate the optimization scenario catalogue.

    Always returns exactly four scenarios, in this order:
    peak-time, consolidation, aircraft right-sizing, frequency.
    """

    def __init__(self):
        self.logger = logging.getLogger('ScenarioGenerator')

    def generate(self, flights: Sequence[Flight], routes: Sequence[Route]) -> List[OptimizationScenario]:
        """
        Build the scenario catalogue for a flight and route set.

        Args:
            flights: Current flights
            routes: Current routes

        Returns:
            List of four OptimizationScenario objects
        """
        scenarios = [
            self._build(ScenarioKind.PEAK_TIME, ScenarioChanges(
                schedule_adjustments=self.peak_time_adjustments(flights)
            )),
            self._build(ScenarioKind.CONSOLIDATION, ScenarioChanges(
                route_consolidations=self.consolidation_recommendations(flights),
                frequency_changes=self.frequency_adjustments(routes)
            )),
            self._build(ScenarioKind.AIRCRAFT_RIGHTSIZING, ScenarioChanges(
                aircraft_changes=self.aircraft_optimizations(flights)
            )),
            self._build(ScenarioKind.FREQUENCY, ScenarioChanges(
                frequency_changes=self.smart_frequency_changes(routes, flights)
            )),
        ]
        self.logger.info(
            f"Generated {len(scenarios)} scenarios for {len(flights)} flights, {len(routes)} routes"
        )
        return scenarios

    @staticmethod
    def _build(kind: ScenarioKind, changes: ScenarioChanges) -> OptimizationScenario:
        definition = SCENARIO_DEFINITIONS[kind]
        return OptimizationScenario(
            id=kind.value,
            name=definition.name,
            description=definition.description,
            changes=changes,
            projected_impact=definition.impact,
            implementation_complexity=definition.complexity,
            time_to_implement=definition.time_to_implement
        )

    @staticmethod
    def peak_time_adjustments(flights: Sequence[Flight]) -> List[ScheduleAdjustment]:
        """Move off-peak departures to the morning peak."""
        off_peak = [
            f for f in flights
            if f.departure_time.hour < OFF_PEAK_EARLY_HOUR or f.departure_time.hour > OFF_PEAK_LATE_HOUR
        ]
        return [
            ScheduleAdjustment(
                flight_id=f.id,
                new_departure_time=PEAK_DEPARTURE,
                new_arrival_time=shift_arrival(PEAK_DEPARTURE, f.departure_time, f.arrival_time)
            )
            for f in off_peak[:MAX_SCHEDULE_ADJUSTMENTS]
        ]

    @staticmethod
    def consolidation_recommendations(flights: Sequence[Flight]) -> List[RouteConsolidation]:
        """Pair up poorly loaded flights, in catalog order."""
        low_performance = [f for f in flights if f.load_factor < CONSOLIDATION_LOAD_FACTOR]

        consolidations = []
        for i in range(0, len(low_performance) - 1, 2):
            first, second = low_performance[i], low_performance[i + 1]
            consolidations.append(RouteConsolidation(
                flight_ids=[first.id, second.id],
                consolidated_flight_id=f"CONSOLIDATED_{first.id}_{second.id}"
            ))
            if len(consolidations) >= MAX_CONSOLIDATIONS:
                break
        return consolidations

    @staticmethod
    def frequency_adjustments(routes: Sequence[Route]) -> List[FrequencyChange]:
        """Frequency change per route from its average load factor."""
        changes = []
        for route in routes:
            new_frequency = route.frequency
            if route.average_load_factor > 85:
                new_frequency = clamp_frequency(route.frequency + 2)
            elif route.average_load_factor < 60:
                new_frequency = clamp_frequency(route.frequency - 1)
            changes.append(FrequencyChange(route_id=route.id, new_frequency=new_frequency))
        return changes

    @staticmethod
    def aircraft_optimizations(flights: Sequence[Flight]) -> List[AircraftChange]:
        """Downsize empty flights, upsize full ones."""
        changes = []
        for flight in flights:
            new_aircraft, new_capacity = flight.aircraft, flight.total_seats

            if flight.load_factor < 0.5 and flight.total_seats > 150:
                new_aircraft, new_capacity = SMALL_AIRCRAFT
            elif flight.load_factor > 0.9 and flight.total_seats < 250:
                new_aircraft, new_capacity = LARGE_AIRCRAFT

            if new_aircraft == flight.aircraft and new_capacity == flight.total_seats:
                continue
            changes.append(AircraftChange(
                flight_id=flight.id,
                new_aircraft=new_aircraft,
                new_capacity=new_capacity
            ))
        return changes[:MAX_AIRCRAFT_CHANGES]

    @staticmethod
    def smart_frequency_changes(routes: Sequence[Route], flights: Sequence[Flight]) -> List[FrequencyChange]:
        """Seasonal and performance-based frequency per route."""
        changes = []
        for route in routes:
            route_flights = [f for f in flights if route.serves(f)]
            new_frequency = route.frequency

            if route_flights:
                avg_load_factor = sum(f.load_factor for f in route_flights) / len(route_flights)
                if route.seasonality == Seasonality.HIGH and avg_load_factor > 0.8:
                    new_frequency = clamp_frequency(route.frequency + 3)
                elif route.seasonality == Seasonality.LOW and avg_load_factor < 0.6:
                    new_frequency = clamp_frequency(route.frequency - 2)

            changes.append(FrequencyChange(route_id=route.id, new_frequency=new_frequency))
        return changes
