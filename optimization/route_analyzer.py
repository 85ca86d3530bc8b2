"""
Per-route schedule, frequency and aircraft analysis.

Heuristic: morning departures are assumed to perform better, and route
load factor drives frequency and aircraft size recommendations.
"""

from typing import List, Sequence, Tuple
import logging

from core.models import Flight, Route, RouteOptimization, ImplementationHorizon
from optimization.scenarios import clamp_frequency
from pricing.calculator import round_half_up


MORNING_CUTOFF_HOUR = 12


def _average_load_factor(flights: Sequence[Flight]) -> float:
    """Mean load factor (0.0 to 1.0), zero for no flights."""
    if not flights:
        return 0.0
    return sum(f.load_factor for f in flights) / len(flights)


class RouteAnalyzer:
    """Recommend an optimized schedule for each route."""

    def __init__(self):
        self.logger = logging.getLogger('RouteAnalyzer')

    @staticmethod
    def optimal_timing(flights: Sequence[Flight]) -> Tuple[str, float]:
        morning = [f for f in flights if f.departure_time.hour < MORNING_CUTOFF_HOUR]
        avg = _average_load_factor(morning)
        optimal_time = "08:00" if avg > 0.7 else "14:00"
        return optimal_time, max(0.0, (avg - 0.6) * 100)

    @staticmethod
    def optimal_frequency(route: Route, avg_occupancy: float) -> Tuple[int, float]:
        """Frequency and improvement from average occupancy (percentage)."""
        if avg_occupancy > 85:
            return clamp_frequency(route.frequency + 3), 15
        if avg_occupancy < 60:
            return clamp_frequency(route.frequency - 2), 10
        return route.frequency, 0

    @staticmethod
    def optimal_aircraft(flights: Sequence[Flight]) -> Tuple[str, float]:
        avg = _average_load_factor(flights)
        if avg > 0.85:
            return "Boeing 777", 12
        if avg < 0.6:
            return "Airbus A320", 8
        return "Boeing 737", 0

    @staticmethod
    def implementation_horizon(expected_improvement: float) -> ImplementationHorizon:
        if expected_improvement > 20:
            return ImplementationHorizon.IMMEDIATE
        if expected_improvement < 10:
            return ImplementationHorizon.LONG_TERM
        return ImplementationHorizon.NEXT_SEASON

    def analyze(self, route: Route, flights: Sequence[Flight]) -> RouteOptimization:
        """
        Analyze one route.

        Args:
            route: Route to analyze
            flights: All flights; only those serving the route are used

        Returns:
            RouteOptimization with the recommended schedule
        """
        route_flights = [f for f in flights if route.serves(f)]
        avg_occupancy = _average_load_factor(route_flights) * 100

        departure_time, timing_improvement = self.optimal_timing(route_flights)
        frequency, frequency_improvement = self.optimal_frequency(route, avg_occupancy)
        aircraft, aircraft_improvement = self.optimal_aircraft(route_flights)

        components = [
            route.average_load_factor,
            timing_improvement,
            frequency_improvement,
            aircraft_improvement,
        ]
        expected = sum(components) / len(components)

        return RouteOptimization(
            route_id=route.id,
            current_performance=route.average_load_factor,
            departure_time=departure_time,
            frequency=frequency,
            aircraft=aircraft,
            expected_improvement=round_half_up(expected),
            implementation=self.implementation_horizon(expected)
        )

    def analyze_all(self, routes: Sequence[Route], flights: Sequence[Flight]) -> List[RouteOptimization]:
        results = [self.analyze(route, flights) for route in routes]
        self.logger.info(f"Analyzed {len(results)} routes")
        return results
